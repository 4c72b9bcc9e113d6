"""
Request mapping for the Airwallex payment-intent API.

Pure functions: caller inputs in, request schemas out. Nothing here raises
for missing optional data; absent fields are simply not set.
"""
from __future__ import annotations

import time
from decimal import Decimal
from typing import Optional, Union

from application.dtos.payments import GatewayOptions
from domain.payment.entity import Address, CreditCard, Money
from infrastructure.external.payments.airwallex_schemas import (
    AddressPayload,
    BillingPayload,
    CancelIntentRequest,
    CaptureIntentRequest,
    CardOptions,
    CardPayload,
    ConfirmIntentRequest,
    CreateIntentRequest,
    CreateRefundRequest,
    ExternalRecurringData,
    OrderPayload,
    PaymentMethodOptions,
    PaymentMethodPayload,
    ShippingPayload,
)

SETUP_SUFFIX = "_setup"

# ISO-4217 minor unit exponents that differ from 2
CURRENCY_EXPONENTS = {
    **{c: 0 for c in (
        "BIF", "BYR", "CLP", "CVE", "DJF", "GNF", "ISK", "JPY", "KMF", "KRW",
        "PYG", "RWF", "UGX", "VND", "VUV", "XAF", "XOF", "XPF",
    )},
    **{c: 3 for c in ("BHD", "JOD", "KWD", "OMR", "TND")},
}

TRIGGER_REASONS = {
    "recurring": "scheduled",
    "installment": "scheduled",
    "unscheduled": "unscheduled",
}


# Amount / currency

def select_currency(money: Union[int, Money], options: GatewayOptions, default_currency: str) -> str:
    if options.currency:
        return options.currency
    if isinstance(money, Money) and money.currency:
        return money.currency.upper()
    return default_currency


def format_amount(money: Union[int, Money], currency: str) -> Decimal:
    """Convert minor units to the provider's major-unit decimal for ``currency``."""
    cents = money.cents if isinstance(money, Money) else int(money)
    exponent = CURRENCY_EXPONENTS.get(currency.upper(), 2)
    return Decimal(cents).scaleb(-exponent)


# Correlation identifiers

def generate_timestamp() -> str:
    # Centisecond resolution
    return str(int(round(time.time() * 100)))


def request_id(options: GatewayOptions) -> str:
    return options.request_id or generate_timestamp()


def merchant_order_id(options: GatewayOptions) -> str:
    return options.merchant_order_id or options.order_id or generate_timestamp()


# Instrument / billing

def build_address(address: Address) -> AddressPayload:
    fields = {"country_code": address.country, "street": address.address1}
    # city is documented as required but accepted without it
    if address.city:
        fields["city"] = address.city
    if address.zip:
        fields["postcode"] = address.zip
    if address.state:
        fields["state"] = address.state
    return AddressPayload(**fields)


def build_billing(card: CreditCard, options: GatewayOptions) -> Optional[BillingPayload]:
    if not card.has_name_info:
        return None

    fields = {}
    if options.email:
        fields["email"] = options.email
    if options.phone:
        fields["phone"] = options.phone
    fields["first_name"] = card.first_name
    fields["last_name"] = card.last_name
    billing_address = options.billing_address
    if billing_address is not None and billing_address.has_required_info:
        fields["address"] = build_address(billing_address)
    return BillingPayload(**fields)


def _expiry_year(year: int) -> str:
    year = int(year)
    return str(year + 2000 if year < 100 else year)


def build_payment_method(card: CreditCard, options: GatewayOptions) -> PaymentMethodPayload:
    fields = {
        "expiry_month": f"{int(card.month):02d}",
        "expiry_year": _expiry_year(card.year),
        "number": str(card.number),
        "name": card.full_name,
        "cvc": card.verification_value,
    }
    billing = build_billing(card, options)
    if billing is not None:
        fields["billing"] = billing
    return PaymentMethodPayload(type="card", card=CardPayload(**fields))


# Shipping

def split_names(full_name: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    """Last token is the last name, everything before it the first name."""
    names = (full_name or "").split()
    if not names:
        return None, None
    last_name = names.pop()
    first_name = " ".join(names) or None
    return first_name, last_name


def build_shipping_address(address: Address) -> AddressPayload:
    # Unlike billing, every field is sent even when missing.
    return AddressPayload(
        city=address.city,
        country_code=address.country,
        postcode=address.zip,
        state=address.state,
        street=address.address1,
    )


def build_order(options: GatewayOptions) -> Optional[OrderPayload]:
    shipping_address = options.shipping_address
    if shipping_address is None:
        return None

    first_name, last_name = split_names(shipping_address.name)
    fields = {}
    if first_name:
        fields["first_name"] = first_name
    if last_name:
        fields["last_name"] = last_name
    if shipping_address.phone_number:
        fields["phone_number"] = shipping_address.phone_number
    fields["address"] = build_shipping_address(shipping_address)
    return OrderPayload(shipping=ShippingPayload(**fields))


# Stored credentials

def build_external_recurring_data(options: GatewayOptions) -> Optional[ExternalRecurringData]:
    stored_credential = options.stored_credential
    if stored_credential is None:
        return None

    fields = {}
    reason = TRIGGER_REASONS.get(stored_credential.reason_type or "")
    if reason:
        fields["merchant_trigger_reason"] = reason
    fields["original_transaction_id"] = stored_credential.network_transaction_id
    fields["triggered_by"] = "customer" if stored_credential.initiator == "cardholder" else "merchant"
    return ExternalRecurringData(**fields)


def _descriptor(options: GatewayOptions) -> dict:
    return {"descriptor": options.description} if options.description else {}


# Per-endpoint bodies

def build_create_intent_request(
    money: Union[int, Money], options: GatewayOptions, default_currency: str
) -> CreateIntentRequest:
    currency = select_currency(money, options, default_currency)
    fields = {
        "amount": format_amount(money, currency),
        "currency": currency,
    }
    order = build_order(options)
    if order is not None:
        fields["order"] = order
    fields["request_id"] = f"{request_id(options)}{SETUP_SUFFIX}"
    fields["merchant_order_id"] = f"{merchant_order_id(options)}{SETUP_SUFFIX}"
    return CreateIntentRequest(**fields, **_descriptor(options))


def build_confirm_request(card: CreditCard, options: GatewayOptions) -> ConfirmIntentRequest:
    fields = {
        "request_id": request_id(options),
        "merchant_order_id": merchant_order_id(options),
        "return_url": options.return_url,
        "payment_method": build_payment_method(card, options),
        **_descriptor(options),
    }
    recurring = build_external_recurring_data(options)
    if recurring is not None:
        fields["external_recurring_data"] = recurring
    if options.authorization_only:
        fields["payment_method_options"] = PaymentMethodOptions(card=CardOptions(auto_capture=False))
    return ConfirmIntentRequest(**fields)


def build_capture_request(
    money: Union[int, Money], options: GatewayOptions, default_currency: str
) -> CaptureIntentRequest:
    currency = select_currency(money, options, default_currency)
    return CaptureIntentRequest(
        request_id=request_id(options),
        merchant_order_id=merchant_order_id(options),
        amount=format_amount(money, currency),
        **_descriptor(options),
    )


def build_refund_request(
    money: Union[int, Money], authorization: str, options: GatewayOptions, default_currency: str
) -> CreateRefundRequest:
    currency = select_currency(money, options, default_currency)
    return CreateRefundRequest(
        amount=format_amount(money, currency),
        payment_intent_id=authorization,
        request_id=request_id(options),
        merchant_order_id=merchant_order_id(options),
    )


def build_cancel_request(options: GatewayOptions) -> CancelIntentRequest:
    return CancelIntentRequest(
        request_id=request_id(options),
        merchant_order_id=merchant_order_id(options),
        **_descriptor(options),
    )
