"""
Airwallex request and response schemas.

Requests are serialized with ``exclude_unset``: a field appears in the JSON
body only when the mapper set it, so "always sent (possibly null)" and
"omitted when absent" are both explicit at the call site.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class AirwallexRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


class AddressPayload(AirwallexRequest):
    country_code: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    postcode: Optional[str] = None
    state: Optional[str] = None


class BillingPayload(AirwallexRequest):
    email: Optional[str] = None
    phone: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address: Optional[AddressPayload] = None


class CardPayload(AirwallexRequest):
    expiry_month: str
    expiry_year: str
    number: str
    name: Optional[str] = None
    cvc: Optional[str] = None
    billing: Optional[BillingPayload] = None


class PaymentMethodPayload(AirwallexRequest):
    type: str
    card: CardPayload


class ShippingPayload(AirwallexRequest):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    address: AddressPayload


class OrderPayload(AirwallexRequest):
    shipping: ShippingPayload


class ExternalRecurringData(AirwallexRequest):
    merchant_trigger_reason: Optional[str] = None
    original_transaction_id: Optional[str] = None
    triggered_by: str


class CardOptions(AirwallexRequest):
    auto_capture: bool


class PaymentMethodOptions(AirwallexRequest):
    card: CardOptions


class CreateIntentRequest(AirwallexRequest):
    amount: Decimal
    currency: str
    order: Optional[OrderPayload] = None
    request_id: str
    merchant_order_id: str
    descriptor: Optional[str] = None


class ConfirmIntentRequest(AirwallexRequest):
    request_id: str
    merchant_order_id: str
    return_url: str
    payment_method: PaymentMethodPayload
    descriptor: Optional[str] = None
    external_recurring_data: Optional[ExternalRecurringData] = None
    payment_method_options: Optional[PaymentMethodOptions] = None


class CaptureIntentRequest(AirwallexRequest):
    request_id: str
    merchant_order_id: str
    amount: Decimal
    descriptor: Optional[str] = None


class CreateRefundRequest(AirwallexRequest):
    amount: Decimal
    payment_intent_id: str
    request_id: str
    merchant_order_id: str


class CancelIntentRequest(AirwallexRequest):
    request_id: str
    merchant_order_id: str
    descriptor: Optional[str] = None


# Responses: shapes differ per endpoint, so every field is optional and
# loosely typed, and unknown keys are kept. The interpreter coerces values.

class _Response(BaseModel):
    model_config = ConfigDict(extra="allow")


class AuthenticationData(_Response):
    avs_result: Optional[Any] = None
    cvc_code: Optional[Any] = None


class PaymentAttempt(_Response):
    id: Optional[Any] = None
    status: Optional[Any] = None
    payment_intent_id: Optional[Any] = None
    authentication_data: Optional[AuthenticationData] = None


class ProviderResponse(_Response):
    id: Optional[Any] = None
    status: Optional[Any] = None
    message: Optional[Any] = None
    code: Optional[Any] = None
    provider_original_response_code: Optional[Any] = None
    latest_payment_attempt: Optional[PaymentAttempt] = None


class LoginResponse(_Response):
    token: Optional[str] = None
    expires_at: Optional[str] = None
    message: Optional[str] = None
    code: Optional[Any] = None
