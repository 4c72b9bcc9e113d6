"""
Airwallex payment-intent adapter.

Every card operation maps onto the payment-intent lifecycle:

- purchase/authorize: create intent (``setup``) then confirm it (``sale``)
- capture / void: capture or cancel an existing intent
- refund: create a refund against an intent
- verify: authorize a nominal amount, then void it

Calls are blocking and strictly sequential. The bearer token comes from an
``AirwallexSession`` created once per client.
"""
from __future__ import annotations

import json
from typing import Optional

from application.dtos.payments import GatewayOptions, GatewayResponse
from application.ports.payment_gateway import Amount
from domain.common.exceptions import AuthorizationRequiredException, MissingParameterException
from domain.payment.entity import CreditCard
from infrastructure.external.api_clients.base import BaseAPIClient
from infrastructure.external.payments import airwallex_mapping as mapping
from infrastructure.external.payments.airwallex_response import build_response, parse
from infrastructure.external.payments.airwallex_schemas import AirwallexRequest
from infrastructure.external.payments.airwallex_session import AirwallexSession
from infrastructure.external.payments.base import BasePaymentClient
from infrastructure.external.payments.exceptions import PaymentSetupError


class AirwallexClient(BasePaymentClient):
    provider = "airwallex"
    display_name = "Airwallex"
    homepage_url = "https://airwallex.com/"

    test_url = "https://api-demo.airwallex.com/api/v1"
    live_url = "https://pci-api.airwallex.com/api/v1"

    # Cards are accepted in all EU countries plus AU, GB, HK and SG
    supported_countries = (
        "AT", "AU", "BE", "BG", "CY", "CZ", "DE", "DK", "EE", "GR", "ES", "FI", "FR", "GB", "HK",
        "HR", "HU", "IE", "IT", "LT", "LU", "LV", "MT", "NL", "PL", "PT", "RO", "SE", "SG", "SI", "SK",
    )
    supported_cardtypes = ("visa", "master")
    default_currency = "AUD"

    ENDPOINTS = {
        "login": "/authentication/login",
        "setup": "/pa/payment_intents/create",
        "sale": "/pa/payment_intents/{id}/confirm",
        "capture": "/pa/payment_intents/{id}/capture",
        "refund": "/pa/refunds/create",
        "void": "/pa/payment_intents/{id}/cancel",
    }
    # Actions addressed to an existing intent
    INTENT_ACTIONS = frozenset({"sale", "capture", "void"})

    VERIFY_AMOUNT = 100

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_api_key: Optional[str] = None,
        *,
        test: bool = True,
        session: Optional[AirwallexSession] = None,
        transport: Optional[BaseAPIClient] = None,
        timeouts: Optional[dict[str, float]] = None,
        test_url: Optional[str] = None,
        live_url: Optional[str] = None,
        default_currency: Optional[str] = None,
    ) -> None:
        super().__init__(test=test, timeouts=timeouts, transport=transport)
        if test_url:
            self.test_url = test_url
        if live_url:
            self.live_url = live_url
        if default_currency:
            self.default_currency = default_currency.upper()

        if session is None:
            missing = [name for name, value in (("client_id", client_id), ("client_api_key", client_api_key)) if not value]
            if missing:
                raise MissingParameterException(*missing)
            session = AirwallexSession(
                client_id,
                client_api_key,
                login_url=self.build_request_url("login"),
                transport=self.transport,
            )
        self.session = session

    @property
    def base_url(self) -> str:
        return self.test_url if self.test else self.live_url

    def build_request_url(self, action: str, intent_id: Optional[str] = None) -> str:
        return self.base_url + self.ENDPOINTS[action].format(id=intent_id)

    def purchase(self, money: Amount, card: CreditCard, options: Optional[GatewayOptions] = None) -> GatewayResponse:  # type: ignore[override]
        options = options or GatewayOptions()
        self._require(options, "return_url")

        intent_id = self._create_payment_intent(money, options)
        post = mapping.build_confirm_request(card, options)
        return self._commit("sale", post, intent_id)

    def authorize(self, money: Amount, card: CreditCard, options: Optional[GatewayOptions] = None) -> GatewayResponse:  # type: ignore[override]
        # An authorization is a purchase without auto capture
        options = options or GatewayOptions()
        return self.purchase(money, card, options.merge(auto_capture=False))

    def capture(self, money: Amount, authorization: Optional[str], options: Optional[GatewayOptions] = None) -> GatewayResponse:  # type: ignore[override]
        authorization = self._require_authorization(authorization, "capture")
        options = options or GatewayOptions()

        post = mapping.build_capture_request(money, options, self.default_currency)
        return self._commit("capture", post, authorization)

    def refund(self, money: Amount, authorization: Optional[str], options: Optional[GatewayOptions] = None) -> GatewayResponse:  # type: ignore[override]
        authorization = self._require_authorization(authorization, "refund")
        options = options or GatewayOptions()

        post = mapping.build_refund_request(money, authorization, options, self.default_currency)
        return self._commit("refund", post)

    def void(self, authorization: Optional[str], options: Optional[GatewayOptions] = None) -> GatewayResponse:  # type: ignore[override]
        authorization = self._require_authorization(authorization, "void")
        options = options or GatewayOptions()

        post = mapping.build_cancel_request(options)
        return self._commit("void", post, authorization)

    def verify(self, card: CreditCard, options: Optional[GatewayOptions] = None) -> GatewayResponse:  # type: ignore[override]
        """Authorize a nominal amount and release it again.

        The reported outcome is always the authorization's. The void is
        cleanup: its response is discarded and never replaces the result.
        """
        options = options or GatewayOptions()
        response = self.authorize(self.VERIFY_AMOUNT, card, options)
        if response.success and response.authorization:
            cleanup = self.void(response.authorization, options)
            self._log(
                "airwallex_verify_void_discarded",
                intent_id=response.authorization,
                void_success=cleanup.success,
                void_message=cleanup.message,
            )
        return response

    def _create_payment_intent(self, money: Amount, options: GatewayOptions) -> str:
        post = mapping.build_create_intent_request(money, options, self.default_currency)
        response = self._commit("setup", post)
        if not response.success:
            raise PaymentSetupError(
                response.message or "Payment intent creation failed",
                provider=self.provider,
                provider_code=response.error_code,
            )

        intent_id = response.params.get("id")
        if not intent_id:
            raise PaymentSetupError("Payment intent creation returned no intent id", provider=self.provider)
        return str(intent_id)

    @staticmethod
    def _post_data(post: AirwallexRequest) -> str:
        return json.dumps(post.to_payload())

    def _commit(self, action: str, post: AirwallexRequest, intent_id: Optional[str] = None) -> GatewayResponse:
        if action in self.INTENT_ACTIONS and not intent_id:
            raise AuthorizationRequiredException(action)

        url = self.build_request_url(action, intent_id)
        headers = {
            **self.session.authorization_header(),
            "Content-Type": "application/json",
        }
        raw = self.transport.post(url, self._post_data(post), headers)
        response = build_response(parse(raw), test=self.test)

        self._log(
            "airwallex_commit",
            action=action,
            intent_id=intent_id or response.params.get("id"),
            success=response.success,
            message=response.message,
            error_code=response.error_code,
        )
        return response
