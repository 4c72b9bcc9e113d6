"""
Application service orchestrating card payment use-cases.

This class depends only on the application PaymentGateway port and DTOs.
Gateway implementations are provided by infrastructure and must be injected
from the composition root (API/tasks), keeping dependencies one-way.
"""
from __future__ import annotations

from typing import Optional

from application.dtos.payments import GatewayOptions, GatewayResponse
from application.ports.payment_gateway import Amount, PaymentGateway
from domain.payment.entity import CreditCard, Money
from core.logging_config import get_logger


logger = get_logger(__name__)


def _cents(money: Amount) -> int:
    return money.cents if isinstance(money, Money) else int(money)


class PaymentService:
    def __init__(self, gateway: PaymentGateway) -> None:
        self.gateway = gateway

    def _log_result(self, event: str, result: GatewayResponse, **kwargs) -> None:
        logger.info(
            event,
            provider=self.gateway.provider,
            success=result.success,
            message=result.message,
            authorization=result.authorization,
            error_code=result.error_code,
            **kwargs,
        )

    def purchase(self, money: Amount, card: CreditCard, options: Optional[GatewayOptions] = None) -> GatewayResponse:
        logger.info("payment_purchase_request", provider=self.gateway.provider, amount=_cents(money), card=card.last_digits)
        result = self.gateway.purchase(money, card, options)
        self._log_result("payment_purchase_response", result)
        return result

    def authorize(self, money: Amount, card: CreditCard, options: Optional[GatewayOptions] = None) -> GatewayResponse:
        logger.info("payment_authorize_request", provider=self.gateway.provider, amount=_cents(money), card=card.last_digits)
        result = self.gateway.authorize(money, card, options)
        self._log_result("payment_authorize_response", result)
        return result

    def capture(self, money: Amount, authorization: Optional[str], options: Optional[GatewayOptions] = None) -> GatewayResponse:
        logger.info("payment_capture_request", provider=self.gateway.provider, amount=_cents(money), authorization=authorization)
        result = self.gateway.capture(money, authorization, options)
        self._log_result("payment_capture_response", result)
        return result

    def refund(self, money: Amount, authorization: Optional[str], options: Optional[GatewayOptions] = None) -> GatewayResponse:
        logger.info("payment_refund_request", provider=self.gateway.provider, amount=_cents(money), authorization=authorization)
        result = self.gateway.refund(money, authorization, options)
        self._log_result("payment_refund_response", result)
        return result

    def void(self, authorization: Optional[str], options: Optional[GatewayOptions] = None) -> GatewayResponse:
        logger.info("payment_void_request", provider=self.gateway.provider, authorization=authorization)
        result = self.gateway.void(authorization, options)
        self._log_result("payment_void_response", result)
        return result

    def verify(self, card: CreditCard, options: Optional[GatewayOptions] = None) -> GatewayResponse:
        logger.info("payment_verify_request", provider=self.gateway.provider, card=card.last_digits)
        result = self.gateway.verify(card, options)
        self._log_result("payment_verify_response", result)
        return result

    def close(self) -> None:
        # Best-effort close underlying resources
        close = getattr(self.gateway, "close", None)
        if callable(close):
            close()
