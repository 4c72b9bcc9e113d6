"""
Base payment client implementing shared concerns: transport, logging, scrubbing.

Concrete providers should subclass and implement provider-specific logic.
"""
from __future__ import annotations

from typing import Any, Optional

import httpx

from core.logging_config import get_logger
from application.dtos.payments import GatewayOptions, GatewayResponse
from application.ports.payment_gateway import Amount, PaymentGateway
from domain.common.exceptions import AuthorizationRequiredException, MissingParameterException
from domain.payment.entity import CreditCard
from infrastructure.external.api_clients.base import BaseAPIClient
from infrastructure.external.payments.scrubbing import scrub


logger = get_logger(__name__)


class BasePaymentClient(PaymentGateway):
    provider: str = "base"

    def __init__(
        self,
        *,
        test: bool = True,
        timeouts: Optional[dict[str, float]] = None,
        transport: Optional[BaseAPIClient] = None,
    ) -> None:
        self.test = test
        self._timeouts_cfg = timeouts or {"connect": 5.0, "read": 30.0, "write": 30.0, "total": 60.0}
        self.transport = transport or BaseAPIClient(timeout=self.timeouts)

    @property
    def timeouts(self) -> httpx.Timeout:
        return httpx.Timeout(
            connect=self._timeouts_cfg["connect"],
            read=self._timeouts_cfg["read"],
            write=self._timeouts_cfg["write"],
            timeout=self._timeouts_cfg["total"],
        )

    def close(self) -> None:
        """Close the underlying HTTP transport."""
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # Default implementations raise to force override where needed
    def purchase(self, money: Amount, card: CreditCard, options: Optional[GatewayOptions] = None) -> GatewayResponse:  # type: ignore[override]
        raise NotImplementedError

    def authorize(self, money: Amount, card: CreditCard, options: Optional[GatewayOptions] = None) -> GatewayResponse:  # type: ignore[override]
        raise NotImplementedError

    def capture(self, money: Amount, authorization: Optional[str], options: Optional[GatewayOptions] = None) -> GatewayResponse:  # type: ignore[override]
        raise NotImplementedError

    def refund(self, money: Amount, authorization: Optional[str], options: Optional[GatewayOptions] = None) -> GatewayResponse:  # type: ignore[override]
        raise NotImplementedError

    def void(self, authorization: Optional[str], options: Optional[GatewayOptions] = None) -> GatewayResponse:  # type: ignore[override]
        raise NotImplementedError

    def verify(self, card: CreditCard, options: Optional[GatewayOptions] = None) -> GatewayResponse:  # type: ignore[override]
        raise NotImplementedError

    def supports_scrubbing(self) -> bool:
        return True

    def scrub(self, transcript: str) -> str:  # type: ignore[override]
        return scrub(transcript)

    # Helpers
    @staticmethod
    def _require(options: GatewayOptions, *names: str) -> None:
        missing = [name for name in names if not getattr(options, name, None)]
        if missing:
            raise MissingParameterException(*missing)

    @staticmethod
    def _require_authorization(authorization: Optional[str], action: str) -> str:
        if not authorization or not str(authorization).strip():
            raise AuthorizationRequiredException(action)
        return authorization

    def _log(self, event: str, **kwargs: Any) -> None:
        logger.info(
            event,
            provider=self.provider,
            test=self.test,
            **kwargs,
        )
