"""
Payment gateway port (application/ports) exposing a replaceable protocol.

Application depends on this Protocol; infrastructure implements adapters.
"""
from __future__ import annotations

from typing import Optional, Protocol, Union, runtime_checkable

from application.dtos.payments import GatewayOptions, GatewayResponse
from domain.payment.entity import CreditCard, Money


Amount = Union[int, Money]


@runtime_checkable
class PaymentGateway(Protocol):
    """Gateway protocol for card payment providers.

    Calls are synchronous and block for each provider round trip.
    """

    provider: str

    def purchase(self, money: Amount, card: CreditCard, options: Optional[GatewayOptions] = None) -> GatewayResponse: ...

    def authorize(self, money: Amount, card: CreditCard, options: Optional[GatewayOptions] = None) -> GatewayResponse: ...

    def capture(self, money: Amount, authorization: Optional[str], options: Optional[GatewayOptions] = None) -> GatewayResponse: ...

    def refund(self, money: Amount, authorization: Optional[str], options: Optional[GatewayOptions] = None) -> GatewayResponse: ...

    def void(self, authorization: Optional[str], options: Optional[GatewayOptions] = None) -> GatewayResponse: ...

    def verify(self, card: CreditCard, options: Optional[GatewayOptions] = None) -> GatewayResponse: ...

    def scrub(self, transcript: str) -> str: ...
