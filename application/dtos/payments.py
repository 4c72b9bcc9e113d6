"""
Payment DTOs (Pydantic v2) used at application boundaries.
"""
from __future__ import annotations

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.payment.entity import Address, CreditCard, StoredCredential


def _normalize_currency(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    u = v.upper()
    if len(u) != 3 or not u.isalpha():
        raise ValueError("currency must be ISO-4217 alpha-3")
    return u


class GatewayOptions(BaseModel):
    """Options recognized by every gateway operation."""

    model_config = ConfigDict(frozen=True)

    return_url: Optional[str] = None
    order_id: Optional[str] = None
    merchant_order_id: Optional[str] = None
    request_id: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    billing_address: Optional[Address] = None
    shipping_address: Optional[Address] = None
    description: Optional[str] = None
    stored_credential: Optional[StoredCredential] = None
    auto_capture: Optional[bool] = None
    currency: Optional[str] = None

    @field_validator("currency")
    @classmethod
    def _upper_and_validate_currency(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_currency(v)

    @property
    def authorization_only(self) -> bool:
        # Only an explicit False disables capture; None keeps the provider default.
        return self.auto_capture is False

    def merge(self, **changes: Any) -> "GatewayOptions":
        return self.model_copy(update=changes)


AVS_MESSAGES = {
    "A": "Street address matches, but postal code does not match.",
    "B": "Street address matches, but postal code not verified.",
    "C": "Street address and postal code do not match.",
    "D": "Street address and postal code match.",
    "E": "AVS data is invalid or AVS is not allowed for this card type.",
    "F": "Card member's name does not match, but billing postal code matches.",
    "G": "Non-U.S. issuing bank does not support AVS.",
    "H": "Card member's name does not match. Street address and postal code match.",
    "I": "Address not verified.",
    "J": "Card member's name, billing address, and postal code match.",
    "K": "Card member's name matches but billing address and billing postal code do not match.",
    "L": "Card member's name and billing postal code match, but billing address does not match.",
    "M": "Street address and postal code match.",
    "N": "Street address and postal code do not match.",
    "O": "Card member's name and billing address match, but billing postal code does not match.",
    "P": "Postal code matches, but street address not verified.",
    "Q": "Card member's name, billing address, and postal code match.",
    "R": "System unavailable.",
    "S": "U.S.-issuing bank does not support AVS.",
    "T": "Card member's name does not match, but street address matches.",
    "U": "Address information unavailable.",
    "V": "Card member's name, billing address, and billing postal code match.",
    "W": "Street address does not match, but 9-digit postal code matches.",
    "X": "Street address and 9-digit postal code match.",
    "Y": "Street address and 5-digit postal code match.",
    "Z": "Street address does not match, but 5-digit postal code matches.",
}

CVV_MESSAGES = {
    "D": "CVV check flagged transaction as suspicious",
    "I": "CVV failed data validation check",
    "M": "CVV matches",
    "N": "CVV does not match",
    "P": "CVV not processed",
    "S": "CVV should have been present",
    "U": "CVV request unable to be processed by issuer",
    "X": "Issuer does not participate in CVV program",
}


class AVSResult(BaseModel):
    """Address verification outcome. ``code`` is None when the provider sent nothing."""

    model_config = ConfigDict(frozen=True)

    code: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_code(cls, code: Any) -> "AVSResult":
        if code is None or code == "":
            return cls()
        code = str(code)
        return cls(code=code, message=AVS_MESSAGES.get(code.upper()))


class CVVResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_code(cls, code: Any) -> "CVVResult":
        if code is None or code == "":
            return cls()
        code = str(code)
        return cls(code=code, message=CVV_MESSAGES.get(code.upper()))


class GatewayResponse(BaseModel):
    """Normalized outcome of one logical gateway operation."""

    model_config = ConfigDict(frozen=True)

    success: bool
    message: Optional[str] = None
    params: dict[str, Any] = Field(default_factory=dict)
    authorization: Optional[str] = None
    avs_result: AVSResult = Field(default_factory=AVSResult)
    cvv_result: CVVResult = Field(default_factory=CVVResult)
    error_code: Optional[str] = None
    test: bool = False


# API request payloads

class _MoneyPayload(BaseModel):
    amount: int = Field(gt=0, description="Amount in minor units")
    currency: Optional[str] = None

    @field_validator("currency")
    @classmethod
    def _upper_and_validate_currency(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_currency(v)


class PurchaseRequest(_MoneyPayload):
    card: CreditCard
    options: GatewayOptions = Field(default_factory=GatewayOptions)


class CaptureRequest(_MoneyPayload):
    options: GatewayOptions = Field(default_factory=GatewayOptions)


class RefundRequest(_MoneyPayload):
    options: GatewayOptions = Field(default_factory=GatewayOptions)


class VoidRequest(BaseModel):
    options: GatewayOptions = Field(default_factory=GatewayOptions)


class VerifyRequest(BaseModel):
    card: CreditCard
    options: GatewayOptions = Field(default_factory=GatewayOptions)
