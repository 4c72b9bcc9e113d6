"""
Payment domain value objects - card instruments, addresses and money.

These are caller-supplied per call and never mutated by the gateway.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from domain.common.exceptions import DomainValidationException


@dataclass(frozen=True)
class CreditCard:
    """Card instrument as supplied by the caller."""

    number: str
    month: int
    year: int
    verification_value: Optional[str] = None
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    def __post_init__(self) -> None:
        if not 1 <= int(self.month) <= 12:
            raise DomainValidationException("Card expiry month must be between 1 and 12", field="month")

    @property
    def full_name(self) -> Optional[str]:
        if self.name:
            return self.name
        joined = " ".join(part for part in (self.first_name, self.last_name) if part)
        return joined or None

    @property
    def has_name_info(self) -> bool:
        # Airwallex requires both names whenever billing data is sent.
        return bool(self.first_name and self.last_name)

    @property
    def last_digits(self) -> str:
        return str(self.number)[-4:]


@dataclass(frozen=True)
class Address:
    address1: Optional[str] = None
    city: Optional[str] = None
    zip: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    # Shipping only
    name: Optional[str] = None
    phone_number: Optional[str] = None

    @property
    def has_required_info(self) -> bool:
        return bool(self.address1 and self.country)


@dataclass(frozen=True)
class StoredCredential:
    reason_type: Optional[str] = None  # recurring, installment, unscheduled
    initiator: Optional[str] = None  # cardholder or merchant
    network_transaction_id: Optional[str] = None


@dataclass(frozen=True)
class Money:
    """Amount in minor units (cents) with an optional ISO-4217 currency."""

    cents: int
    currency: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.cents, bool) or not isinstance(self.cents, int):
            raise DomainValidationException("Money amount must be an integer number of minor units", field="cents")
        if self.cents < 0:
            raise DomainValidationException("Money amount must not be negative", field="cents")
