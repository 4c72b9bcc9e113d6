"""
Payment specific codes and the Airwallex status vocabulary.
"""
from __future__ import annotations

from enum import Enum, IntEnum
from typing import Optional


class PaymentCode(IntEnum):
    # Generic success
    SUCCESS = 0

    # Provider/Network errors (6xxxx)
    PROVIDER_ERROR = 60000
    SETUP_FAILED = 60001
    AUTHENTICATION_FAILED = 60002


class IntentStatus(str, Enum):
    """Statuses reported by payment intents, refunds and payment attempts."""

    REQUIRES_PAYMENT_METHOD = "REQUIRES_PAYMENT_METHOD"
    REQUIRES_CUSTOMER_ACTION = "REQUIRES_CUSTOMER_ACTION"
    REQUIRES_CAPTURE = "REQUIRES_CAPTURE"
    PENDING = "PENDING"
    SUCCEEDED = "SUCCEEDED"
    CANCELLED = "CANCELLED"
    RECEIVED = "RECEIVED"
    AUTHORIZED = "AUTHORIZED"
    CAPTURE_REQUESTED = "CAPTURE_REQUESTED"
    SETTLED = "SETTLED"
    FAILED = "FAILED"

    @classmethod
    def parse(cls, value: object) -> Optional["IntentStatus"]:
        """Return the member for ``value`` or None when it is not a known status."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


# Statuses counted as a successful call. Everything else, including unknown
# values, is a failure.
SUCCESS_STATUSES = frozenset(
    {
        IntentStatus.REQUIRES_PAYMENT_METHOD,
        IntentStatus.SUCCEEDED,
        IntentStatus.RECEIVED,
        IntentStatus.REQUIRES_CAPTURE,
        IntentStatus.CANCELLED,
    }
)


def is_success_status(value: object) -> bool:
    status = IntentStatus.parse(value)
    return status is not None and status in SUCCESS_STATUSES
