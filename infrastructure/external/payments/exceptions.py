"""
Exceptions for payment providers mapped to unified BusinessException variants.
"""
from __future__ import annotations

from typing import Optional
from domain.common.exceptions import BusinessException
from shared.codes.payment_codes import PaymentCode


class PaymentProviderError(BusinessException):
    def __init__(
        self,
        message: str,
        *,
        provider: str,
        provider_code: str | None = None,
        details: Optional[dict] = None,
        code: int = PaymentCode.PROVIDER_ERROR,
        error_type: str = "PaymentProviderError",
    ):
        full_details = {"provider": provider, "provider_code": provider_code}
        if details:
            full_details.update(details)
        super().__init__(
            code=code,
            message=message,
            error_type=error_type,
            details=full_details,
        )
        self.provider = provider
        self.provider_code = provider_code


class PaymentSetupError(PaymentProviderError):
    """The payment intent could not be created, so no confirm was attempted."""

    def __init__(self, message: str, *, provider: str, provider_code: str | None = None, details: Optional[dict] = None):
        super().__init__(
            message,
            provider=provider,
            provider_code=provider_code,
            details=details,
            code=PaymentCode.SETUP_FAILED,
            error_type="PaymentSetupError",
        )


class PaymentAuthenticationError(PaymentProviderError):
    """Login did not yield a bearer token."""

    def __init__(self, message: str, *, provider: str, provider_code: str | None = None):
        super().__init__(
            message,
            provider=provider,
            provider_code=provider_code,
            code=PaymentCode.AUTHENTICATION_FAILED,
            error_type="PaymentAuthenticationError",
        )
