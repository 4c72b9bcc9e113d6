"""Domain-level business exceptions shared by the domain and infrastructure layers.

The core layer only maps these to HTTP responses; the domain never imports
from core.
"""
from __future__ import annotations

from typing import Optional
from shared.codes import BusinessCode


class BusinessException(Exception):
    """Base class for business exceptions."""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        super().__init__(self.message)


class MissingParameterException(BusinessException):
    """A required gateway option or constructor argument was not supplied."""

    def __init__(self, *names: str):
        joined = ", ".join(names)
        super().__init__(
            code=BusinessCode.PARAM_MISSING,
            message=f"Missing required parameter: {joined}",
            error_type="MissingParameter",
            details={"missing": list(names)},
            field=names[0] if len(names) == 1 else None,
        )


class AuthorizationRequiredException(BusinessException):
    def __init__(self, action: str):
        super().__init__(
            code=BusinessCode.PARAM_MISSING,
            message="An authorization value must be provided.",
            error_type="AuthorizationRequired",
            details={"action": action},
            field="authorization",
        )


class DomainValidationException(BusinessException):
    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(
            code=BusinessCode.PARAM_VALIDATION_ERROR,
            message=message,
            error_type="DomainValidationError",
            details=details,
            field=field,
        )
