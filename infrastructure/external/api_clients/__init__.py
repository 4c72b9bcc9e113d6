"""
API client module

HTTP transport used by the provider adapters.
"""
from .base import (
    BaseAPIClient,
    APIResponse,
    APIError,
    AuthenticationError,
    MalformedResponseError,
    TransportError,
)

__all__ = [
    "BaseAPIClient",
    "APIResponse",
    "APIError",
    "AuthenticationError",
    "MalformedResponseError",
    "TransportError",
]
