"""
Payment-related settings using pydantic-settings v2 with nested env keys.

Kept apart from core.config.Settings so gateway credentials load on their own.
"""
from __future__ import annotations

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field


class PaymentTimeouts(BaseModel):
    connect: float = 5.0
    read: float = 30.0
    write: float = 30.0
    total: float = 60.0


class AirwallexSettings(BaseModel):
    client_id: Optional[str] = None
    client_api_key: Optional[str] = None
    test: bool = True
    test_url: str = "https://api-demo.airwallex.com/api/v1"
    live_url: str = "https://pci-api.airwallex.com/api/v1"
    default_currency: str = "AUD"


class PaymentSettings(BaseSettings):
    default_provider: str = Field(default="airwallex", validation_alias="PAYMENT__DEFAULT_PROVIDER")
    timeouts: PaymentTimeouts = Field(default_factory=PaymentTimeouts)

    airwallex: AirwallexSettings = Field(default_factory=AirwallexSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
        env_nested_delimiter="__",
    )


payment_settings = PaymentSettings()
