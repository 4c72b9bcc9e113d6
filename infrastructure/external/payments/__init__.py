"""
Factory for payment gateway clients.
"""
from __future__ import annotations

from typing import Optional

from core.settings import payment_settings
from application.ports.payment_gateway import PaymentGateway


def get_payment_gateway(provider: Optional[str] = None) -> PaymentGateway:
    name = (provider or payment_settings.default_provider).lower()
    if name in {"airwallex", "awx"}:
        from .airwallex_client import AirwallexClient
        cfg = payment_settings.airwallex
        return AirwallexClient(
            cfg.client_id,
            cfg.client_api_key,
            test=cfg.test,
            timeouts=payment_settings.timeouts.model_dump(),
            test_url=cfg.test_url,
            live_url=cfg.live_url,
            default_currency=cfg.default_currency,
        )
    raise ValueError(f"Unsupported payment provider: {name}")
