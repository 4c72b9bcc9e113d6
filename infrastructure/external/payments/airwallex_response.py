"""
Interpretation of raw Airwallex responses into GatewayResponse.
"""
from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import ValidationError

from application.dtos.payments import AVSResult, CVVResult, GatewayResponse
from infrastructure.external.api_clients.base import MalformedResponseError
from infrastructure.external.payments.airwallex_schemas import ProviderResponse
from shared.codes.payment_codes import is_success_status


def parse(body: str) -> dict[str, Any]:
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError(f"Invalid JSON response: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedResponseError("Expected a JSON object response")
    return data


def to_provider_response(data: dict[str, Any]) -> ProviderResponse:
    try:
        return ProviderResponse.model_validate(data)
    except ValidationError as exc:
        raise MalformedResponseError(f"Unexpected response shape: {exc}") from exc


def _text(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


def status_from(response: ProviderResponse) -> Any:
    # Raw value; anything outside the allow-list classifies as failure
    if response.status is not None:
        return response.status
    attempt = response.latest_payment_attempt
    return attempt.status if attempt else None


def success_from(response: ProviderResponse) -> bool:
    return is_success_status(status_from(response))


def message_from(response: ProviderResponse) -> Optional[str]:
    attempt = response.latest_payment_attempt
    return _text((attempt.status if attempt else None) or response.status or response.message)


def authorization_from(response: ProviderResponse) -> Optional[str]:
    attempt = response.latest_payment_attempt
    return _text(attempt.payment_intent_id) if attempt else None


def error_code_from(response: ProviderResponse) -> Optional[str]:
    if success_from(response):
        return None
    code = response.provider_original_response_code or response.code
    return _text(code)


def _authentication_data(response: ProviderResponse):
    attempt = response.latest_payment_attempt
    return attempt.authentication_data if attempt else None


def build_response(data: dict[str, Any], *, test: bool) -> GatewayResponse:
    response = to_provider_response(data)
    auth_data = _authentication_data(response)
    return GatewayResponse(
        success=success_from(response),
        message=message_from(response),
        params=data,
        authorization=authorization_from(response),
        avs_result=AVSResult.from_code(auth_data.avs_result if auth_data else None),
        cvv_result=CVVResult.from_code(auth_data.cvc_code if auth_data else None),
        error_code=error_code_from(response),
        test=test,
    )
