"""
Bearer-token session for the Airwallex API.

One login happens at construction; the token is then read-only for the
lifetime of the session. There is no refresh: an expired or revoked token
surfaces as an authentication error on the next provider call.
"""
from __future__ import annotations

from core.logging_config import get_logger
from infrastructure.external.api_clients.base import BaseAPIClient
from infrastructure.external.payments.airwallex_response import parse
from infrastructure.external.payments.airwallex_schemas import LoginResponse
from infrastructure.external.payments.exceptions import PaymentAuthenticationError


logger = get_logger(__name__)


class AirwallexSession:
    provider = "airwallex"

    def __init__(self, client_id: str, client_api_key: str, *, login_url: str, transport: BaseAPIClient) -> None:
        self._client_id = client_id
        self._token = self._login(client_id, client_api_key, login_url, transport)

    def _login(self, client_id: str, client_api_key: str, login_url: str, transport: BaseAPIClient) -> str:
        headers = {
            "Content-Type": "application/json",
            "x-client-id": client_id,
            "x-api-key": client_api_key,
        }
        login = LoginResponse.model_validate(parse(transport.post(login_url, None, headers)))
        if not login.token:
            logger.warning("airwallex_login_failed", provider=self.provider, client_id=client_id, code=login.code)
            raise PaymentAuthenticationError(
                login.message or "Airwallex login did not return an access token",
                provider=self.provider,
                provider_code=str(login.code) if login.code is not None else None,
            )
        logger.info("airwallex_login_succeeded", provider=self.provider, client_id=client_id, expires_at=login.expires_at)
        return login.token

    @property
    def client_id(self) -> str:
        return self._client_id

    def current_token(self) -> str:
        return self._token

    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.current_token()}"}
