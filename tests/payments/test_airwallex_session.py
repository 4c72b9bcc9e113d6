import pytest

from infrastructure.external.api_clients.base import AuthenticationError
from infrastructure.external.payments.airwallex_client import AirwallexClient
from infrastructure.external.payments.airwallex_session import AirwallexSession
from infrastructure.external.payments.exceptions import PaymentAuthenticationError
from shared.codes.payment_codes import PaymentCode

from awx_bodies import TEST_URL, cancelled

LOGIN_URL = f"{TEST_URL}/authentication/login"


def test_login_sends_credentials_in_headers(transport):
    transport.queue({"token": "tok_live", "expires_at": "2030-01-01T00:00:00+0000"})

    session = AirwallexSession("client-id", "api-key", login_url=LOGIN_URL, transport=transport)

    assert session.current_token() == "tok_live"
    assert session.authorization_header() == {"Authorization": "Bearer tok_live"}
    assert session.client_id == "client-id"
    call = transport.calls[0]
    assert call["url"] == LOGIN_URL
    assert call["body"] is None
    assert call["headers"]["x-client-id"] == "client-id"
    assert call["headers"]["x-api-key"] == "api-key"


def test_login_without_token_raises(transport):
    transport.queue({"code": "credentials_invalid", "message": "Access denied"})

    with pytest.raises(PaymentAuthenticationError) as exc:
        AirwallexSession("client-id", "bad-key", login_url=LOGIN_URL, transport=transport)

    assert exc.value.code == PaymentCode.AUTHENTICATION_FAILED
    assert exc.value.message == "Access denied"
    assert exc.value.provider_code == "credentials_invalid"


def test_login_transport_rejection_propagates(transport):
    transport.queue(AuthenticationError("Unauthorized", status_code=401))
    with pytest.raises(AuthenticationError):
        AirwallexSession("client-id", "bad-key", login_url=LOGIN_URL, transport=transport)


def test_client_logs_in_once_and_reuses_token(transport):
    transport.queue({"token": "tok_once"})
    client = AirwallexClient("client-id", "api-key", transport=transport)

    transport.queue(cancelled(), cancelled("int_2"))
    client.void("int_abc123")
    client.void("int_2")

    assert transport.urls.count(LOGIN_URL) == 1
    assert transport.calls[1]["headers"]["Authorization"] == "Bearer tok_once"
    assert transport.calls[2]["headers"]["Authorization"] == "Bearer tok_once"


def test_authorization_header_reads_current_token(monkeypatch, transport):
    transport.queue({"token": "tok_first"})
    session = AirwallexSession("client-id", "api-key", login_url=LOGIN_URL, transport=transport)

    monkeypatch.setattr(session, "current_token", lambda: "tok_other")

    assert session.authorization_header() == {"Authorization": "Bearer tok_other"}
