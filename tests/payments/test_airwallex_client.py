import pytest

from application.dtos.payments import GatewayOptions
from domain.common.exceptions import AuthorizationRequiredException, MissingParameterException
from domain.payment.entity import Money
from infrastructure.external.api_clients.base import ServerError, TransportError
from infrastructure.external.payments.airwallex_client import AirwallexClient
from infrastructure.external.payments.exceptions import PaymentSetupError

from awx_bodies import TEST_URL, cancelled, confirmed, declined, intent_created, refund_received, validation_error


OPTIONS = GatewayOptions(
    return_url="https://example.com/return",
    request_id="req-1",
    order_id="order-1",
    description="Store purchase",
)


def test_purchase_creates_then_confirms_intent(gateway, transport, card):
    transport.queue(intent_created(), confirmed())

    result = gateway.purchase(Money(100, "AUD"), card, OPTIONS)

    assert result.success is True
    assert result.authorization == "int_abc123"
    assert transport.urls == [
        f"{TEST_URL}/pa/payment_intents/create",
        f"{TEST_URL}/pa/payment_intents/int_abc123/confirm",
    ]
    setup = transport.body(0)
    assert setup["amount"] == "1.00"
    assert setup["currency"] == "AUD"
    assert setup["request_id"] == "req-1_setup"
    assert setup["merchant_order_id"] == "order-1_setup"
    assert setup["descriptor"] == "Store purchase"

    confirm = transport.body(1)
    assert confirm["request_id"] == "req-1"
    assert confirm["merchant_order_id"] == "order-1"
    assert confirm["return_url"] == "https://example.com/return"
    assert confirm["payment_method"]["card"]["number"] == "4111111111111111"
    assert "payment_method_options" not in confirm

    for call in transport.calls:
        assert call["headers"]["Authorization"] == "Bearer tok_test"
        assert call["headers"]["Content-Type"] == "application/json"


def test_purchase_uses_default_currency_for_plain_cents(gateway, transport, card):
    transport.queue(intent_created(), confirmed())
    gateway.purchase(1000, card, OPTIONS)
    assert transport.body(0)["currency"] == "AUD"
    assert transport.body(0)["amount"] == "10.00"


def test_purchase_requires_return_url(gateway, transport, card):
    with pytest.raises(MissingParameterException) as exc:
        gateway.purchase(100, card, GatewayOptions())
    assert exc.value.details == {"missing": ["return_url"]}
    assert transport.calls == []


def test_failed_setup_raises_without_confirm(gateway, transport, card):
    transport.queue(validation_error())

    with pytest.raises(PaymentSetupError) as exc:
        gateway.purchase(100, card, OPTIONS)

    assert exc.value.message == "amount must be greater than 0"
    assert exc.value.provider_code == "validation_error"
    assert len(transport.calls) == 1


def test_setup_without_intent_id_raises(gateway, transport, card):
    transport.queue({"status": "REQUIRES_PAYMENT_METHOD"})
    with pytest.raises(PaymentSetupError):
        gateway.purchase(100, card, OPTIONS)
    assert len(transport.calls) == 1


def test_declined_confirm_is_a_failed_response(gateway, transport, card):
    transport.queue(intent_created(), declined())

    result = gateway.purchase(100, card, OPTIONS)

    assert result.success is False
    assert result.error_code == "05"


def test_authorize_disables_auto_capture(gateway, transport, card):
    transport.queue(intent_created(), confirmed(status="REQUIRES_CAPTURE", attempt_status="AUTHORIZED"))

    result = gateway.authorize(100, card, OPTIONS)

    assert result.success is True
    assert result.message == "AUTHORIZED"
    assert transport.body(1)["payment_method_options"] == {"card": {"auto_capture": False}}


def test_authorize_confirm_matches_purchase_without_auto_capture(session, make_transport, card):
    authorize_transport = make_transport(intent_created(), confirmed())
    AirwallexClient(session=session, transport=authorize_transport).authorize(100, card, OPTIONS)

    purchase_transport = make_transport(intent_created(), confirmed())
    AirwallexClient(session=session, transport=purchase_transport).purchase(
        100, card, OPTIONS.merge(auto_capture=False)
    )

    assert authorize_transport.body(0) == purchase_transport.body(0)
    assert authorize_transport.body(1) == purchase_transport.body(1)
    assert authorize_transport.urls == purchase_transport.urls


def test_capture_posts_amount_to_intent(gateway, transport):
    transport.queue(confirmed())

    result = gateway.capture(250, "int_abc123", OPTIONS)

    assert result.success is True
    assert transport.urls == [f"{TEST_URL}/pa/payment_intents/int_abc123/capture"]
    assert transport.body(0) == {
        "request_id": "req-1",
        "merchant_order_id": "order-1",
        "amount": "2.50",
        "descriptor": "Store purchase",
    }


def test_refund_creates_refund_for_intent(gateway, transport):
    transport.queue(refund_received())

    result = gateway.refund(Money(100, "USD"), "int_abc123", OPTIONS)

    assert result.success is True
    assert transport.urls == [f"{TEST_URL}/pa/refunds/create"]
    assert transport.body(0)["payment_intent_id"] == "int_abc123"
    assert transport.body(0)["amount"] == "1.00"


def test_void_cancels_intent(gateway, transport):
    transport.queue(cancelled())

    result = gateway.void("int_abc123", OPTIONS)

    assert result.success is True
    assert result.message == "CANCELLED"
    assert transport.urls == [f"{TEST_URL}/pa/payment_intents/int_abc123/cancel"]


@pytest.mark.parametrize("authorization", [None, "", "   "])
def test_authorization_required_before_any_request(gateway, transport, authorization):
    with pytest.raises(AuthorizationRequiredException):
        gateway.capture(100, authorization, OPTIONS)
    with pytest.raises(AuthorizationRequiredException):
        gateway.refund(100, authorization, OPTIONS)
    with pytest.raises(AuthorizationRequiredException):
        gateway.void(authorization, OPTIONS)
    assert transport.calls == []


def test_verify_authorizes_then_voids(gateway, transport, card):
    transport.queue(intent_created(), confirmed(status="REQUIRES_CAPTURE", attempt_status="AUTHORIZED"), cancelled())

    result = gateway.verify(card, OPTIONS)

    assert result.success is True
    assert result.message == "AUTHORIZED"
    assert result.authorization == "int_abc123"
    assert transport.urls[-1] == f"{TEST_URL}/pa/payment_intents/int_abc123/cancel"
    assert transport.body(0)["amount"] == "1.00"


def test_verify_keeps_authorize_result_when_void_fails(gateway, transport, card):
    transport.queue(intent_created(), confirmed(status="REQUIRES_CAPTURE", attempt_status="AUTHORIZED"), declined())

    result = gateway.verify(card, OPTIONS)

    assert result.success is True
    assert result.message == "AUTHORIZED"
    assert len(transport.calls) == 3


def test_verify_skips_void_when_authorize_declined(gateway, transport, card):
    transport.queue(intent_created(), declined())

    result = gateway.verify(card, OPTIONS)

    assert result.success is False
    assert len(transport.calls) == 2


def test_transport_errors_propagate(gateway, transport, card):
    transport.queue(intent_created(), TransportError("Network error: connection reset"))
    with pytest.raises(TransportError):
        gateway.purchase(100, card, OPTIONS)

    transport.queue(ServerError("API request failed with status 500", status_code=500))
    with pytest.raises(ServerError):
        gateway.void("int_abc123", OPTIONS)


def test_live_mode_uses_live_url(session, transport):
    client = AirwallexClient(session=session, transport=transport, test=False)
    transport.queue(cancelled())

    result = client.void("int_abc123", OPTIONS)

    assert transport.urls == ["https://pci-api.airwallex.com/api/v1/pa/payment_intents/int_abc123/cancel"]
    assert result.test is False


def test_missing_credentials_raise_before_login(transport):
    with pytest.raises(MissingParameterException) as exc:
        AirwallexClient(client_api_key="key", transport=transport)
    assert exc.value.details == {"missing": ["client_id"]}
    assert transport.calls == []


def test_scrub_redacts_card_data(gateway):
    transcript = '{"card":{"number":"4111111111111111","cvc":"123","expiry_month":"09"}}'
    scrubbed = gateway.scrub(transcript)
    assert "4111111111111111" not in scrubbed
    assert '"cvc":"[REDACTED]"' in scrubbed
    assert '"expiry_month":"09"' in scrubbed
    assert gateway.supports_scrubbing() is True


def test_client_close_closes_transport(gateway, transport):
    gateway.close()
    assert transport.closed is True
