import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_gateway
from application.dtos.payments import GatewayResponse
from infrastructure.external.api_clients.base import TransportError
from infrastructure.external.payments.airwallex_client import AirwallexClient
from main import app
from shared.codes import BusinessCode
from shared.codes.payment_codes import PaymentCode

from payments.awx_bodies import cancelled, confirmed, intent_created, validation_error


CARD = {
    "number": "4111111111111111",
    "month": 9,
    "year": 2030,
    "verification_value": "123",
    "first_name": "Longbob",
    "last_name": "Longsen",
}
OPTIONS = {"return_url": "https://example.com/return", "order_id": "order-1", "request_id": "req-1"}


class StubGateway:
    provider = "stub"

    def __init__(self):
        self.calls = []

    def _ok(self, op, *args):
        self.calls.append((op, args))
        return GatewayResponse(success=True, message="SUCCEEDED", authorization="int_1", test=True)

    def purchase(self, money, card, options=None):
        return self._ok("purchase", money, card, options)

    def authorize(self, money, card, options=None):
        return self._ok("authorize", money, card, options)

    def capture(self, money, authorization, options=None):
        return self._ok("capture", money, authorization, options)

    def refund(self, money, authorization, options=None):
        return self._ok("refund", money, authorization, options)

    def void(self, authorization, options=None):
        return self._ok("void", authorization, options)

    def verify(self, card, options=None):
        return self._ok("verify", card, options)

    def scrub(self, transcript):
        return transcript


@pytest.fixture
def use_gateway():
    def _use(gateway):
        app.dependency_overrides[get_gateway] = lambda: gateway
        return TestClient(app)
    yield _use
    app.dependency_overrides.clear()


def test_purchase_route(use_gateway):
    gateway = StubGateway()
    client = use_gateway(gateway)

    resp = client.post("/api/v1/payments/purchase", json={"amount": 1000, "currency": "usd", "card": CARD, "options": OPTIONS})

    assert resp.status_code == 200
    body = resp.json()
    assert body["code"] == BusinessCode.SUCCESS
    assert body["data"]["success"] is True
    assert body["data"]["authorization"] == "int_1"
    op, (money, card, options) = gateway.calls[0]
    assert op == "purchase"
    assert money.cents == 1000
    assert money.currency == "USD"
    assert card.last_digits == "1111"
    assert options.return_url == "https://example.com/return"
    assert resp.headers["X-Request-ID"]


def test_intent_routes_pass_authorization(use_gateway):
    gateway = StubGateway()
    client = use_gateway(gateway)

    assert client.post("/api/v1/payments/int_1/capture", json={"amount": 100}).status_code == 200
    assert client.post("/api/v1/payments/int_1/refund", json={"amount": 50}).status_code == 200
    assert client.post("/api/v1/payments/int_1/void").status_code == 200
    assert client.post("/api/v1/payments/verify", json={"card": CARD}).status_code == 200
    assert client.post("/api/v1/payments/authorize", json={"amount": 100, "card": CARD}).status_code == 200

    assert [op for op, _ in gateway.calls] == ["capture", "refund", "void", "verify", "authorize"]
    assert gateway.calls[0][1][1] == "int_1"
    assert gateway.calls[2][1] == ("int_1", None)


def test_invalid_payload_is_rejected(use_gateway):
    client = use_gateway(StubGateway())

    resp = client.post("/api/v1/payments/purchase", json={"amount": 0, "card": CARD})

    assert resp.status_code == 422
    assert resp.json()["code"] == BusinessCode.PARAM_VALIDATION_ERROR


def test_missing_return_url_maps_to_bad_request(use_gateway, session, transport):
    client = use_gateway(AirwallexClient(session=session, transport=transport))

    resp = client.post("/api/v1/payments/purchase", json={"amount": 100, "card": CARD})

    assert resp.status_code == 400
    assert resp.json()["code"] == BusinessCode.PARAM_MISSING
    assert resp.json()["error"]["field"] == "return_url"
    assert transport.calls == []


def test_setup_failure_maps_to_bad_gateway(use_gateway, session, transport):
    transport.queue(validation_error())
    client = use_gateway(AirwallexClient(session=session, transport=transport))

    resp = client.post("/api/v1/payments/purchase", json={"amount": 100, "card": CARD, "options": OPTIONS})

    assert resp.status_code == 502
    assert resp.json()["code"] == PaymentCode.SETUP_FAILED
    assert resp.json()["error"]["type"] == "PaymentSetupError"


def test_declined_operation_is_reported_in_data(use_gateway, session, transport):
    transport.queue(intent_created(), confirmed(status="FAILED", attempt_status="FAILED"))
    client = use_gateway(AirwallexClient(session=session, transport=transport))

    resp = client.post("/api/v1/payments/purchase", json={"amount": 100, "card": CARD, "options": OPTIONS})

    assert resp.status_code == 200
    assert resp.json()["data"]["success"] is False
    assert resp.json()["message"] == "FAILED"


def test_transport_failure_maps_to_bad_gateway(use_gateway, session, transport):
    transport.queue(TransportError("Network error: connection reset"))
    client = use_gateway(AirwallexClient(session=session, transport=transport))

    resp = client.post("/api/v1/payments/int_1/void", json={"options": OPTIONS})

    assert resp.status_code == 502
    assert resp.json()["code"] == BusinessCode.NETWORK_ERROR


def test_void_route_against_adapter(use_gateway, session, transport):
    transport.queue(cancelled("int_9"))
    client = use_gateway(AirwallexClient(session=session, transport=transport))

    resp = client.post("/api/v1/payments/int_9/void", json={"options": OPTIONS})

    assert resp.status_code == 200
    assert resp.json()["data"]["message"] == "CANCELLED"
    assert transport.urls[0].endswith("/pa/payment_intents/int_9/cancel")


def test_health():
    resp = TestClient(app).get("/health")
    assert resp.status_code == 200
    assert resp.json()["data"] == {"status": "healthy"}
