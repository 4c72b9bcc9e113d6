"""Pytest bootstrap configuration.

Shared fakes for exercising the Airwallex adapter without network access.
"""
import json

import pytest

from infrastructure.external.payments.airwallex_client import AirwallexClient
from domain.payment.entity import CreditCard


class FakeTransport:
    """Records every POST and replays queued JSON bodies in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []
        self.closed = False

    def queue(self, *responses):
        self.responses.extend(responses)

    def post(self, url, body=None, headers=None):
        self.calls.append({"url": url, "body": body, "headers": dict(headers or {})})
        if not self.responses:
            raise AssertionError(f"unexpected request to {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response if isinstance(response, str) else json.dumps(response)

    def close(self):
        self.closed = True

    @property
    def urls(self):
        return [call["url"] for call in self.calls]

    def body(self, index):
        return json.loads(self.calls[index]["body"])


class FakeSession:
    client_id = "client-id"

    def current_token(self):
        return "tok_test"

    def authorization_header(self):
        return {"Authorization": "Bearer tok_test"}


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def make_transport():
    return FakeTransport


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def gateway(session, transport):
    return AirwallexClient(session=session, transport=transport)


@pytest.fixture
def card():
    return CreditCard(
        number="4111111111111111",
        month=9,
        year=2030,
        verification_value="123",
        first_name="Longbob",
        last_name="Longsen",
    )
