"""Shared fixtures for auth tests.

Provides:
  - A fixed signing secret and AuthSettings built from it
  - A controllable clock so expiry can be tested to the second
  - A mock HTTP transport for the Key Vault / managed identity endpoints
"""

from __future__ import annotations

import httpx
import pytest
from storefront_auth.gate import AuthenticationGate
from storefront_auth.settings import AuthSettings
from storefront_auth.tokens import SessionToken
from storefront_shared.auth_models import CustomerIdentity

SECRET = "storefront-test-secret-that-is-long-enough-for-hs256"
ISSUED_AT = 1_760_000_000


class FakeClock:
    """Callable clock returning a settable epoch-seconds value."""

    def __init__(self, now: float = ISSUED_AT) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class MockTransport(httpx.AsyncBaseTransport):
    """Mock HTTP transport that returns preconfigured responses in order.

    Records every request so tests can assert on URLs and headers. When the
    list is exhausted, returns a 500 error.
    """

    def __init__(self, responses: list[httpx.Response] | None = None) -> None:
        self.responses = list(responses or [])
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responses:
            response = self.responses.pop(0)
            response.stream = httpx.ByteStream(response.content)
            return response
        return httpx.Response(500, json={"error": "No more mock responses"})


@pytest.fixture
def secret() -> str:
    return SECRET


@pytest.fixture
def issued_at() -> int:
    return ISSUED_AT


@pytest.fixture
def settings(secret: str) -> AuthSettings:
    return AuthSettings.from_secret(secret)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tokens(settings: AuthSettings, clock: FakeClock) -> SessionToken:
    return SessionToken(settings, clock=clock)


@pytest.fixture
def gate(tokens: SessionToken) -> AuthenticationGate:
    return AuthenticationGate(tokens)


@pytest.fixture
def customer() -> CustomerIdentity:
    return CustomerIdentity(id="cus-1718000000000-a1b2c3d4", email="nadia@example.com", name="Nadia")


@pytest.fixture
def make_transport():
    """Factory for MockTransport, so tests don't import from conftest."""
    return MockTransport
