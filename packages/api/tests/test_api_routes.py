"""End-to-end tests for the FastAPI surface.

Stores are patched at the manager seam; everything above them (validation,
the gate, status mapping, CORS) runs for real through TestClient.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient
from storefront_api.app import create_app, create_app_from_env
from storefront_auth.errors import ConfigurationError
from storefront_auth.passwords import PasswordCredential
from storefront_auth.settings import AuthSettings
from storefront_manager.context import StorefrontContext
from storefront_shared.account_models import (
    CustomerAccount,
    EnrollAccountResult,
    FindAccountResult,
)
from storefront_shared.auth_models import CustomerIdentity
from storefront_shared.discount_models import DiscountCode, LookupDiscountResult

SECRET = "storefront-api-test-secret-0123456789abcdef"


@pytest.fixture
def ctx() -> StorefrontContext:
    return StorefrontContext.from_settings(
        AuthSettings.from_secret(SECRET), passwords=PasswordCredential(n=1024)
    )


@pytest.fixture
def client(ctx: StorefrontContext) -> TestClient:
    return TestClient(create_app(ctx.settings, context=ctx))


@pytest.fixture
def account(ctx: StorefrontContext) -> CustomerAccount:
    return CustomerAccount(
        id="cus-1718000000000-a1b2c3d4",
        name="Nadia Rahman",
        email="nadia@example.com",
        password_hash=ctx.passwords.hash("correct-horse-9"),
    )


def _found(account: CustomerAccount | None):
    return patch(
        "storefront_manager.accounts.find_account",
        AsyncMock(return_value=FindAccountResult(success=True, message="ok", account=account)),
    )


def _discount(**overrides) -> DiscountCode:
    now = datetime.now(UTC)
    fields = {
        "id": "d1",
        "code": "NOVA20",
        "type": "percentage",
        "value": 20,
        "applies_to": "products",
        "min_purchase": 500,
        "start_date": now - timedelta(days=1),
        "end_date": now + timedelta(days=30),
    }
    fields.update(overrides)
    return DiscountCode(**fields)


def _lookup(discount: DiscountCode | None):
    return patch(
        "storefront_manager.promos.lookup_discount",
        AsyncMock(return_value=LookupDiscountResult(success=True, message="ok", discount=discount)),
    )


# ============================================================================
# /api/auth
# ============================================================================


class TestSignup:
    def test_created(self, client: TestClient, account: CustomerAccount):
        enrolled = EnrollAccountResult(success=True, message="ok", account=account)
        with _found(None), patch(
            "storefront_manager.accounts.enroll_account", AsyncMock(return_value=enrolled)
        ):
            response = client.post(
                "/api/auth/signup",
                json={"name": "Nadia Rahman", "email": "nadia@example.com", "password": "correct-horse-9"},
            )

        assert response.status_code == 201
        body = response.json()
        assert body["user"] == {"id": account.id, "email": "nadia@example.com", "name": "Nadia Rahman"}
        assert body["token"].count(".") == 2

    def test_conflict(self, client: TestClient, account: CustomerAccount):
        with _found(account):
            response = client.post(
                "/api/auth/signup",
                json={"name": "Nadia", "email": "nadia@example.com", "password": "correct-horse-9"},
            )

        assert response.status_code == 409
        assert response.json() == {"error": "An account with this email already exists"}

    def test_empty_body_is_a_validation_message(self, client: TestClient):
        response = client.post("/api/auth/signup", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Name is required"}

    def test_unparsable_body(self, client: TestClient):
        response = client.post(
            "/api/auth/signup", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}


class TestLogin:
    def test_ok(self, client: TestClient, account: CustomerAccount):
        with _found(account):
            response = client.post(
                "/api/auth/login", json={"email": "nadia@example.com", "password": "correct-horse-9"}
            )

        assert response.status_code == 200
        assert response.json()["user"]["id"] == account.id

    def test_wrong_password(self, client: TestClient, account: CustomerAccount):
        with _found(account):
            response = client.post(
                "/api/auth/login", json={"email": "nadia@example.com", "password": "nope-nope"}
            )

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid email or password"}

    def test_disabled(self, client: TestClient, account: CustomerAccount):
        with _found(account.model_copy(update={"is_active": False})):
            response = client.post(
                "/api/auth/login", json={"email": "nadia@example.com", "password": "correct-horse-9"}
            )

        assert response.status_code == 403


class TestMe:
    def test_with_valid_token(self, client: TestClient, ctx: StorefrontContext):
        user = CustomerIdentity(id="cus-1", email="a@b.co", name="A")
        token = ctx.tokens.sign(user)

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json() == {"user": {"id": "cus-1", "email": "a@b.co", "name": "A"}}

    def test_missing_header(self, client: TestClient):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json() == {"error": "Missing Authorization header"}

    def test_forged_token(self, client: TestClient):
        other = StorefrontContext.from_settings(
            AuthSettings.from_secret("some-other-secret-entirely-0123456789")
        )
        token = other.tokens.sign(CustomerIdentity(id="cus-1", email="a@b.co"))

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication failed"}


# ============================================================================
# /api/discounts
# ============================================================================


class TestDiscounts:
    def test_get_by_code(self, client: TestClient):
        with _lookup(_discount()) as lookup:
            response = client.get("/api/discounts/code/nova20")

        assert response.status_code == 200
        assert response.json()["code"] == "NOVA20"
        assert response.json()["appliesTo"] == "products"
        assert lookup.await_args.args[0].active_only is True

    def test_get_unknown_code_is_null(self, client: TestClient):
        with _lookup(None):
            response = client.get("/api/discounts/code/NOPE")

        assert response.status_code == 200
        assert response.json() is None

    def test_validate_accepted(self, client: TestClient):
        with _lookup(_discount()):
            response = client.post(
                "/api/discounts/validate",
                json={"code": "nova20", "appliesTo": "products", "subtotal": 1000},
            )

        assert response.status_code == 200
        body = response.json()
        assert body["valid"] is True
        assert body["amount"] == 200

    def test_validate_rejected(self, client: TestClient):
        with _lookup(_discount()):
            response = client.post(
                "/api/discounts/validate",
                json={"code": "NOVA20", "appliesTo": "events", "subtotal": 1000},
            )

        body = response.json()
        assert response.status_code == 200
        assert body["valid"] is False
        assert body["reason"] == "scope_mismatch"
        assert body["message"] == "This code applies to products only"

    def test_validate_bad_scope(self, client: TestClient):
        response = client.post(
            "/api/discounts/validate",
            json={"code": "NOVA20", "appliesTo": "groceries", "subtotal": 1000},
        )

        assert response.status_code == 400


def test_cors_preflight(client: TestClient):
    response = client.options(
        "/api/auth/login",
        headers={"Origin": "https://shop.example.com", "Access-Control-Request-Method": "POST"},
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


def test_missing_secret_stops_startup():
    with patch.dict("os.environ", {}, clear=True):
        with pytest.raises(ConfigurationError):
            create_app_from_env()
