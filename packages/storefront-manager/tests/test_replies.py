"""Tests for the status-code and body mapping shared by both surfaces."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from storefront_manager.replies import (
    CORS_HEADERS,
    JsonReply,
    account_reply,
    auth_failure_reply,
    discount_reply,
    error_reply,
    evaluation_reply,
)
from storefront_shared.account_models import AccountResult
from storefront_shared.auth_models import AuthenticationResult, CustomerIdentity
from storefront_shared.discount_models import (
    DiscountCode,
    DiscountEvaluation,
    DiscountRejection,
    LookupDiscountResult,
)

USER = CustomerIdentity(id="cus-1", email="a@b.co", name="A")


def test_error_body_shape():
    assert error_reply(418, "teapot") == JsonReply(418, {"error": "teapot"})


def test_cors_headers():
    assert CORS_HEADERS == {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Authorization, x-admin-token",
    }


class TestAccountReply:
    def test_signup_success(self):
        result = AccountResult(success=True, message="ok", token="t.o.k", user=USER)

        reply = account_reply(result, success_status=201)

        assert reply.status == 201
        assert reply.body == {"token": "t.o.k", "user": {"id": "cus-1", "email": "a@b.co", "name": "A"}}

    def test_me_has_no_token(self):
        reply = account_reply(AccountResult(success=True, message="ok", user=USER))
        assert reply == JsonReply(200, {"user": {"id": "cus-1", "email": "a@b.co", "name": "A"}})

    @pytest.mark.parametrize(
        "error,status",
        [
            ("invalid_input", 400),
            ("invalid_credentials", 401),
            ("account_disabled", 403),
            ("conflict", 409),
            ("store_failure", 500),
            (None, 500),
        ],
    )
    def test_error_statuses(self, error, status):
        reply = account_reply(AccountResult(success=False, message="nope", error=error))
        assert reply == JsonReply(status, {"error": "nope"})


class TestAuthFailureReply:
    def test_missing_header_is_named(self):
        result = AuthenticationResult(success=False, message="x", reason="missing_credential")
        assert auth_failure_reply(result) == JsonReply(401, {"error": "Missing Authorization header"})

    @pytest.mark.parametrize("reason", ["malformed_token", "invalid_signature", "token_expired"])
    def test_verification_failures_are_indistinguishable(self, reason):
        result = AuthenticationResult(success=False, message="detail", reason=reason)
        assert auth_failure_reply(result) == JsonReply(401, {"error": "Authentication failed"})


class TestDiscountReply:
    def test_camel_case_record(self):
        discount = DiscountCode(
            id="d1",
            code="NOVA20",
            type="percentage",
            value=20,
            applies_to="products",
            min_purchase=500,
            start_date=datetime(2026, 2, 1, tzinfo=UTC),
            end_date=datetime(2026, 3, 31, tzinfo=UTC),
        )

        reply = discount_reply(LookupDiscountResult(success=True, message="ok", discount=discount))

        assert reply.status == 200
        assert reply.body["appliesTo"] == "products"
        assert reply.body["minPurchase"] == 500
        assert reply.body["isActive"] is True
        assert reply.body["startDate"].startswith("2026-02-01T00:00:00")

    def test_absent_is_null(self):
        assert discount_reply(LookupDiscountResult(success=True, message="none")) == JsonReply(200, None)

    def test_store_failure(self):
        reply = discount_reply(LookupDiscountResult(success=False, message="boom"))
        assert reply.status == 500


class TestEvaluationReply:
    def test_accepted(self):
        evaluation = DiscountEvaluation(success=True, message="applied", code="NOVA20", amount=500)

        reply = evaluation_reply(evaluation)

        assert reply == JsonReply(
            200,
            {
                "valid": True,
                "code": "NOVA20",
                "reason": None,
                "message": "applied",
                "amount": 500,
                "minimumPurchase": None,
                "requiredScope": None,
            },
        )

    def test_rejection_is_still_200(self):
        evaluation = DiscountEvaluation(
            success=False,
            message="Minimum purchase of BDT 500 required",
            code="NOVA20",
            reason=DiscountRejection.MINIMUM_PURCHASE_NOT_MET,
            minimum_purchase=500,
        )

        reply = evaluation_reply(evaluation)

        assert reply.status == 200
        assert reply.body["valid"] is False
        assert reply.body["reason"] == "minimum_purchase_not_met"
        assert reply.body["minimumPurchase"] == 500

    def test_lookup_failure_is_500(self):
        evaluation = DiscountEvaluation(success=False, message="Failed to validate code")
        assert evaluation_reply(evaluation) == JsonReply(500, {"error": "Failed to validate code"})
