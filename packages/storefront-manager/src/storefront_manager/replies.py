"""Transport-neutral JSON replies.

Both surfaces (FastAPI and Azure Functions) turn flow results into a
JsonReply here and only then into their own response type, so status codes
and error bodies cannot drift between them. Error bodies are always
`{"error": "<message>"}`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from storefront_shared.account_models import AccountResult
from storefront_shared.auth_models import AuthenticationResult
from storefront_shared.discount_models import DiscountEvaluation, LookupDiscountResult

from storefront_manager.accounts import (
    ACCOUNT_DISABLED,
    CONFLICT,
    INVALID_CREDENTIALS,
    INVALID_INPUT,
    STORE_FAILURE,
)

CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_ALLOW_HEADERS = ["Content-Type", "Authorization", "x-admin-token"]
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": ", ".join(CORS_ALLOW_METHODS),
    "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
}

ACCOUNT_ERROR_STATUS = {
    INVALID_INPUT: 400,
    INVALID_CREDENTIALS: 401,
    ACCOUNT_DISABLED: 403,
    CONFLICT: 409,
    STORE_FAILURE: 500,
}

MISSING_CREDENTIAL = "missing_credential"


@dataclass(frozen=True)
class JsonReply:
    status: int
    body: Any = None


def error_reply(status: int, message: str) -> JsonReply:
    return JsonReply(status, {"error": message})


def invalid_body_reply() -> JsonReply:
    return error_reply(400, "Invalid request body")


def account_reply(result: AccountResult, success_status: int = 200) -> JsonReply:
    """Signup (201) / login (200) / me (200) outcome."""
    if not result.success:
        status = ACCOUNT_ERROR_STATUS.get(result.error or STORE_FAILURE, 500)
        return error_reply(status, result.message)

    body: dict[str, Any] = {"user": result.user.model_dump() if result.user else None}
    if result.token:
        body = {"token": result.token, **body}
    return JsonReply(success_status, body)


def auth_failure_reply(result: AuthenticationResult) -> JsonReply:
    """401 for a rejected bearer credential.

    Only a missing header is named; every verification failure reads the same
    so a caller cannot tell a bad signature from an expired token.
    """
    if result.reason == MISSING_CREDENTIAL:
        return error_reply(401, "Missing Authorization header")
    return error_reply(401, "Authentication failed")


def discount_reply(result: LookupDiscountResult) -> JsonReply:
    """The discount record in storefront (camelCase) shape, or null."""
    if not result.success:
        return error_reply(500, "Failed to fetch discount")
    if result.discount is None:
        return JsonReply(200, None)
    return JsonReply(200, result.discount.model_dump(mode="json", by_alias=True))


def evaluation_reply(evaluation: DiscountEvaluation) -> JsonReply:
    """200 for any verdict, accepted or rejected; 500 only if the lookup broke."""
    if not evaluation.success and evaluation.reason is None:
        return error_reply(500, evaluation.message)
    return JsonReply(
        200,
        {
            "valid": evaluation.success,
            "code": evaluation.code,
            "reason": evaluation.reason.value if evaluation.reason else None,
            "message": evaluation.message,
            "amount": evaluation.amount,
            "minimumPurchase": evaluation.minimum_purchase,
            "requiredScope": evaluation.required_scope,
        },
    )
