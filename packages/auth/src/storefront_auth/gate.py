"""Authentication gate shared by every transport.

Both surfaces (the FastAPI router and the Azure Functions app) call
`AuthenticationGate.authenticate(headers)` before dispatching a protected
route: extract the bearer token, verify it, then either hand the handler a
CustomerIdentity or reject the request. The gate only needs a mapping of
headers, so the same code serves Starlette `Headers`, Azure Functions
`HttpRequestHeaders`, and plain dicts in tests.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from storefront_shared.auth_models import AuthenticationResult

from storefront_auth.errors import AuthenticationError, MissingCredentialError
from storefront_auth.tokens import SessionToken

logger = logging.getLogger(__name__)

BEARER_PATTERN = re.compile(r"^Bearer\s+(.+)$", re.IGNORECASE)


def _header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    # Plain dicts are case-sensitive; framework header maps are not.
    wanted = name.lower()
    for key, candidate in headers.items():
        if key.lower() == wanted:
            return candidate
    return None


def extract_bearer_token(headers: Mapping[str, str]) -> str | None:
    """Return the token from `Authorization: Bearer <token>`, or None."""
    authorization = _header(headers, "authorization")
    if not authorization:
        return None
    match = BEARER_PATTERN.match(authorization)
    return match.group(1) if match else None


class AuthenticationGate:
    """Extract -> verify -> identity-or-rejection, for any transport."""

    def __init__(self, tokens: SessionToken) -> None:
        self.tokens = tokens

    def authenticate(self, headers: Mapping[str, str]) -> AuthenticationResult:
        token = extract_bearer_token(headers)
        try:
            if token is None:
                raise MissingCredentialError("Missing Authorization header")
            payload = self.tokens.verify(token)
        except AuthenticationError as e:
            logger.info(f"Rejected customer request: {e.reason}")
            return AuthenticationResult(success=False, message=str(e), reason=e.reason)

        return AuthenticationResult(
            success=True,
            message="Authenticated",
            identity=payload.to_identity(),
        )
