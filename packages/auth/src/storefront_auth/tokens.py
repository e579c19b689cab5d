"""Customer session tokens.

A session token is a compact HS256 JWT we issue and verify ourselves:

    base64url({"alg":"HS256","typ":"JWT"}).base64url(payload).base64url(hmac)

with payload `{sub, email, name, iat, exp}` and `exp = iat + 7 days`. Tokens
are never refreshed; login issues a new one.

Verification order matters. The HMAC over the first two segments is checked
before the payload is even decoded, so a tampered payload always fails as a
signature error. The algorithm is fixed at HS256: the token header is only
ever checked against it, never used to choose it.
"""

from __future__ import annotations

import hmac
import time
from collections.abc import Callable

import jwt as pyjwt
from jwt.algorithms import HMACAlgorithm
from jwt.utils import base64url_decode
from pydantic import ValidationError
from storefront_shared.auth_models import CustomerIdentity, SessionTokenPayload

from storefront_auth.errors import (
    InvalidSignatureError,
    MalformedTokenError,
    TokenExpiredError,
)
from storefront_auth.settings import AuthSettings

TOKEN_TTL_SECONDS = 60 * 60 * 24 * 7
ALGORITHM = "HS256"


class SessionToken:
    """Signs and verifies customer session tokens with the configured secret."""

    def __init__(self, settings: AuthSettings, clock: Callable[[], float] = time.time) -> None:
        self._secret = settings.token_secret.get_secret_value()
        self._hmac = HMACAlgorithm(HMACAlgorithm.SHA256)
        self._key = self._hmac.prepare_key(self._secret)
        self._clock = clock

    def _now(self) -> int:
        return int(self._clock())

    def sign(self, identity: CustomerIdentity) -> str:
        """Issue a fresh token for `identity`, valid for seven days."""
        now = self._now()
        payload = SessionTokenPayload(
            sub=identity.id,
            email=identity.email,
            name=identity.name,
            iat=now,
            exp=now + TOKEN_TTL_SECONDS,
        )
        return pyjwt.encode(payload.model_dump(), self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> SessionTokenPayload:
        """Return the payload of a valid, unexpired token.

        Raises:
            MalformedTokenError: Not three segments, undecodable payload, or
                sub/email missing.
            InvalidSignatureError: HMAC mismatch or a non-HS256 header.
            TokenExpiredError: now >= exp.
        """
        parts = token.split(".")
        if len(parts) != 3:
            raise MalformedTokenError("Invalid token format")

        encoded_header, encoded_payload, encoded_signature = parts
        signing_input = f"{encoded_header}.{encoded_payload}".encode()
        expected = self._hmac.sign(signing_input, self._key)
        try:
            provided = base64url_decode(encoded_signature)
        except ValueError:
            provided = b""

        if len(expected) != len(provided) or not hmac.compare_digest(expected, provided):
            raise InvalidSignatureError("Invalid token signature")

        try:
            claims = pyjwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={
                    "require": ["sub", "email"],
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "verify_aud": False,
                },
            )
        except pyjwt.InvalidAlgorithmError as e:
            raise InvalidSignatureError(f"Unexpected token algorithm: {e}") from e
        except pyjwt.InvalidTokenError as e:
            raise MalformedTokenError(f"Invalid token payload: {e}") from e

        if "exp" not in claims:
            raise TokenExpiredError("Token expired")

        try:
            payload = SessionTokenPayload.model_validate(claims)
        except ValidationError as e:
            raise MalformedTokenError("Invalid token payload") from e

        if not payload.sub or not payload.email:
            raise MalformedTokenError("Invalid token payload")
        if self._now() >= payload.exp:
            raise TokenExpiredError("Token expired")

        return payload
