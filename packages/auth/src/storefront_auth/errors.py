"""Errors raised by the auth library.

Authentication errors carry a stable `reason` code. The gate turns them into
an AuthenticationResult, and the HTTP surfaces only ever show the client a
generic message so a caller cannot tell which check failed.
"""


class ConfigurationError(Exception):
    """A required setting (e.g. the token signing secret) is missing. Fatal."""


class AuthenticationError(Exception):
    """Base class for every reason a bearer credential is refused."""

    reason = "authentication_failed"


class MissingCredentialError(AuthenticationError):
    """No `Authorization: Bearer <token>` header on the request."""

    reason = "missing_credential"


class MalformedTokenError(AuthenticationError):
    """Wrong segment count, undecodable payload, or required claims absent."""

    reason = "malformed_token"


class InvalidSignatureError(AuthenticationError):
    """HMAC does not match, or the header names an algorithm other than HS256."""

    reason = "invalid_signature"


class TokenExpiredError(AuthenticationError):
    """`now >= exp`."""

    reason = "token_expired"
