"""Auth domain models, shared by both HTTP surfaces and the manager flows."""

from pydantic import BaseModel, ConfigDict

from storefront_shared.models import StorefrontResult


class CustomerIdentity(BaseModel):
    """The customer a session token speaks for. Immutable once issued."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    name: str = ""


class SessionTokenPayload(BaseModel):
    """Decoded session token claims.

    `iat`/`exp` are epoch seconds; at issuance `exp - iat` is always one week.
    """

    sub: str
    email: str
    name: str = ""
    iat: int = 0
    exp: int

    def to_identity(self) -> CustomerIdentity:
        return CustomerIdentity(id=self.sub, email=self.email, name=self.name)


class AuthenticationResult(StorefrontResult):
    """Outcome of running a request's headers through the authentication gate.

    `reason` is one of missing_credential, malformed_token, invalid_signature,
    token_expired. It is for logs and tests; clients only ever see a generic
    failure message.
    """

    identity: CustomerIdentity | None = None
    reason: str | None = None
