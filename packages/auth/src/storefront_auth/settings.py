"""Auth configuration.

AuthSettings is built once at startup and handed to SessionToken; nothing in
this library reads the environment on its own. A missing signing secret fails
here, at construction, never in the middle of a request.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, SecretStr

from storefront_auth.errors import ConfigurationError
from storefront_auth.secrets import SecretResolver

TOKEN_SECRET_ENV_VAR = "AUTH_JWT_SECRET"
TOKEN_SECRET_NAME = "auth-jwt-secret"


class AuthSettings(BaseModel):
    """Process-wide auth configuration. Read-only after startup."""

    model_config = ConfigDict(frozen=True)

    token_secret: SecretStr

    @classmethod
    def from_secret(cls, secret: str | None) -> AuthSettings:
        if not secret:
            raise ConfigurationError(f"{TOKEN_SECRET_ENV_VAR} is not configured")
        return cls(token_secret=SecretStr(secret))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AuthSettings:
        """Read the signing secret from AUTH_JWT_SECRET."""
        environ = environ if environ is not None else os.environ
        return cls.from_secret(environ.get(TOKEN_SECRET_ENV_VAR))

    @classmethod
    async def from_secrets(cls, resolver: SecretResolver) -> AuthSettings:
        """Read the signing secret through Key Vault (or its env fallback)."""
        return cls.from_secret(await resolver.get(TOKEN_SECRET_NAME))
