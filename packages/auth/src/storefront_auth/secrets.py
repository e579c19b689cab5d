"""Secret resolution: Azure Key Vault through the managed identity, with an
environment variable fallback for local dev.

On App Service and Azure Functions the platform injects IDENTITY_ENDPOINT and
IDENTITY_HEADER. We trade those for a Key Vault access token, then read the
secret over the Key Vault REST API. Secret names use dashes
(`auth-jwt-secret`); the fallback environment variable is the same name
upper-cased with underscores (`AUTH_JWT_SECRET`).

Resolved values are cached on the resolver instance for five minutes. There is
no module-level cache: whoever builds the resolver owns its lifetime.

Usage:
    resolver = SecretResolver.from_env()
    settings = await AuthSettings.from_secrets(resolver)
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable, Mapping
from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from storefront_auth.errors import ConfigurationError

logger = logging.getLogger(__name__)

VAULT_RESOURCE = "https://vault.azure.net"
IDENTITY_API_VERSION = "2019-08-01"
VAULT_API_VERSION = "7.4"
DEFAULT_TTL_SECONDS = 5 * 60


def env_var_name(secret_name: str) -> str:
    """`sql-password` -> `SQL_PASSWORD`."""
    return secret_name.replace("-", "_").upper()


class SecretResolver:
    """Reads named secrets from Key Vault, falling back to the environment."""

    def __init__(
        self,
        vault_url: str | None = None,
        *,
        environ: Mapping[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.vault_url = vault_url.rstrip("/") if vault_url else None
        self.ttl_seconds = ttl_seconds
        self._environ = environ if environ is not None else os.environ
        self._client = client
        self._owns_client = client is None
        self._clock = clock
        self._cache: dict[str, tuple[str, float]] = {}

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SecretResolver:
        """Build a resolver from KEY_VAULT_URL (unset means environment only)."""
        environ = environ if environ is not None else os.environ
        return cls(environ.get("KEY_VAULT_URL") or None, environ=environ)

    async def get(self, name: str) -> str:
        """Return the secret value, from cache, Key Vault, or the environment."""
        cached = self._cache.get(name)
        if cached and self._clock() < cached[1]:
            return cached[0]

        if not self.vault_url:
            value = self._from_environment(name)
            if value:
                return value
            raise ConfigurationError(
                f"KEY_VAULT_URL not set and no env var found for {name}"
            )

        try:
            value = await self._fetch_from_vault(name)
        except (httpx.HTTPError, ConfigurationError, KeyError, ValueError) as e:
            logger.error(f"Key Vault error for '{name}': {e}")
            fallback = self._from_environment(name)
            if fallback:
                return fallback
            raise

        self._cache[name] = (value, self._clock() + self.ttl_seconds)
        return value

    async def preload(self, names: list[str]) -> None:
        """Warm the cache. Failures are logged, not raised."""
        for name in names:
            try:
                await self.get(name)
            except (httpx.HTTPError, ConfigurationError, KeyError, ValueError) as e:
                logger.warning(f"Could not preload secret '{name}': {e}")

    async def close(self) -> None:
        """Close the HTTP client if this resolver created it."""
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _from_environment(self, name: str) -> str | None:
        return self._environ.get(env_var_name(name)) or None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=10.0)
        return self._client

    async def _fetch_from_vault(self, name: str) -> str:
        identity_endpoint = self._environ.get("IDENTITY_ENDPOINT")
        if not identity_endpoint:
            raise ConfigurationError("IDENTITY_ENDPOINT is not set; no managed identity")

        client = self._get_client()
        token_response = await self._request_with_retry(
            client,
            "GET",
            identity_endpoint,
            params={"resource": VAULT_RESOURCE, "api-version": IDENTITY_API_VERSION},
            headers={"X-IDENTITY-HEADER": self._environ.get("IDENTITY_HEADER", "")},
        )
        access_token = token_response.json()["access_token"]

        secret_response = await self._request_with_retry(
            client,
            "GET",
            f"{self.vault_url}/secrets/{name}",
            params={"api-version": VAULT_API_VERSION},
            headers={"Authorization": f"Bearer {access_token}"},
        )
        return secret_response.json()["value"]

    @retry(
        retry=retry_if_exception_type((httpx.TransportError, httpx.TimeoutException)),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        stop=stop_after_attempt(3),
        reraise=True,
    )
    async def _request_with_retry(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make an HTTP request, retrying transient transport errors."""
        response = await client.request(method, url, **kwargs)
        response.raise_for_status()
        return response
