"""Process-wide service bundle.

Each surface builds one StorefrontContext at startup from AuthSettings and
passes it to every handler. Nothing here reads the environment or holds a
module-level singleton.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from storefront_auth.gate import AuthenticationGate
from storefront_auth.passwords import PasswordCredential
from storefront_auth.settings import AuthSettings
from storefront_auth.tokens import SessionToken


@dataclass(frozen=True)
class StorefrontContext:
    settings: AuthSettings
    tokens: SessionToken
    passwords: PasswordCredential
    gate: AuthenticationGate

    @classmethod
    def from_settings(
        cls,
        settings: AuthSettings,
        *,
        passwords: PasswordCredential | None = None,
        clock: Callable[[], float] = time.time,
    ) -> StorefrontContext:
        tokens = SessionToken(settings, clock=clock)
        return cls(
            settings=settings,
            tokens=tokens,
            passwords=passwords or PasswordCredential(),
            gate=AuthenticationGate(tokens),
        )
