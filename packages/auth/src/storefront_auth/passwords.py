"""Salted scrypt password hashing.

Stored credential format: `<salt>:<derived key>`, both lowercase hex. The salt
is 16 random bytes (32 hex chars) and the derived key 64 bytes (128 hex chars).

The salt goes into scrypt as the UTF-8 bytes of its hex text, not the raw 16
bytes. That is how the Node backends have always derived keys, and existing
account rows must keep verifying. For the same reason passwords are encoded
the way Node encodes a JS string: an unpaired surrogate (legal in a JSON
`\\ud800` escape) becomes U+FFFD instead of failing the encode. Anything after
a second colon in a stored credential is ignored, as the Node `split(':')`
ignores it.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets


def encode_password(password: str) -> bytes:
    """UTF-8 bytes of `password`, with unpaired surrogates replaced by U+FFFD."""
    # UTF-16 round trip pairs up surrogates and replaces the strays.
    text = password.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")
    return text.encode("utf-8")


class PasswordCredential:
    """Hashes new passwords and verifies them against stored credentials.

    Stateless apart from the scrypt cost parameters, so one instance can serve
    concurrent requests.
    """

    def __init__(
        self,
        *,
        n: int = 16384,
        r: int = 8,
        p: int = 1,
        key_length: int = 64,
        salt_bytes: int = 16,
    ) -> None:
        self.n = n
        self.r = r
        self.p = p
        self.key_length = key_length
        self.salt_bytes = salt_bytes

    def _derive(self, password: str, salt: str) -> bytes:
        return hashlib.scrypt(
            encode_password(password),
            salt=encode_password(salt),
            n=self.n,
            r=self.r,
            p=self.p,
            dklen=self.key_length,
        )

    def hash(self, password: str) -> str:
        """Return a fresh `salt:derivedKey` credential for `password`."""
        salt = secrets.token_hex(self.salt_bytes)
        return f"{salt}:{self._derive(password, salt).hex()}"

    def verify(self, password: str, stored: str) -> bool:
        """Check `password` against a stored credential.

        Malformed credentials (no colon, empty half, non-hex key) are simply a
        mismatch; this never raises for bad input shape.
        """
        parts = stored.split(":")
        if len(parts) < 2:
            return False
        salt, key_hex = parts[0], parts[1]
        if not salt or not key_hex:
            return False

        try:
            expected = bytes.fromhex(key_hex)
        except ValueError:
            return False

        derived = self._derive(password, salt)
        if len(expected) != len(derived):
            return False
        return hmac.compare_digest(expected, derived)
