"""
Salted email digests for invite binding.

Invites store only a digest of the invited address. Acceptance recomputes
the digest from the caller's verified email and compares.
"""

import hashlib
import hmac

from ..auth.models import normalize_email


class Hasher:
    """
    Deterministic salted SHA-256 digest.

    Example:
        ```python
        hasher = Hasher(salt="long-random-secret")
        assert hasher.digest(" Foo@Bar.com ") == hasher.digest("foo@bar.com")
        ```
    """

    SEPARATOR = ":"

    def __init__(self, salt: str) -> None:
        if not salt:
            raise ValueError("Hasher requires a non-empty salt")
        self._salt = salt

    def digest(self, raw_value: str) -> str:
        """Hex digest of the lower-cased, trimmed value joined with the salt."""
        payload = f"{normalize_email(raw_value)}{self.SEPARATOR}{self._salt}"
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()

    def matches(self, raw_value: str, digest: str) -> bool:
        """Constant-time check of a raw value against a stored digest."""
        return hmac.compare_digest(self.digest(raw_value), digest)
