"""Password hashing built on werkzeug's security helpers."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

# Method tags werkzeug writes at the start of every digest it produces, plus
# the BCrypt marker of digests carried over from the previous backend. Those
# never verify here but must not be mistaken for plaintext.
DIGEST_PREFIXES = ("scrypt:", "pbkdf2:", "$2")


class PasswordHasher:
    """One-way hashing of account passwords."""

    def __init__(self, method: str = "scrypt") -> None:
        self.method = method

    def hash(self, plaintext: str) -> str:
        return generate_password_hash(plaintext, method=self.method)

    def verify(self, plaintext: str, digest: str | None) -> bool:
        """Check ``plaintext`` against ``digest``; malformed digests never match."""

        if not digest:
            return False
        try:
            return check_password_hash(digest, plaintext)
        except ValueError:
            # Stored value is not a werkzeug digest (e.g. legacy plaintext with '$').
            return False

    @staticmethod
    def is_digest(value: str | None) -> bool:
        """Return True when ``value`` carries a hashed-digest prefix."""

        return bool(value) and value.startswith(DIGEST_PREFIXES)
