"""Password hashing and verification."""

from __future__ import annotations

import hmac
from typing import Protocol

import bcrypt

from houseconnect.credentials.models import (
    HashedCredential,
    LegacyCredential,
    parse_credential,
)

# bcrypt only consumes the first 72 bytes of a secret
MAX_PASSWORD_BYTES = 72


class PasswordVerifier(Protocol):
    """One-way hash-and-verify capability."""

    def hash(self, plain: str) -> str:
        """Encode a plaintext password."""
        ...

    def verify(self, plain: str, encoded: str) -> bool:
        """Check a plaintext password against an encoded value."""
        ...


class BcryptPasswordVerifier:
    """PasswordVerifier backed by bcrypt.

    Encoded values carry the ``$2b$`` prefix. Values produced by other bcrypt
    implementations (``$2a$``, ``$2y$``) verify as well.
    """

    def __init__(self, rounds: int = 12) -> None:
        """Initialize the verifier.

        Args:
            rounds: bcrypt work factor (log2 of the iteration count).
        """
        self.rounds = rounds

    def hash(self, plain: str) -> str:
        secret = plain.encode("utf-8")
        if len(secret) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=self.rounds)).decode("ascii")

    def verify(self, plain: str, encoded: str) -> bool:
        secret = plain.encode("utf-8")
        if len(secret) > MAX_PASSWORD_BYTES:
            return False
        # $2y$ is the PHP spelling of the same algorithm
        if encoded.startswith("$2y$"):
            encoded = "$2b$" + encoded[4:]
        try:
            return bcrypt.checkpw(secret, encoded.encode("ascii"))
        except ValueError:
            # Malformed hash
            return False


def password_matches(raw: str, stored: str | None, verifier: PasswordVerifier) -> bool:
    """Check a raw password against a stored value, hashed or legacy.

    Args:
        raw: Password as supplied by the caller.
        stored: Password field of the account record.
        verifier: Hash capability used for encoded values.

    Returns:
        True if the password matches.
    """
    credential = parse_credential(stored)
    match credential:
        case HashedCredential(encoded=encoded):
            return verifier.verify(raw, encoded)
        case LegacyCredential(plaintext=plaintext):
            return hmac.compare_digest(plaintext.encode("utf-8"), raw.encode("utf-8"))
        case _:
            return False

