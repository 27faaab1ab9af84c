"""Stored credential forms."""

from __future__ import annotations

from dataclasses import dataclass

# bcrypt modular-crypt prefixes
HASH_PREFIXES = ("$2a$", "$2b$", "$2y$")


@dataclass(frozen=True)
class HashedCredential:
    """A stored password that is already one-way encoded."""

    encoded: str


@dataclass(frozen=True)
class LegacyCredential:
    """A stored password persisted as plaintext by older account records."""

    plaintext: str

    def __repr__(self) -> str:
        return "LegacyCredential(plaintext='***')"


Credential = HashedCredential | LegacyCredential


def parse_credential(stored: str | None) -> Credential | None:
    """Classify a stored password value by its prefix.

    Returns:
        HashedCredential for bcrypt-encoded values, LegacyCredential for any
        other non-empty value, or None when nothing is stored.
    """
    if stored is None or not stored.strip():
        return None
    if stored.startswith(HASH_PREFIXES):
        return HashedCredential(encoded=stored)
    return LegacyCredential(plaintext=stored)
