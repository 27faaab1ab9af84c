"""Credentials - password hashing and legacy-tolerant verification."""

from houseconnect.credentials.models import (
    HASH_PREFIXES,
    Credential,
    HashedCredential,
    LegacyCredential,
    parse_credential,
)
from houseconnect.credentials.verifier import (
    MAX_PASSWORD_BYTES,
    BcryptPasswordVerifier,
    PasswordVerifier,
    password_matches,
)

__all__ = [
    "HASH_PREFIXES",
    "MAX_PASSWORD_BYTES",
    "BcryptPasswordVerifier",
    "Credential",
    "HashedCredential",
    "LegacyCredential",
    "PasswordVerifier",
    "parse_credential",
    "password_matches",
]
