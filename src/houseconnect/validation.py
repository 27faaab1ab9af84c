"""Input checks shared by the service layer."""

from __future__ import annotations

from houseconnect.credentials import MAX_PASSWORD_BYTES
from houseconnect.exceptions import InvalidInputError


def require_text(value: str | None, field_name: str) -> str:
    """Return ``value`` stripped, or raise if it is missing or blank."""
    if value is None or not value.strip():
        raise InvalidInputError(f"{field_name} is required")
    return value.strip()


def require_password(value: str | None, field_name: str = "password") -> str:
    """Return a password suitable for hashing. The value is not stripped."""
    if value is None or not value.strip():
        raise InvalidInputError(f"{field_name} is required")
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise InvalidInputError(f"{field_name} must be at most {MAX_PASSWORD_BYTES} bytes")
    return value
