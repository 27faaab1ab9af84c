"""Exceptions raised by the authentication service."""

from houseconnect.exceptions import (
    DuplicateEmailError,
    InvalidInputError,
    RateLimitedError,
)

__all__ = [
    "DuplicateEmailError",
    "InvalidInputError",
    "RateLimitedError",
]
