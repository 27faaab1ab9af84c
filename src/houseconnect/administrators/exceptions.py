"""Exceptions raised by the administrator lifecycle."""

from houseconnect.exceptions import (
    DuplicateEmailError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)

__all__ = [
    "DuplicateEmailError",
    "ForbiddenError",
    "InvalidInputError",
    "NotFoundError",
]
