"""Error taxonomy shared by all HouseConnect components."""

from __future__ import annotations

from datetime import timedelta


class HouseConnectError(Exception):
    """Base exception for HouseConnect errors."""


class InvalidInputError(HouseConnectError):
    """Malformed or missing input."""


class ForbiddenError(HouseConnectError):
    """Credential mismatch, insufficient privilege, or inactive administrator."""


class NotFoundError(HouseConnectError):
    """Referenced entity does not exist."""


class DuplicateEmailError(HouseConnectError):
    """Email is already registered."""


class RateLimitedError(HouseConnectError):
    """Login lockout in effect for the identifier."""

    def __init__(self, message: str, retry_after: timedelta) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class UnavailableError(HouseConnectError):
    """Underlying store failure."""
