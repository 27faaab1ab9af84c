"""Custom exceptions for the account stores."""

from houseconnect.exceptions import DuplicateEmailError, UnavailableError


class AccountStoreError(UnavailableError):
    """Underlying database operation failed."""


class AccountExistsError(DuplicateEmailError):
    """An account with this email already exists in the store."""
