"""Data models for the authentication service."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from houseconnect.account_store import AccountStore

_ROLE_ALIASES = {
    "ADMIN": "ADMIN",
    "ADMINISTRATOR": "ADMIN",
    "LANDLORD": "LANDLORD",
    "STUDENT": "STUDENT",
}


class AccountRole(StrEnum):
    """Kinds of account that can sign in."""

    STUDENT = "STUDENT"
    LANDLORD = "LANDLORD"
    ADMIN = "ADMIN"

    @classmethod
    def parse(cls, value: str) -> AccountRole | None:
        """Normalize a caller-supplied role hint, or None if unrecognized."""
        canonical = _ROLE_ALIASES.get(value.strip().upper())
        return cls(canonical) if canonical is not None else None


def _no_status_message(_account: Any) -> str | None:
    return None


@dataclass(frozen=True)
class RoleResolver:
    """One entry in the login precedence list.

    Attributes:
        role: Role granted when this store matches.
        store: Store holding accounts of this role.
        status_message: Message for an account whose credentials match but
            which may not sign in yet (e.g. a pending administrator).
    """

    role: AccountRole
    store: AccountStore[Any]
    status_message: Callable[[Any], str | None] = field(default=_no_status_message)


@dataclass(frozen=True)
class LoginSuccess:
    """Credentials matched an active account."""

    role: AccountRole
    account_id: str
    email: str
    is_super_admin: bool | None = None
    message: str = "Login successful"

    @property
    def authenticated(self) -> bool:
        return True


@dataclass(frozen=True)
class LoginFailure:
    """Login rejected. The message never reveals which store was involved."""

    message: str

    @property
    def authenticated(self) -> bool:
        return False


LoginOutcome = LoginSuccess | LoginFailure


@dataclass
class StudentSignup:
    """Fields for registering a student account."""

    email: str
    password: str
    first_name: str
    last_name: str
    funding_status: str | None = None


@dataclass
class LandlordSignup:
    """Fields for registering a landlord account."""

    email: str
    password: str
    first_name: str
    last_name: str
