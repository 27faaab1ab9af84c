"""AuthenticationService - Resolves logins across the per-role account stores."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

from houseconnect.account_store import Administrator, AdminRoleStatus
from houseconnect.authentication.exceptions import InvalidInputError, RateLimitedError
from houseconnect.authentication.models import (
    AccountRole,
    LoginFailure,
    LoginOutcome,
    LoginSuccess,
    RoleResolver,
)
from houseconnect.credentials import password_matches
from houseconnect.identifiers import normalize_identifier
from houseconnect.logging import mask_email

if TYPE_CHECKING:
    from collections.abc import Sequence

    from houseconnect.account_store import AccountStores
    from houseconnect.credentials import PasswordVerifier
    from houseconnect.rate_limiter import LoginRateLimiter

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password."
INVALID_CREDENTIALS_FOR_ROLE = "Invalid email or password for the selected account type."
ADMIN_PENDING = "Your administrator account is awaiting approval."
ADMIN_SUSPENDED = "Your administrator account has been suspended."


def administrator_status_message(admin: Administrator) -> str | None:
    """Login message for an administrator who may not sign in."""
    match admin.admin_role_status:
        case AdminRoleStatus.SUSPENDED:
            return ADMIN_SUSPENDED
        case AdminRoleStatus.INACTIVE:
            return ADMIN_PENDING
        case _:
            return None


class AuthenticationService:
    """Determines which account a credential pair belongs to.

    Without a role hint the stores are tried in precedence order (by default
    administrator, then landlord, then student). A pending or suspended
    administrator does not stop the search, because the same email may belong
    to an active account of another role.
    """

    def __init__(
        self,
        resolvers: Sequence[RoleResolver],
        verifier: PasswordVerifier,
        rate_limiter: LoginRateLimiter,
    ) -> None:
        """Initialize the service.

        Args:
            resolvers: Role/store pairs in login precedence order.
            verifier: Hash capability for encoded passwords.
            rate_limiter: Shared failed-attempt tracker.
        """
        if not resolvers:
            raise ValueError("At least one role resolver is required")
        self._resolvers = tuple(resolvers)
        self._by_role = {resolver.role: resolver for resolver in self._resolvers}
        self._verifier = verifier
        self._rate_limiter = rate_limiter

    @classmethod
    def from_stores(
        cls,
        stores: AccountStores,
        verifier: PasswordVerifier,
        rate_limiter: LoginRateLimiter,
    ) -> AuthenticationService:
        """Build the service with the standard precedence order."""
        resolvers = [
            RoleResolver(AccountRole.ADMIN, stores.administrators, administrator_status_message),
            RoleResolver(AccountRole.LANDLORD, stores.landlords),
            RoleResolver(AccountRole.STUDENT, stores.students),
        ]
        return cls(resolvers, verifier, rate_limiter)

    @property
    def precedence(self) -> tuple[AccountRole, ...]:
        """Roles in the order they are tried."""
        return tuple(resolver.role for resolver in self._resolvers)

    def email_exists(self, email: str | None) -> bool:
        """Whether the email belongs to an account of any role."""
        if email is None or not email.strip():
            return False
        normalized = normalize_identifier(email)
        return any(resolver.store.exists_by_email(normalized) for resolver in self._resolvers)

    def login(
        self,
        identifier: str | None,
        password: str | None,
        role_hint: str | None = None,
    ) -> LoginOutcome:
        """Authenticate a credential pair.

        Args:
            identifier: Email or username.
            password: Raw password.
            role_hint: Optional role restricting the lookup to one store.

        Returns:
            LoginSuccess or LoginFailure.

        Raises:
            InvalidInputError: If a field is blank or the role hint is unknown.
            RateLimitedError: If the identifier is locked out.
        """
        if identifier is None or not identifier.strip() or password is None or not password.strip():
            raise InvalidInputError("Email and password are required")

        email = normalize_identifier(identifier)
        resolver = None
        if role_hint is not None and role_hint.strip():
            role = AccountRole.parse(role_hint)
            resolver = self._by_role.get(role) if role is not None else None
            if resolver is None:
                raise InvalidInputError("Unknown account type selected.")

        if self._rate_limiter.is_blocked(email):
            remaining = self._rate_limiter.time_until_unlock(email)
            minutes = max(1, math.ceil(remaining.total_seconds() / 60))
            logger.info("Login refused for locked identifier %s", mask_email(email))
            raise RateLimitedError(
                f"Too many failed attempts. Please try again in {minutes} "
                f"minute{'' if minutes == 1 else 's'}.",
                retry_after=remaining,
            )

        if resolver is not None:
            outcome = self._authenticate_for_role(resolver, email, password)
        else:
            outcome = self._authenticate_any_role(email, password)

        if isinstance(outcome, LoginSuccess):
            self._rate_limiter.reset_attempts(email)
            logger.info("Login succeeded for %s as %s", mask_email(email), outcome.role)
        else:
            self._rate_limiter.record_failed_attempt(email)
            logger.info("Login failed for %s", mask_email(email))
        return outcome

    def _matching_account(self, resolver: RoleResolver, email: str, password: str) -> Any | None:
        account = resolver.store.find_by_email(email)
        if account is None or not password_matches(password, account.password, self._verifier):
            return None
        return account

    def _authenticate_for_role(
        self, resolver: RoleResolver, email: str, password: str
    ) -> LoginOutcome:
        account = self._matching_account(resolver, email, password)
        if account is None:
            return LoginFailure(INVALID_CREDENTIALS_FOR_ROLE)
        if not account.is_active:
            return LoginFailure(resolver.status_message(account) or INVALID_CREDENTIALS_FOR_ROLE)
        return self._success(resolver.role, account)

    def _authenticate_any_role(self, email: str, password: str) -> LoginOutcome:
        held_message: str | None = None
        for resolver in self._resolvers:
            account = self._matching_account(resolver, email, password)
            if account is None:
                continue
            if account.is_active:
                return self._success(resolver.role, account)
            # Keep looking: the email may also belong to an active account
            if held_message is None:
                held_message = resolver.status_message(account)
        return LoginFailure(held_message or INVALID_CREDENTIALS)

    @staticmethod
    def _success(role: AccountRole, account: Any) -> LoginSuccess:
        is_super_admin = account.super_admin if isinstance(account, Administrator) else None
        return LoginSuccess(
            role=role,
            account_id=account.id,
            email=account.email,
            is_super_admin=is_super_admin,
        )
