"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request

from houseconnect.account_store import AccountStores
from houseconnect.administrators import AdministratorLifecycle
from houseconnect.authentication import AccountRegistration, AuthenticationService
from houseconnect.config import Settings
from houseconnect.credentials import BcryptPasswordVerifier
from houseconnect.rate_limiter import LoginRateLimiter

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Components wired together for one application instance."""

    settings: Settings
    stores: AccountStores
    rate_limiter: LoginRateLimiter
    authentication: AuthenticationService
    registration: AccountRegistration
    administrators: AdministratorLifecycle

    def close(self) -> None:
        """Release the database connection."""
        self.stores.close()


def build_services(settings: Settings) -> Services:
    """Construct every component from one Settings instance."""
    stores = AccountStores.open(settings.db_path)
    verifier = BcryptPasswordVerifier(rounds=settings.bcrypt_rounds)
    rate_limiter = LoginRateLimiter(
        max_attempts=settings.max_failed_attempts,
        lockout=settings.lockout,
    )
    authentication = AuthenticationService.from_stores(stores, verifier, rate_limiter)
    registration = AccountRegistration(
        students=stores.students,
        landlords=stores.landlords,
        authentication=authentication,
        verifier=verifier,
    )
    administrators = AdministratorLifecycle(
        administrators=stores.administrators,
        landlords=stores.landlords,
        verifications=stores.verifications,
        verifier=verifier,
    )
    logger.info(
        "Services initialized (max_failed_attempts=%d, lockout_minutes=%d)",
        settings.max_failed_attempts,
        settings.lockout_minutes,
    )
    return Services(
        settings=settings,
        stores=stores,
        rate_limiter=rate_limiter,
        authentication=authentication,
        registration=registration,
        administrators=administrators,
    )


def get_services(request: Request) -> Services:
    """Dependency that provides the application's Services."""
    services: Services | None = getattr(request.app.state, "services", None)
    if services is None:
        raise RuntimeError("Services not initialized. Start the app through its lifespan.")
    return services


ServicesDep = Annotated[Services, Depends(get_services)]


def get_authentication_service(services: ServicesDep) -> AuthenticationService:
    """Dependency that provides the AuthenticationService."""
    return services.authentication


def get_registration(services: ServicesDep) -> AccountRegistration:
    """Dependency that provides AccountRegistration."""
    return services.registration


def get_administrator_lifecycle(services: ServicesDep) -> AdministratorLifecycle:
    """Dependency that provides the AdministratorLifecycle."""
    return services.administrators


# Type aliases for dependency injection
AuthenticationDep = Annotated[AuthenticationService, Depends(get_authentication_service)]
RegistrationDep = Annotated[AccountRegistration, Depends(get_registration)]
AdministratorsDep = Annotated[AdministratorLifecycle, Depends(get_administrator_lifecycle)]
