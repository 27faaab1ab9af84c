"""Authentication - Login resolution across student, landlord and administrator stores."""

from houseconnect.authentication.models import (
    AccountRole,
    LandlordSignup,
    LoginFailure,
    LoginOutcome,
    LoginSuccess,
    RoleResolver,
    StudentSignup,
)
from houseconnect.authentication.registration import AccountRegistration
from houseconnect.authentication.service import AuthenticationService

__all__ = [
    "AccountRegistration",
    "AccountRole",
    "AuthenticationService",
    "LandlordSignup",
    "LoginFailure",
    "LoginOutcome",
    "LoginSuccess",
    "RoleResolver",
    "StudentSignup",
]
