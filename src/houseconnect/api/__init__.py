"""REST API for HouseConnect."""

from houseconnect.api.app import app, create_app
from houseconnect.api.models import (
    AdministratorResponse,
    APIResponse,
    LoginRequest,
    LoginResponse,
)

__all__ = [
    "APIResponse",
    "AdministratorResponse",
    "LoginRequest",
    "LoginResponse",
    "app",
    "create_app",
]
