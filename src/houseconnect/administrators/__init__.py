"""Administrators - Bootstrap, application and approval workflow for administrator accounts."""

from houseconnect.administrators.lifecycle import AdministratorLifecycle
from houseconnect.administrators.models import AdministratorFields

__all__ = [
    "AdministratorFields",
    "AdministratorLifecycle",
]
