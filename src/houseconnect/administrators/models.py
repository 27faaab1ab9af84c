"""Data models for the administrator lifecycle."""

from dataclasses import dataclass


@dataclass
class AdministratorFields:
    """Caller-supplied fields for a new administrator.

    ``super_admin`` is only honoured when bootstrapping the first
    administrator; every other path forces it to False.
    """

    email: str
    password: str
    first_name: str
    last_name: str
    super_admin: bool = False
