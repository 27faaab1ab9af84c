"""Account Store - Persistent storage for student, landlord and administrator accounts."""

from houseconnect.account_store.database import Database
from houseconnect.account_store.exceptions import AccountExistsError, AccountStoreError
from houseconnect.account_store.models import (
    Administrator,
    AdminRoleStatus,
    Landlord,
    ListingVerification,
    Student,
    VerificationStatus,
    normalize_email,
)
from houseconnect.account_store.store import (
    AccountStore,
    AccountStores,
    AdministratorStore,
    LandlordStore,
    SqlAccountStore,
    StudentStore,
    VerificationStore,
)

__all__ = [
    "AccountExistsError",
    "AccountStore",
    "AccountStoreError",
    "AccountStores",
    "AdminRoleStatus",
    "Administrator",
    "AdministratorStore",
    "Database",
    "Landlord",
    "LandlordStore",
    "ListingVerification",
    "SqlAccountStore",
    "Student",
    "StudentStore",
    "VerificationStatus",
    "VerificationStore",
    "normalize_email",
]
