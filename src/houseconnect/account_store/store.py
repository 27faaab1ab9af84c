"""Account stores - SQLAlchemy-backed lookups for each account kind."""

from __future__ import annotations

import logging
from typing import ClassVar, Generic, Protocol, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from houseconnect.account_store.database import Database
from houseconnect.account_store.exceptions import AccountExistsError, AccountStoreError
from houseconnect.account_store.models import (
    Administrator,
    AdminRoleStatus,
    Landlord,
    ListingVerification,
    Student,
    normalize_email,
)


logger = logging.getLogger(__name__)

AccountT = TypeVar("AccountT", Student, Landlord, Administrator)


class AccountStore(Protocol[AccountT]):
    """Interface the identity core consumes for each account kind.

    Lookups by email are case-insensitive.
    """

    def find_by_email(self, email: str) -> AccountT | None: ...

    def find_by_id(self, account_id: str) -> AccountT | None: ...

    def save(self, account: AccountT) -> AccountT: ...

    def exists_by_email(self, email: str) -> bool: ...

    def count_all(self) -> int: ...


class SqlAccountStore(Generic[AccountT]):
    """AccountStore over one SQLAlchemy model.

    Subclasses set ``model``. Returned objects are detached from their
    session; mutate them and pass them back to ``save``.
    """

    model: ClassVar[type]

    def __init__(self, db: Database) -> None:
        """Initialize the store.

        Args:
            db: Shared database connection manager.
        """
        self._db = db

    def find_by_email(self, email: str) -> AccountT | None:
        """Get the first account with the given email, ignoring case.

        Raises:
            AccountStoreError: If the database query fails
        """
        normalized = normalize_email(email)
        if not normalized:
            return None
        session = self._db.get_session()
        try:
            stmt = (
                select(self.model)
                .where(func.lower(self.model.email) == normalized)
                .order_by(self.model.created_at)
                .limit(1)
            )
            return session.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise AccountStoreError(f"Failed to look up {self.model.__name__} by email") from e
        finally:
            session.close()

    def find_by_id(self, account_id: str) -> AccountT | None:
        """Get an account by ID, or None if it doesn't exist.

        Raises:
            AccountStoreError: If the database query fails
        """
        session = self._db.get_session()
        try:
            return session.get(self.model, account_id)
        except SQLAlchemyError as e:
            raise AccountStoreError(f"Failed to look up {self.model.__name__} by id") from e
        finally:
            session.close()

    def exists_by_email(self, email: str) -> bool:
        """Whether any account has the given email, ignoring case."""
        return self.find_by_email(email) is not None

    def count_all(self) -> int:
        """Count all accounts in the store.

        Raises:
            AccountStoreError: If the database query fails
        """
        session = self._db.get_session()
        try:
            stmt = select(func.count()).select_from(self.model)
            return session.execute(stmt).scalar() or 0
        except SQLAlchemyError as e:
            raise AccountStoreError(f"Failed to count {self.model.__name__} records") from e
        finally:
            session.close()

    def list_all(self) -> list[AccountT]:
        """List all accounts, oldest first."""
        session = self._db.get_session()
        try:
            stmt = select(self.model).order_by(self.model.created_at)
            return list(session.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise AccountStoreError(f"Failed to list {self.model.__name__} records") from e
        finally:
            session.close()

    def save(self, account: AccountT) -> AccountT:
        """Insert or update an account.

        Args:
            account: New or previously loaded account

        Returns:
            The persisted account with server-generated fields loaded

        Raises:
            AccountExistsError: If another account already uses the email
            AccountStoreError: If the database write fails
        """
        account.email = normalize_email(account.email)
        session = self._db.get_session()
        try:
            merged = session.merge(account)
            session.commit()
            session.refresh(merged)
            return merged
        except IntegrityError as e:
            session.rollback()
            if "UNIQUE constraint failed" in str(e):
                raise AccountExistsError(
                    f"{self.model.__name__} with email '{account.email}' already exists"
                ) from e
            raise AccountStoreError(f"Failed to save {self.model.__name__}") from e
        except SQLAlchemyError as e:
            session.rollback()
            raise AccountStoreError(f"Failed to save {self.model.__name__}") from e
        finally:
            session.close()


class StudentStore(SqlAccountStore[Student]):
    """Student accounts."""

    model = Student


class LandlordStore(SqlAccountStore[Landlord]):
    """Landlord accounts."""

    model = Landlord


class AdministratorStore(SqlAccountStore[Administrator]):
    """Administrator accounts."""

    model = Administrator

    def list_by_status(self, status: AdminRoleStatus) -> list[Administrator]:
        """List administrators in the given lifecycle state, oldest first."""
        session = self._db.get_session()
        try:
            stmt = (
                select(Administrator)
                .where(Administrator.role_status == status.value)
                .order_by(Administrator.created_at)
            )
            return list(session.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise AccountStoreError("Failed to list administrators by status") from e
        finally:
            session.close()


class VerificationStore:
    """Listing verification records."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def find_by_id(self, verification_id: str) -> ListingVerification | None:
        session = self._db.get_session()
        try:
            return session.get(ListingVerification, verification_id)
        except SQLAlchemyError as e:
            raise AccountStoreError("Failed to look up listing verification") from e
        finally:
            session.close()

    def save(self, verification: ListingVerification) -> ListingVerification:
        session = self._db.get_session()
        try:
            merged = session.merge(verification)
            session.commit()
            session.refresh(merged)
            return merged
        except SQLAlchemyError as e:
            session.rollback()
            raise AccountStoreError("Failed to save listing verification") from e
        finally:
            session.close()


class AccountStores:
    """The per-role stores over one shared Database."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self.students = StudentStore(db)
        self.landlords = LandlordStore(db)
        self.administrators = AdministratorStore(db)
        self.verifications = VerificationStore(db)

    @classmethod
    def open(cls, db_path: str = "houseconnect.db") -> AccountStores:
        """Open the database at ``db_path`` and create tables if needed."""
        db = Database(db_path)
        db.create_tables()
        logger.info("Account stores opened (db=%s)", db_path)
        return cls(db)

    def close(self) -> None:
        """Close the database connection."""
        self.db.close()
