"""SQLAlchemy models for the account stores."""

from __future__ import annotations

import uuid
from datetime import date, datetime  # noqa: TC003 - used at runtime for SQLAlchemy
from enum import StrEnum
from typing import Any

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    String,
    Text,
    func,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
)

from houseconnect.identifiers import normalize_identifier


class AdminRoleStatus(StrEnum):
    """Administrator lifecycle state."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


class VerificationStatus(StrEnum):
    """Listing verification outcome."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid.uuid4())


def normalize_email(email: str | None) -> str | None:
    """Trim and case-fold an email address."""
    if email is None:
        return None
    return normalize_identifier(email)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class AccountMixin:
    """Columns shared by every account kind."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    @property
    def is_active(self) -> bool:
        """Whether the account may sign in."""
        return True


class Student(AccountMixin, Base):
    """Student account."""

    __tablename__ = "students"

    student_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    funding_status: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __init__(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        id: str | None = None,
        student_verified: bool = False,
        funding_status: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.email = normalize_email(email)
        self.password = password
        self.first_name = first_name
        self.last_name = last_name
        self.student_verified = student_verified
        self.funding_status = funding_status

    def __repr__(self) -> str:
        return f"<Student(id={self.id!r}, email={self.email!r})>"


class Landlord(AccountMixin, Base):
    """Landlord account."""

    __tablename__ = "landlords"

    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    date_registered: Mapped[date | None] = mapped_column(Date, nullable=True)

    def __init__(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        id: str | None = None,
        verified: bool = False,
        date_registered: date | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.email = normalize_email(email)
        self.password = password
        self.first_name = first_name
        self.last_name = last_name
        self.verified = verified
        self.date_registered = date_registered

    def __repr__(self) -> str:
        return f"<Landlord(id={self.id!r}, email={self.email!r}, verified={self.verified!r})>"


class Administrator(AccountMixin, Base):
    """Administrator account."""

    __tablename__ = "administrators"

    role_status: Mapped[str] = mapped_column(String(20), nullable=False)
    super_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __init__(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        id: str | None = None,
        role_status: str | None = None,
        super_admin: bool = False,
        rejection_reason: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.email = normalize_email(email)
        self.password = password
        self.first_name = first_name
        self.last_name = last_name
        self.role_status = role_status if role_status is not None else AdminRoleStatus.INACTIVE.value
        self.super_admin = super_admin
        self.rejection_reason = rejection_reason

    @property
    def admin_role_status(self) -> AdminRoleStatus:
        """Get role_status as AdminRoleStatus enum."""
        return AdminRoleStatus(self.role_status)

    @admin_role_status.setter
    def admin_role_status(self, value: AdminRoleStatus) -> None:
        """Set role_status from AdminRoleStatus enum."""
        self.role_status = value.value

    @property
    def is_active(self) -> bool:
        return self.role_status == AdminRoleStatus.ACTIVE.value

    def __repr__(self) -> str:
        return (
            f"<Administrator(id={self.id!r}, email={self.email!r}, "
            f"role_status={self.role_status!r}, super_admin={self.super_admin!r})>"
        )


class ListingVerification(Base):
    """Verification record for an accommodation listing."""

    __tablename__ = "listing_verifications"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    accommodation_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    administrator_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("administrators.id"), nullable=True
    )
    verification_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __init__(
        self,
        accommodation_id: str,
        id: str | None = None,
        status: str | None = None,
        notes: str | None = None,
        administrator_id: str | None = None,
        verification_date: date | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.accommodation_id = accommodation_id
        self.status = status if status is not None else VerificationStatus.PENDING.value
        self.notes = notes
        self.administrator_id = administrator_id
        self.verification_date = verification_date

    @property
    def verification_status(self) -> VerificationStatus:
        """Get status as VerificationStatus enum."""
        return VerificationStatus(self.status)

    def __repr__(self) -> str:
        return (
            f"<ListingVerification(id={self.id!r}, accommodation_id={self.accommodation_id!r}, "
            f"status={self.status!r})>"
        )
