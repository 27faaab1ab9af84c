"""Pydantic models for REST API."""

from datetime import date, datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Authentication models


class LoginRequest(BaseModel):
    """Request model for logging in."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=1024)
    role: str | None = Field(default=None, max_length=50)


class LoginResponse(BaseModel):
    """Response model for a login attempt."""

    authenticated: bool
    message: str
    role: str | None = None
    account_id: str | None = None
    email: str | None = None
    is_super_admin: bool | None = None


class EmailExistsResponse(BaseModel):
    """Response model for an email availability check."""

    email: str
    exists: bool


class StudentSignupRequest(BaseModel):
    """Request model for registering a student."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=1024)
    first_name: str = Field(..., max_length=255)
    last_name: str = Field(..., max_length=255)
    funding_status: str | None = Field(default=None, max_length=50)


class LandlordSignupRequest(BaseModel):
    """Request model for registering a landlord."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=1024)
    first_name: str = Field(..., max_length=255)
    last_name: str = Field(..., max_length=255)


class StudentResponse(BaseModel):
    """Response model for a student account."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: str
    last_name: str
    student_verified: bool
    funding_status: str | None
    created_at: datetime


class LandlordResponse(BaseModel):
    """Response model for a landlord account."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: str
    last_name: str
    verified: bool
    date_registered: date | None
    created_at: datetime


# Administrator models


class AdministratorApplicationRequest(BaseModel):
    """Request model for applying to become an administrator."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=1024)
    first_name: str = Field(..., max_length=255)
    last_name: str = Field(..., max_length=255)


class AdministratorCreateRequest(AdministratorApplicationRequest):
    """Request model for creating an administrator directly."""

    super_admin: bool = False
    acting_admin_id: str | None = None
    acting_admin_password: str | None = None


class SuperAdminCredentials(BaseModel):
    """Super-admin credentials re-checked on every approval call."""

    super_admin_email: str
    super_admin_password: str


class RejectionRequest(SuperAdminCredentials):
    """Request model for rejecting an administrator application."""

    reason: str | None = Field(default=None, max_length=2000)


class LandlordVerificationRequest(BaseModel):
    """Request model for verifying a landlord."""

    admin_id: str
    admin_password: str
    approved: bool


class ListingVerificationRequest(BaseModel):
    """Request model for recording a listing verification decision."""

    admin_id: str
    admin_password: str
    status: str | None = None
    notes: str | None = Field(default=None, max_length=2000)


class AdministratorResponse(BaseModel):
    """Response model for an administrator account."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: str
    last_name: str
    role_status: str
    super_admin: bool
    rejection_reason: str | None
    created_at: datetime
    updated_at: datetime


class ListingVerificationResponse(BaseModel):
    """Response model for a listing verification."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    accommodation_id: str
    status: str
    notes: str | None
    administrator_id: str | None
    verification_date: date | None
    updated_at: datetime


def administrator_to_response(admin: Any) -> AdministratorResponse:
    """Convert an Administrator model to AdministratorResponse."""
    return AdministratorResponse.model_validate(admin)


def student_to_response(student: Any) -> StudentResponse:
    """Convert a Student model to StudentResponse."""
    return StudentResponse.model_validate(student)


def landlord_to_response(landlord: Any) -> LandlordResponse:
    """Convert a Landlord model to LandlordResponse."""
    return LandlordResponse.model_validate(landlord)


def verification_to_response(verification: Any) -> ListingVerificationResponse:
    """Convert a ListingVerification model to ListingVerificationResponse."""
    return ListingVerificationResponse.model_validate(verification)
