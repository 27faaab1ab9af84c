"""Administrator lifecycle and privileged action endpoints.

Every endpoint that changes state carries the acting administrator's
credentials in the request body; they are re-checked on each call.
"""

from fastapi import APIRouter, status

from houseconnect.administrators import AdministratorFields
from houseconnect.api.dependencies import AdministratorsDep
from houseconnect.api.models import (
    AdministratorApplicationRequest,
    AdministratorCreateRequest,
    AdministratorResponse,
    APIResponse,
    LandlordResponse,
    LandlordVerificationRequest,
    ListingVerificationRequest,
    ListingVerificationResponse,
    RejectionRequest,
    SuperAdminCredentials,
    administrator_to_response,
    landlord_to_response,
    verification_to_response,
)

router = APIRouter(prefix="/admins", tags=["administrators"])


@router.post(
    "/apply",
    response_model=APIResponse[AdministratorResponse],
    status_code=status.HTTP_201_CREATED,
)
def apply(
    request: AdministratorApplicationRequest, lifecycle: AdministratorsDep
) -> APIResponse[AdministratorResponse]:
    """Submit a pending administrator application."""
    admin = lifecycle.submit_application(
        AdministratorFields(
            email=request.email,
            password=request.password,
            first_name=request.first_name,
            last_name=request.last_name,
        )
    )
    return APIResponse(data=administrator_to_response(admin))


@router.post(
    "/create",
    response_model=APIResponse[AdministratorResponse],
    status_code=status.HTTP_201_CREATED,
)
def create(
    request: AdministratorCreateRequest, lifecycle: AdministratorsDep
) -> APIResponse[AdministratorResponse]:
    """Create an administrator (bootstrap, or by an active super-admin)."""
    admin = lifecycle.create_administrator(
        AdministratorFields(
            email=request.email,
            password=request.password,
            first_name=request.first_name,
            last_name=request.last_name,
            super_admin=request.super_admin,
        ),
        acting_admin_id=request.acting_admin_id,
        acting_admin_password=request.acting_admin_password,
    )
    return APIResponse(data=administrator_to_response(admin))


@router.post("/applications", response_model=APIResponse[list[AdministratorResponse]])
def list_applications(
    request: SuperAdminCredentials, lifecycle: AdministratorsDep
) -> APIResponse[list[AdministratorResponse]]:
    """List pending administrator applications."""
    pending = lifecycle.list_pending_administrators(
        request.super_admin_email, request.super_admin_password
    )
    return APIResponse(data=[administrator_to_response(a) for a in pending])


@router.post("/{applicant_id}/approve", response_model=APIResponse[AdministratorResponse])
def approve(
    applicant_id: str, request: SuperAdminCredentials, lifecycle: AdministratorsDep
) -> APIResponse[AdministratorResponse]:
    """Approve a pending administrator."""
    admin = lifecycle.approve_administrator(
        applicant_id, request.super_admin_email, request.super_admin_password
    )
    return APIResponse(data=administrator_to_response(admin))


@router.post("/{applicant_id}/reject", response_model=APIResponse[AdministratorResponse])
def reject(
    applicant_id: str, request: RejectionRequest, lifecycle: AdministratorsDep
) -> APIResponse[AdministratorResponse]:
    """Reject an administrator application."""
    admin = lifecycle.reject_administrator(
        applicant_id,
        request.super_admin_email,
        request.super_admin_password,
        reason=request.reason,
    )
    return APIResponse(data=administrator_to_response(admin))


@router.post(
    "/landlords/{landlord_id}/verification",
    response_model=APIResponse[LandlordResponse],
)
def verify_landlord(
    landlord_id: str, request: LandlordVerificationRequest, lifecycle: AdministratorsDep
) -> APIResponse[LandlordResponse]:
    """Mark a landlord as verified or unverified."""
    landlord = lifecycle.verify_landlord(
        request.admin_id, request.admin_password, landlord_id, request.approved
    )
    return APIResponse(data=landlord_to_response(landlord))


@router.post(
    "/verifications/{verification_id}/status",
    response_model=APIResponse[ListingVerificationResponse],
)
def verify_listing(
    verification_id: str, request: ListingVerificationRequest, lifecycle: AdministratorsDep
) -> APIResponse[ListingVerificationResponse]:
    """Record a listing verification decision."""
    verification = lifecycle.verify_listing(
        request.admin_id,
        request.admin_password,
        verification_id,
        request.status,
        request.notes,
    )
    return APIResponse(data=verification_to_response(verification))
