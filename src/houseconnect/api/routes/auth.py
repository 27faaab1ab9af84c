"""Login, signup and email lookup endpoints."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from houseconnect.api.dependencies import AuthenticationDep, RegistrationDep
from houseconnect.api.models import (
    APIResponse,
    EmailExistsResponse,
    LandlordResponse,
    LandlordSignupRequest,
    LoginRequest,
    LoginResponse,
    StudentResponse,
    StudentSignupRequest,
    landlord_to_response,
    student_to_response,
)
from houseconnect.authentication import LandlordSignup, LoginSuccess, StudentSignup

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=APIResponse[LoginResponse],
    responses={status.HTTP_401_UNAUTHORIZED: {"model": APIResponse[LoginResponse]}},
)
def login(request: LoginRequest, auth: AuthenticationDep) -> APIResponse[LoginResponse] | JSONResponse:
    """Authenticate against the student, landlord and administrator stores."""
    outcome = auth.login(request.email, request.password, request.role)
    if isinstance(outcome, LoginSuccess):
        return APIResponse(
            data=LoginResponse(
                authenticated=True,
                message=outcome.message,
                role=outcome.role.value,
                account_id=outcome.account_id,
                email=outcome.email,
                is_super_admin=outcome.is_super_admin,
            )
        )
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content=APIResponse[LoginResponse](
            data=LoginResponse(authenticated=False, message=outcome.message),
            error=outcome.message,
        ).model_dump(),
    )


@router.get("/email-exists", response_model=APIResponse[EmailExistsResponse])
def email_exists(email: str, auth: AuthenticationDep) -> APIResponse[EmailExistsResponse]:
    """Check whether an email is registered under any role."""
    return APIResponse(data=EmailExistsResponse(email=email, exists=auth.email_exists(email)))


@router.post(
    "/signup/student",
    response_model=APIResponse[StudentResponse],
    status_code=status.HTTP_201_CREATED,
)
def signup_student(
    request: StudentSignupRequest, registration: RegistrationDep
) -> APIResponse[StudentResponse]:
    """Register a student account."""
    student = registration.register_student(
        StudentSignup(
            email=request.email,
            password=request.password,
            first_name=request.first_name,
            last_name=request.last_name,
            funding_status=request.funding_status,
        )
    )
    return APIResponse(data=student_to_response(student))


@router.post(
    "/signup/landlord",
    response_model=APIResponse[LandlordResponse],
    status_code=status.HTTP_201_CREATED,
)
def signup_landlord(
    request: LandlordSignupRequest, registration: RegistrationDep
) -> APIResponse[LandlordResponse]:
    """Register a landlord account."""
    landlord = registration.register_landlord(
        LandlordSignup(
            email=request.email,
            password=request.password,
            first_name=request.first_name,
            last_name=request.last_name,
        )
    )
    return APIResponse(data=landlord_to_response(landlord))
