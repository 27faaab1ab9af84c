"""AdministratorLifecycle - Administrator state machine and privileged actions."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from houseconnect.account_store import (
    Administrator,
    AdminRoleStatus,
    VerificationStatus,
)
from houseconnect.administrators.exceptions import (
    DuplicateEmailError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from houseconnect.credentials import password_matches
from houseconnect.identifiers import normalize_identifier
from houseconnect.logging import mask_email
from houseconnect.validation import require_password, require_text

if TYPE_CHECKING:
    from houseconnect.account_store import (
        AccountStore,
        AdministratorStore,
        Landlord,
        ListingVerification,
        VerificationStore,
    )
    from houseconnect.administrators.models import AdministratorFields
    from houseconnect.credentials import PasswordVerifier

logger = logging.getLogger(__name__)

INVALID_SUPER_ADMIN = "Invalid super administrator credentials."
INVALID_ADMIN = "Invalid administrator credentials."
CREATE_FORBIDDEN = "Super administrator credentials are required to create administrators."
DUPLICATE_ADMIN = "An administrator with this email already exists."


class AdministratorLifecycle:
    """Manages administrator accounts from application to suspension.

    Lifecycle: INACTIVE (pending application) -> ACTIVE (approved) ->
    SUSPENDED (rejected or revoked). The very first administrator is created
    ACTIVE without any approval. Every later mutation re-authenticates the
    acting administrator against the store on each call; there are no
    sessions.
    """

    def __init__(
        self,
        administrators: AdministratorStore,
        landlords: AccountStore[Landlord],
        verifications: VerificationStore,
        verifier: PasswordVerifier,
    ) -> None:
        """Initialize the lifecycle.

        Args:
            administrators: Administrator account store.
            landlords: Landlord account store (for landlord verification).
            verifications: Listing verification records.
            verifier: Hash capability for encoding and checking passwords.
        """
        self._administrators = administrators
        self._landlords = landlords
        self._verifications = verifications
        self._verifier = verifier

    # --- Authentication ---

    def authenticate_administrator(
        self, admin_id: str | None, password: str | None
    ) -> Administrator | None:
        """Return the ACTIVE administrator with this id and password, if any."""
        if not admin_id or password is None or not password.strip():
            return None
        admin = self._administrators.find_by_id(admin_id)
        if admin is None or not admin.is_active:
            return None
        if not password_matches(password, admin.password, self._verifier):
            return None
        return admin

    def _authenticate_super_admin(
        self, email: str | None, password: str | None
    ) -> Administrator | None:
        if email is None or not email.strip() or password is None or not password.strip():
            return None
        admin = self._administrators.find_by_email(normalize_identifier(email))
        if admin is None or not admin.super_admin or not admin.is_active:
            return None
        if not password_matches(password, admin.password, self._verifier):
            return None
        return admin

    def _require_super_admin(self, email: str | None, password: str | None) -> Administrator:
        admin = self._authenticate_super_admin(email, password)
        if admin is None:
            logger.warning("Super administrator check failed for %s", mask_email(email))
            raise ForbiddenError(INVALID_SUPER_ADMIN)
        return admin

    def _require_admin(self, admin_id: str | None, password: str | None) -> Administrator:
        admin = self.authenticate_administrator(admin_id, password)
        if admin is None:
            logger.warning("Administrator check failed for id %s", admin_id)
            raise ForbiddenError(INVALID_ADMIN)
        return admin

    # --- Creation ---

    def has_any_administrators(self) -> bool:
        """Whether at least one administrator record exists."""
        return self._administrators.count_all() > 0

    def _build(
        self,
        fields: AdministratorFields,
        role_status: AdminRoleStatus,
        super_admin: bool,
    ) -> Administrator:
        email = require_text(fields.email, "email")
        password = require_password(fields.password)
        first_name = require_text(fields.first_name, "first_name")
        last_name = require_text(fields.last_name, "last_name")
        if self._administrators.exists_by_email(email):
            raise DuplicateEmailError(DUPLICATE_ADMIN)
        return Administrator(
            email=email,
            password=self._verifier.hash(password),
            first_name=first_name,
            last_name=last_name,
            role_status=role_status.value,
            super_admin=super_admin,
        )

    def create_administrator(
        self,
        fields: AdministratorFields,
        acting_admin_id: str | None = None,
        acting_admin_password: str | None = None,
    ) -> Administrator:
        """Create an ACTIVE administrator.

        While the store is empty the request bootstraps the system: no
        credentials are needed and ``fields.super_admin`` is honoured. After
        that the actor must be an ACTIVE super-admin, and the new record is
        never a super-admin.

        Raises:
            ForbiddenError: If the store is not empty and the actor is not an
                ACTIVE super-admin.
            DuplicateEmailError: If the email is already an administrator.
            InvalidInputError: If a required field is missing.
        """
        if not self.has_any_administrators():
            admin = self._build(fields, AdminRoleStatus.ACTIVE, super_admin=fields.super_admin)
            saved = self._administrators.save(admin)
            logger.warning(
                "Bootstrapped first administrator %s (super_admin=%s)",
                mask_email(saved.email),
                saved.super_admin,
            )
            return saved

        if acting_admin_id is None or acting_admin_password is None:
            raise ForbiddenError(CREATE_FORBIDDEN)
        creator = self.authenticate_administrator(acting_admin_id, acting_admin_password)
        if creator is None or not creator.super_admin:
            logger.warning("Administrator creation refused for actor %s", acting_admin_id)
            raise ForbiddenError(CREATE_FORBIDDEN)

        admin = self._build(fields, AdminRoleStatus.ACTIVE, super_admin=False)
        saved = self._administrators.save(admin)
        logger.info("Administrator %s created by %s", mask_email(saved.email), creator.id)
        return saved

    def submit_application(self, fields: AdministratorFields) -> Administrator:
        """Record a pending administrator application.

        The record is always INACTIVE and never a super-admin.

        Raises:
            DuplicateEmailError: If the email is already an administrator.
            InvalidInputError: If a required field is missing.
        """
        admin = self._build(fields, AdminRoleStatus.INACTIVE, super_admin=False)
        saved = self._administrators.save(admin)
        logger.info("Administrator application submitted by %s", mask_email(saved.email))
        return saved

    # --- Approval workflow ---

    def list_pending_administrators(
        self, super_admin_email: str | None, super_admin_password: str | None
    ) -> list[Administrator]:
        """List pending applications.

        Raises:
            ForbiddenError: If the super-admin credentials are invalid.
        """
        self._require_super_admin(super_admin_email, super_admin_password)
        return self._administrators.list_by_status(AdminRoleStatus.INACTIVE)

    def _get_applicant(self, applicant_id: str) -> Administrator:
        applicant = self._administrators.find_by_id(applicant_id)
        if applicant is None:
            raise NotFoundError("Administrator not found.")
        return applicant

    def approve_administrator(
        self,
        applicant_id: str,
        super_admin_email: str | None,
        super_admin_password: str | None,
    ) -> Administrator:
        """Activate an administrator.

        Approving a super-admin returns the record unchanged.

        Raises:
            ForbiddenError: If the super-admin credentials are invalid.
            NotFoundError: If the applicant doesn't exist.
        """
        approver = self._require_super_admin(super_admin_email, super_admin_password)
        applicant = self._get_applicant(applicant_id)
        if applicant.super_admin:
            return applicant

        applicant.admin_role_status = AdminRoleStatus.ACTIVE
        applicant.rejection_reason = None
        saved = self._administrators.save(applicant)
        logger.info("Administrator %s approved by %s", saved.id, approver.id)
        return saved

    def reject_administrator(
        self,
        applicant_id: str,
        super_admin_email: str | None,
        super_admin_password: str | None,
        reason: str | None = None,
    ) -> Administrator:
        """Reject an administrator: the record is kept and set to SUSPENDED.

        Rejecting a super-admin returns the record unchanged.

        Raises:
            ForbiddenError: If the super-admin credentials are invalid.
            NotFoundError: If the applicant doesn't exist.
        """
        rejecter = self._require_super_admin(super_admin_email, super_admin_password)
        applicant = self._get_applicant(applicant_id)
        if applicant.super_admin:
            return applicant

        applicant.admin_role_status = AdminRoleStatus.SUSPENDED
        applicant.rejection_reason = reason.strip() if reason and reason.strip() else None
        saved = self._administrators.save(applicant)
        logger.info("Administrator %s rejected by %s", saved.id, rejecter.id)
        return saved

    # --- Privileged actions ---

    def verify_landlord(
        self,
        admin_id: str | None,
        admin_password: str | None,
        landlord_id: str,
        approved: bool,
    ) -> Landlord:
        """Set a landlord's verified flag.

        Raises:
            ForbiddenError: If the administrator credentials are invalid.
            NotFoundError: If the landlord doesn't exist.
        """
        admin = self._require_admin(admin_id, admin_password)
        landlord = self._landlords.find_by_id(landlord_id)
        if landlord is None:
            raise NotFoundError("Landlord not found.")

        landlord.verified = approved
        saved = self._landlords.save(landlord)
        logger.info("Landlord %s verified=%s by administrator %s", saved.id, approved, admin.id)
        return saved

    def verify_listing(
        self,
        admin_id: str | None,
        admin_password: str | None,
        verification_id: str,
        status: VerificationStatus | str | None,
        notes: str | None = None,
    ) -> ListingVerification:
        """Record a verification decision for a listing.

        Existing notes are kept when ``notes`` is None.

        Raises:
            ForbiddenError: If the administrator credentials are invalid.
            InvalidInputError: If the status is missing or unknown.
            NotFoundError: If the verification doesn't exist.
        """
        admin = self._require_admin(admin_id, admin_password)

        if status is None or (isinstance(status, str) and not status.strip()):
            raise InvalidInputError("Verification status is required.")
        try:
            new_status = VerificationStatus(status.strip().upper())
        except ValueError as e:
            raise InvalidInputError(f"Unsupported verification status: {status}") from e

        verification = self._verifications.find_by_id(verification_id)
        if verification is None:
            raise NotFoundError("Verification not found.")

        verification.status = new_status.value
        verification.administrator_id = admin.id
        verification.verification_date = datetime.now(UTC).date()
        if notes is not None:
            verification.notes = notes
        saved = self._verifications.save(verification)
        logger.info(
            "Listing verification %s set to %s by administrator %s",
            saved.id,
            new_status,
            admin.id,
        )
        return saved
