"""Student and landlord signup."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from houseconnect.account_store import Landlord, Student
from houseconnect.authentication.exceptions import DuplicateEmailError
from houseconnect.logging import mask_email
from houseconnect.validation import require_password, require_text

if TYPE_CHECKING:
    from houseconnect.account_store import AccountStore
    from houseconnect.authentication.models import LandlordSignup, StudentSignup
    from houseconnect.authentication.service import AuthenticationService
    from houseconnect.credentials import PasswordVerifier

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "An account with the supplied email already exists"


class AccountRegistration:
    """Creates student and landlord accounts.

    Emails are unique across all roles at signup time, and passwords are
    always hashed before they are stored.
    """

    def __init__(
        self,
        students: AccountStore[Student],
        landlords: AccountStore[Landlord],
        authentication: AuthenticationService,
        verifier: PasswordVerifier,
    ) -> None:
        self._students = students
        self._landlords = landlords
        self._authentication = authentication
        self._verifier = verifier

    def _check_email_available(self, email: str) -> None:
        if self._authentication.email_exists(email):
            raise DuplicateEmailError(DUPLICATE_EMAIL)

    def register_student(self, signup: StudentSignup) -> Student:
        """Create a student account.

        Raises:
            InvalidInputError: If a required field is missing.
            DuplicateEmailError: If the email is already registered.
        """
        email = require_text(signup.email, "email")
        password = require_password(signup.password)
        first_name = require_text(signup.first_name, "first_name")
        last_name = require_text(signup.last_name, "last_name")
        self._check_email_available(email)

        student = Student(
            email=email,
            password=self._verifier.hash(password),
            first_name=first_name,
            last_name=last_name,
            funding_status=signup.funding_status.strip() if signup.funding_status else None,
        )
        saved = self._students.save(student)
        logger.info("Registered student %s", mask_email(saved.email))
        return saved

    def register_landlord(self, signup: LandlordSignup) -> Landlord:
        """Create an unverified landlord account.

        Raises:
            InvalidInputError: If a required field is missing.
            DuplicateEmailError: If the email is already registered.
        """
        email = require_text(signup.email, "email")
        password = require_password(signup.password)
        first_name = require_text(signup.first_name, "first_name")
        last_name = require_text(signup.last_name, "last_name")
        self._check_email_available(email)

        landlord = Landlord(
            email=email,
            password=self._verifier.hash(password),
            first_name=first_name,
            last_name=last_name,
            verified=False,
            date_registered=datetime.now(UTC).date(),
        )
        saved = self._landlords.save(landlord)
        logger.info("Registered landlord %s", mask_email(saved.email))
        return saved
