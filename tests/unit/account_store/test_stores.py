"""Unit tests for the SQLAlchemy account stores."""

import pytest

from houseconnect.account_store import (
    AccountExistsError,
    AccountStores,
    Administrator,
    AdminRoleStatus,
    Landlord,
    ListingVerification,
    Student,
    VerificationStatus,
)
from houseconnect.account_store.models import Base
from houseconnect.exceptions import DuplicateEmailError, UnavailableError


def make_student(email: str = "Student@Uni.edu", **kwargs) -> Student:
    return Student(email=email, password="pw", first_name="Sam", last_name="Lee", **kwargs)


@pytest.mark.unit
class TestModels:
    """Tests for model construction."""

    def test_email_normalized_on_construction(self) -> None:
        """Emails are trimmed and lowercased."""
        student = make_student(email="  Mixed@Case.COM ")

        assert student.email == "mixed@case.com"

    def test_ids_generated(self) -> None:
        """Each account gets a distinct id."""
        assert make_student().id != make_student().id

    def test_administrator_defaults_to_inactive(self) -> None:
        """A new administrator is pending until approved."""
        admin = Administrator(email="a@x.com", password="pw", first_name="A", last_name="B")

        assert admin.admin_role_status == AdminRoleStatus.INACTIVE
        assert not admin.is_active
        assert not admin.super_admin

    def test_administrator_active_only_when_active(self) -> None:
        """Suspended administrators are not active."""
        admin = Administrator(email="a@x.com", password="pw", first_name="A", last_name="B")

        admin.admin_role_status = AdminRoleStatus.ACTIVE
        assert admin.is_active
        admin.admin_role_status = AdminRoleStatus.SUSPENDED
        assert not admin.is_active

    def test_students_and_landlords_always_active(self) -> None:
        """Only administrators have a lifecycle."""
        landlord = Landlord(email="l@x.com", password="pw", first_name="L", last_name="L")

        assert make_student().is_active
        assert landlord.is_active

    def test_verification_defaults_to_pending(self) -> None:
        """New listing verifications start pending."""
        verification = ListingVerification(accommodation_id="acc-1")

        assert verification.verification_status == VerificationStatus.PENDING


@pytest.mark.unit
class TestAccountStore:
    """Tests for SqlAccountStore operations."""

    def test_save_and_find_by_email(self, stores: AccountStores) -> None:
        """Saved accounts are found by email regardless of case."""
        saved = stores.students.save(make_student())

        found = stores.students.find_by_email("STUDENT@uni.EDU")

        assert found is not None
        assert found.id == saved.id
        assert found.created_at is not None

    def test_find_by_email_missing(self, stores: AccountStores) -> None:
        """Unknown emails return None."""
        assert stores.students.find_by_email("nobody@x.com") is None

    @pytest.mark.parametrize("email", ["", "   "])
    def test_find_by_blank_email(self, stores: AccountStores, email: str) -> None:
        """Blank lookups return None without querying."""
        assert stores.students.find_by_email(email) is None

    def test_find_by_id(self, stores: AccountStores) -> None:
        """Accounts are found by primary key."""
        saved = stores.landlords.save(
            Landlord(email="l@x.com", password="pw", first_name="L", last_name="L")
        )

        assert stores.landlords.find_by_id(saved.id).email == "l@x.com"
        assert stores.landlords.find_by_id("missing") is None

    def test_exists_by_email(self, stores: AccountStores) -> None:
        """exists_by_email mirrors find_by_email."""
        stores.students.save(make_student())

        assert stores.students.exists_by_email("student@uni.edu")
        assert not stores.students.exists_by_email("other@uni.edu")

    def test_stores_are_independent(self, stores: AccountStores) -> None:
        """The same email can live in different role stores."""
        stores.students.save(make_student(email="shared@x.com"))
        stores.landlords.save(
            Landlord(email="shared@x.com", password="pw", first_name="L", last_name="L")
        )

        assert stores.students.count_all() == 1
        assert stores.landlords.count_all() == 1
        assert stores.administrators.count_all() == 0

    def test_duplicate_email_rejected(self, stores: AccountStores) -> None:
        """A second account with the same email in one store is refused."""
        stores.students.save(make_student(email="dup@x.com"))

        with pytest.raises(AccountExistsError) as exc_info:
            stores.students.save(make_student(email="DUP@x.com"))

        assert isinstance(exc_info.value, DuplicateEmailError)

    def test_save_updates_existing(self, stores: AccountStores) -> None:
        """Saving a loaded account updates it in place."""
        saved = stores.students.save(make_student())
        saved.funding_status = "SELF_FUNDED"

        stores.students.save(saved)

        assert stores.students.find_by_id(saved.id).funding_status == "SELF_FUNDED"
        assert stores.students.count_all() == 1

    def test_list_all_returns_every_account(self, stores: AccountStores) -> None:
        """list_all returns every account."""
        stores.students.save(make_student(email="a@x.com"))
        stores.students.save(make_student(email="b@x.com"))

        emails = {s.email for s in stores.students.list_all()}

        assert emails == {"a@x.com", "b@x.com"}

    def test_missing_tables_are_unavailable(self, stores: AccountStores) -> None:
        """Store failures surface as UnavailableError."""
        Base.metadata.drop_all(stores.db.engine)

        with pytest.raises(UnavailableError):
            stores.students.find_by_email("a@x.com")


@pytest.mark.unit
class TestAdministratorStore:
    """Tests for AdministratorStore."""

    def test_list_by_status(self, stores: AccountStores) -> None:
        """Only administrators in the requested state are listed."""
        for email, status in [
            ("p1@x.com", AdminRoleStatus.INACTIVE),
            ("p2@x.com", AdminRoleStatus.INACTIVE),
            ("a@x.com", AdminRoleStatus.ACTIVE),
        ]:
            stores.administrators.save(
                Administrator(
                    email=email,
                    password="pw",
                    first_name="A",
                    last_name="B",
                    role_status=status.value,
                )
            )

        pending = stores.administrators.list_by_status(AdminRoleStatus.INACTIVE)

        assert {a.email for a in pending} == {"p1@x.com", "p2@x.com"}


@pytest.mark.unit
class TestVerificationStore:
    """Tests for VerificationStore."""

    def test_save_and_find(self, stores: AccountStores) -> None:
        """Verifications round-trip through the store."""
        saved = stores.verifications.save(ListingVerification(accommodation_id="acc-1"))

        found = stores.verifications.find_by_id(saved.id)

        assert found is not None
        assert found.accommodation_id == "acc-1"
        assert found.status == VerificationStatus.PENDING.value
        assert stores.verifications.find_by_id("missing") is None
