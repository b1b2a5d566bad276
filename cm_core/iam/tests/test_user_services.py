import pytest
from rest_framework.exceptions import ValidationError

from cm_core.iam.models import StaffRole
from cm_core.iam.services import UserService

pytestmark = pytest.mark.django_db


def test_create_user_hashes_password_and_links_profile():
    profile = UserService.create_user(
        email="ana@clinic.test",
        password="Pass@12345",
        full_name="Ana Lima",
        role=StaffRole.NURSE,
    )

    assert profile.user_id == profile.user.id
    assert profile.email == "ana@clinic.test"
    assert profile.role == StaffRole.NURSE
    assert profile.is_active is True
    assert profile.user.password != "Pass@12345"
    assert profile.user.check_password("Pass@12345")


def test_create_user_duplicate_email_is_validation_error(make_staff):
    make_staff(StaffRole.DOCTOR, email="dup@clinic.test")

    with pytest.raises(ValidationError) as exc:
        UserService.create_user(
            email="dup@clinic.test",
            password="Another@123",
            full_name="Someone Else",
            role=StaffRole.CASHIER,
        )
    assert "email" in exc.value.detail


def test_admin_role_gets_django_admin_access(make_staff):
    profile = make_staff(StaffRole.ADMIN)
    assert profile.user.is_staff is True


def test_authenticate_user_ok(make_staff):
    staff = make_staff(StaffRole.CASHIER, email="cash@clinic.test", password="Cash@12345")

    found = UserService.authenticate_user(email="cash@clinic.test", password="Cash@12345")
    assert found is not None
    assert found.pk == staff.pk


def test_authenticate_user_wrong_password_returns_none(make_staff):
    make_staff(StaffRole.CASHIER, email="cash@clinic.test", password="Cash@12345")
    assert UserService.authenticate_user(email="cash@clinic.test", password="nope-nope") is None


def test_authenticate_user_unknown_email_returns_none():
    assert UserService.authenticate_user(email="ghost@clinic.test", password="whatever1") is None


def test_authenticate_user_inactive_returns_none(make_staff):
    staff = make_staff(StaffRole.DOCTOR, email="doc@clinic.test", password="Doc@123456")
    staff.is_active = False
    staff.save(update_fields=["is_active"])

    assert UserService.authenticate_user(email="doc@clinic.test", password="Doc@123456") is None


def test_authenticate_user_email_match_is_exact(make_staff):
    make_staff(StaffRole.DOCTOR, email="doc@clinic.test", password="Doc@123456")
    assert UserService.authenticate_user(email="DOC@clinic.test", password="Doc@123456") is None
