# cm_core/conftest.py
import itertools
from datetime import date
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from cm_core.iam.models import StaffRole

DEFAULT_PASSWORD = "Pass@12345"

_emails = itertools.count(1)


@pytest.fixture
def make_staff(db):
    """
    Factory for staff accounts created through the real service,
    so the auth user and its profile stay consistent.
    """
    from cm_core.iam.services import UserService

    def _make(role=StaffRole.DOCTOR, *, email=None, password=DEFAULT_PASSWORD, full_name=None):
        n = next(_emails)
        return UserService.create_user(
            email=email or f"{role}{n}@clinic.test",
            password=password,
            full_name=full_name or f"{role.title()} {n}",
            role=role,
        )

    return _make


@pytest.fixture
def admin_staff(make_staff):
    return make_staff(StaffRole.ADMIN)


@pytest.fixture
def doctor(make_staff):
    return make_staff(StaffRole.DOCTOR)


@pytest.fixture
def nurse(make_staff):
    return make_staff(StaffRole.NURSE)


@pytest.fixture
def cashier(make_staff):
    return make_staff(StaffRole.CASHIER)


@pytest.fixture
def pharmacist(make_staff):
    return make_staff(StaffRole.PHARMACIST)


@pytest.fixture
def lab_technician(make_staff):
    return make_staff(StaffRole.LAB_TECHNICIAN)


@pytest.fixture
def radiologist(make_staff):
    return make_staff(StaffRole.RADIOLOGIST)


@pytest.fixture
def user(admin_staff):
    return admin_staff.user


@pytest.fixture
def api_client(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.fixture
def client_for():
    """
    client_for(staff) -> APIClient authenticated as that staff member.
    """

    def _client(staff):
        c = APIClient()
        c.force_authenticate(user=staff.user)
        return c

    return _client


@pytest.fixture
def patient(db):
    from cm_core.patients.services import PatientService

    return PatientService.create_patient(
        full_name="Test Patient",
        date_of_birth=date(1990, 1, 15),
        gender="female",
        phone="555-0100",
    )


@pytest.fixture
def other_patient(db):
    from cm_core.patients.services import PatientService

    return PatientService.create_patient(
        full_name="Other Patient",
        date_of_birth=date(1985, 6, 2),
        gender="male",
    )


@pytest.fixture
def make_medication(db):
    from cm_core.pharmacy.services import MedicationService

    def _make(name="Amoxicillin", *, price=Decimal("2.50"), stock_quantity=100, min_stock_level=10, **extra):
        return MedicationService.create_medication(
            name=name,
            dosage_form=extra.pop("dosage_form", "capsule"),
            price=price,
            stock_quantity=stock_quantity,
            min_stock_level=min_stock_level,
            **extra,
        )

    return _make
