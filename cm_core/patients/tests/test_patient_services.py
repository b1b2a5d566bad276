from datetime import date

import pytest

from cm_core.patients.models import Patient
from cm_core.patients.services import PatientService

pytestmark = pytest.mark.django_db


def _register(name: str) -> Patient:
    return PatientService.create_patient(
        full_name=name,
        date_of_birth=date(2000, 1, 1),
        gender="male",
    )


def test_mrns_are_sequential_and_zero_padded():
    mrns = [_register(f"Patient {i}").medical_record_number for i in range(3)]
    assert mrns == ["MRN000001", "MRN000002", "MRN000003"]


def test_first_mrn_continues_after_existing_rows():
    # rows imported before the counter existed
    Patient.objects.create(
        medical_record_number="MRN000041",
        full_name="Legacy",
        date_of_birth=date(1970, 5, 5),
        gender="female",
    )
    Patient.objects.create(
        medical_record_number="LEGACY-7",
        full_name="Odd Format",
        date_of_birth=date(1970, 5, 5),
        gender="female",
    )

    assert _register("New").medical_record_number == "MRN000042"
    assert _register("Newer").medical_record_number == "MRN000043"


def test_optional_fields_default_to_null():
    p = _register("Bare Minimum")
    p.refresh_from_db()
    assert p.phone is None
    assert p.email is None
    assert p.allergies is None
