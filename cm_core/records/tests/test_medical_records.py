import pytest
from rest_framework.exceptions import NotFound

from cm_core.records.models import MedicalRecord
from cm_core.records.selectors import medical_records
from cm_core.records.services import MedicalRecordService

pytestmark = pytest.mark.django_db


def _record(patient, doctor, **extra):
    return MedicalRecordService.create_medical_record(
        patient_id=patient.id,
        doctor_id=doctor.user_id,
        chief_complaint="Cough for three days",
        diagnosis="Acute bronchitis",
        **extra,
    )


def test_create_record_stamps_visit_date(patient, doctor):
    rec = _record(patient, doctor, treatment_plan="Rest, fluids")

    assert rec.visit_date is not None
    assert rec.doctor_id == doctor.user_id
    assert rec.present_illness is None
    assert rec.treatment_plan == "Rest, fluids"


def test_visit_date_is_not_rewritten_on_save(patient, doctor):
    rec = _record(patient, doctor)
    stamped = rec.visit_date

    rec.notes = "follow up in a week"
    rec.save()
    rec.refresh_from_db()
    assert rec.visit_date == stamped


def test_unknown_patient_or_doctor(patient, doctor):
    with pytest.raises(NotFound) as exc:
        MedicalRecordService.create_medical_record(
            patient_id=9999, doctor_id=doctor.user_id, chief_complaint="x", diagnosis="y"
        )
    assert "Patient with id 9999 not found" in str(exc.value.detail)

    with pytest.raises(NotFound) as exc:
        MedicalRecordService.create_medical_record(
            patient_id=patient.id, doctor_id=8888, chief_complaint="x", diagnosis="y"
        )
    assert "Doctor with id 8888 not found" in str(exc.value.detail)
    assert MedicalRecord.objects.count() == 0


def test_list_filters_by_patient_newest_first(patient, other_patient, doctor):
    first = _record(patient, doctor)
    _record(other_patient, doctor)
    second = _record(patient, doctor)

    ids = [r.id for r in medical_records(patient_id=patient.id)]
    assert ids == [second.id, first.id]
    assert medical_records().count() == 3


def test_api_create_defaults_doctor_to_caller(client_for, doctor, patient):
    c = client_for(doctor)
    r = c.post(
        "/api/v1/medical-records/",
        {"patient_id": patient.id, "chief_complaint": "Headache", "diagnosis": "Migraine", "notes": ""},
        format="json",
    )
    assert r.status_code == 201, r.data
    assert r.data["doctor"] == doctor.user_id
    assert r.data["doctor_name"] == doctor.full_name
    assert r.data["notes"] is None

    listed = c.get("/api/v1/medical-records/", {"patient": patient.id})
    assert [x["id"] for x in listed.data] == [r.data["id"]]


def test_api_requires_diagnosis(client_for, doctor, patient):
    r = client_for(doctor).post(
        "/api/v1/medical-records/",
        {"patient_id": patient.id, "chief_complaint": "Headache"},
        format="json",
    )
    assert r.status_code == 400
    assert r.data["error"]["code"] == "validation_error"
    assert "diagnosis" in r.data["error"]["details"]


def test_api_roles(client_for, nurse, cashier, patient):
    body = {"patient_id": patient.id, "chief_complaint": "x", "diagnosis": "y"}
    assert client_for(nurse).post("/api/v1/medical-records/", body, format="json").status_code == 403
    assert client_for(nurse).get("/api/v1/medical-records/").status_code == 200
    assert client_for(cashier).get("/api/v1/medical-records/").status_code == 403


def test_api_bad_patient_param(api_client):
    r = api_client.get("/api/v1/medical-records/", {"patient": "abc"})
    assert r.status_code == 400
