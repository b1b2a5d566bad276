from datetime import timedelta

import pytest
from rest_framework.exceptions import NotFound

from cm_core.lab.models import LabTest, LabTestStatus
from cm_core.lab.selectors import lab_tests_filtered
from cm_core.lab.services import LabTestService
from cm_core.records.services import MedicalRecordService

pytestmark = pytest.mark.django_db


@pytest.fixture
def lab_test(patient, doctor):
    return LabTestService.create_lab_test(
        patient_id=patient.id,
        ordered_by_id=doctor.user_id,
        test_name="Complete Blood Count",
        test_type="hematology",
    )


def test_new_test_is_ordered(lab_test, doctor):
    assert lab_test.status == LabTestStatus.ORDERED
    assert lab_test.ordered_by_id == doctor.user_id
    assert lab_test.ordered_at is not None
    assert lab_test.completed_at is None
    assert lab_test.technician_id is None


def test_create_links_existing_medical_record(patient, doctor):
    rec = MedicalRecordService.create_medical_record(
        patient_id=patient.id, doctor_id=doctor.user_id, chief_complaint="Fatigue", diagnosis="Anemia?"
    )
    t = LabTestService.create_lab_test(
        patient_id=patient.id,
        ordered_by_id=doctor.user_id,
        medical_record_id=rec.id,
        test_name="Ferritin",
        test_type="chemistry",
    )
    assert t.medical_record_id == rec.id


def test_create_checks_references(patient, doctor):
    with pytest.raises(NotFound):
        LabTestService.create_lab_test(patient_id=777, ordered_by_id=doctor.user_id, test_name="x", test_type="y")
    with pytest.raises(NotFound) as exc:
        LabTestService.create_lab_test(
            patient_id=patient.id, ordered_by_id=doctor.user_id, medical_record_id=555, test_name="x", test_type="y"
        )
    assert "Medical record with id 555 not found" in str(exc.value.detail)


def test_completed_at_follows_status(lab_test):
    t = LabTestService.update_lab_test(lab_test_id=lab_test.id, status=LabTestStatus.IN_PROGRESS)
    assert t.completed_at is None

    t = LabTestService.update_lab_test(lab_test_id=lab_test.id, status=LabTestStatus.COMPLETED, results="Hb 13.2")
    first_completion = t.completed_at
    assert first_completion is not None
    assert t.results == "Hb 13.2"

    # completing again stamps a fresh time
    earlier = first_completion - timedelta(days=1)
    LabTest.objects.filter(pk=lab_test.pk).update(completed_at=earlier)
    t = LabTestService.update_lab_test(lab_test_id=lab_test.id, status=LabTestStatus.COMPLETED)
    assert t.completed_at > earlier
    assert t.completed_at >= first_completion

    t = LabTestService.update_lab_test(lab_test_id=lab_test.id, status=LabTestStatus.IN_PROGRESS)
    t.refresh_from_db()
    assert t.completed_at is None
    assert t.results == "Hb 13.2"


def test_update_without_status_keeps_completion(lab_test):
    LabTestService.update_lab_test(lab_test_id=lab_test.id, status=LabTestStatus.COMPLETED)
    t = LabTestService.update_lab_test(lab_test_id=lab_test.id, results="amended")
    assert t.status == LabTestStatus.COMPLETED
    assert t.completed_at is not None


def test_technician_must_exist(lab_test, lab_technician):
    with pytest.raises(NotFound) as exc:
        LabTestService.update_lab_test(lab_test_id=lab_test.id, technician_id=4242)
    assert "Technician with id 4242 not found" in str(exc.value.detail)

    t = LabTestService.update_lab_test(lab_test_id=lab_test.id, technician_id=lab_technician.user_id)
    assert t.technician_id == lab_technician.user_id


def test_filters(lab_test, other_patient, doctor):
    other = LabTestService.create_lab_test(
        patient_id=other_patient.id, ordered_by_id=doctor.user_id, test_name="Lipids", test_type="chemistry"
    )
    LabTestService.update_lab_test(lab_test_id=other.id, status=LabTestStatus.COMPLETED)

    assert [t.id for t in lab_tests_filtered(patient_id=lab_test.patient_id)] == [lab_test.id]
    assert [t.id for t in lab_tests_filtered(status="completed")] == [other.id]
    assert [t.id for t in lab_tests_filtered()] == [other.id, lab_test.id]


def test_api_order_and_complete(client_for, doctor, lab_technician, patient):
    r = client_for(doctor).post(
        "/api/v1/lab/tests/",
        {"patient_id": patient.id, "test_name": "Urinalysis", "test_type": "urine"},
        format="json",
    )
    assert r.status_code == 201, r.data
    assert r.data["status"] == "ordered"
    assert r.data["ordered_by_name"] == doctor.full_name

    tech = client_for(lab_technician)
    r2 = tech.patch(
        f"/api/v1/lab/tests/{r.data['id']}/",
        {"status": "completed", "technician_id": lab_technician.user_id, "results": "Normal"},
        format="json",
    )
    assert r2.status_code == 200, r2.data
    assert r2.data["completed_at"] is not None
    assert r2.data["technician_name"] == lab_technician.full_name

    listed = tech.get("/api/v1/lab/tests/", {"status": "completed"})
    assert [x["id"] for x in listed.data] == [r.data["id"]]


def test_api_empty_patch_is_rejected(api_client, lab_test):
    r = api_client.patch(f"/api/v1/lab/tests/{lab_test.id}/", {}, format="json")
    assert r.status_code == 400


def test_api_unknown_test_404(api_client):
    r = api_client.patch("/api/v1/lab/tests/999/", {"status": "completed"}, format="json")
    assert r.status_code == 404
    assert r.data["error"]["message"] == "Lab test with id 999 not found"


def test_api_roles(client_for, lab_technician, cashier, patient):
    body = {"patient_id": patient.id, "test_name": "x", "test_type": "y"}
    assert client_for(lab_technician).post("/api/v1/lab/tests/", body, format="json").status_code == 403
    assert client_for(cashier).get("/api/v1/lab/tests/").status_code == 403
