import pytest
from rest_framework.exceptions import NotFound

from cm_core.radiology.models import RadiologyStatus
from cm_core.radiology.services import RadiologyService

pytestmark = pytest.mark.django_db


@pytest.fixture
def exam(patient, doctor):
    return RadiologyService.create_radiology_exam(
        patient_id=patient.id,
        ordered_by_id=doctor.user_id,
        exam_type="X-Ray",
        body_part="Chest",
    )


def test_new_exam_is_ordered(exam):
    assert exam.status == RadiologyStatus.ORDERED
    assert exam.completed_at is None
    assert exam.findings is None


def test_report_and_complete(exam, radiologist):
    e = RadiologyService.update_radiology_exam(
        exam_id=exam.id,
        status=RadiologyStatus.COMPLETED,
        radiologist_id=radiologist.user_id,
        findings="No acute findings",
        impression="Normal chest",
    )
    e.refresh_from_db()
    assert e.completed_at is not None
    assert e.radiologist_id == radiologist.user_id
    assert e.impression == "Normal chest"
    assert e.recommendations is None


def test_leaving_completed_clears_timestamp(exam):
    RadiologyService.update_radiology_exam(exam_id=exam.id, status=RadiologyStatus.COMPLETED)
    e = RadiologyService.update_radiology_exam(exam_id=exam.id, status=RadiologyStatus.CANCELLED)
    assert e.completed_at is None


def test_unknown_radiologist(exam):
    with pytest.raises(NotFound) as exc:
        RadiologyService.update_radiology_exam(exam_id=exam.id, radiologist_id=1234)
    assert "Radiologist with id 1234 not found" in str(exc.value.detail)


def test_api_flow(client_for, doctor, radiologist, patient):
    r = client_for(doctor).post(
        "/api/v1/radiology/exams/",
        {"patient_id": patient.id, "exam_type": "MRI", "body_part": "Knee"},
        format="json",
    )
    assert r.status_code == 201, r.data

    rad = client_for(radiologist)
    r2 = rad.patch(
        f"/api/v1/radiology/exams/{r.data['id']}/",
        {"status": "completed", "findings": "Meniscal tear"},
        format="json",
    )
    assert r2.status_code == 200, r2.data
    assert r2.data["completed_at"] is not None

    listed = rad.get("/api/v1/radiology/exams/", {"patient": patient.id})
    assert listed.status_code == 200
    assert listed.data[0]["findings"] == "Meniscal tear"


def test_api_lab_technician_cannot_read(client_for, lab_technician):
    r = client_for(lab_technician).get("/api/v1/radiology/exams/")
    assert r.status_code == 403
    assert r.data["error"]["code"] == "permission_denied"
