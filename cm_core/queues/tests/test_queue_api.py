import pytest
from django.utils import timezone

pytestmark = pytest.mark.django_db


def test_queue_scenario_priority_then_number(api_client, patient, other_patient):
    r1 = api_client.post("/api/v1/queue/", {"patient_id": patient.id, "priority": 0}, format="json")
    assert r1.status_code == 201, r1.data
    r2 = api_client.post("/api/v1/queue/", {"patient_id": other_patient.id, "priority": 2}, format="json")
    assert r2.status_code == 201, r2.data

    today = timezone.localdate().isoformat()
    r = api_client.get("/api/v1/queue/", {"date": today})
    assert r.status_code == 200

    assert [(e["patient"], e["queue_number"], e["priority"]) for e in r.data] == [
        (other_patient.id, 2, 2),
        (patient.id, 1, 0),
    ]
    assert r.data[0]["patient_name"] == other_patient.full_name


def test_queue_for_other_date_is_separate(api_client, patient):
    api_client.post("/api/v1/queue/", {"patient_id": patient.id}, format="json")
    r = api_client.post(
        "/api/v1/queue/",
        {"patient_id": patient.id, "queue_date": "2030-01-01"},
        format="json",
    )
    assert r.status_code == 201
    assert r.data["queue_number"] == 1

    assert len(api_client.get("/api/v1/queue/", {"date": "2030-01-01"}).data) == 1


def test_queue_status_update(api_client, patient):
    created = api_client.post("/api/v1/queue/", {"patient_id": patient.id}, format="json")
    qid = created.data["id"]

    r = api_client.post(f"/api/v1/queue/{qid}/status/", {"status": "in_progress"}, format="json")
    assert r.status_code == 200, r.data
    assert r.data["status"] == "in_progress"

    bad = api_client.post(f"/api/v1/queue/{qid}/status/", {"status": "teleported"}, format="json")
    assert bad.status_code == 400


def test_queue_bad_date_param(api_client):
    r = api_client.get("/api/v1/queue/", {"date": "yesterday"})
    assert r.status_code == 400
    assert "date" in r.data["error"]["details"]


def test_queue_unknown_patient_404(api_client):
    r = api_client.post("/api/v1/queue/", {"patient_id": 31337}, format="json")
    assert r.status_code == 404
    assert r.data["error"]["message"] == "Patient with id 31337 not found"
