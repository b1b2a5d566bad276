from datetime import date

import pytest
from django.utils import timezone
from rest_framework.exceptions import NotFound

from cm_core.queues.models import QueueStatus
from cm_core.queues.selectors import queue_for_day
from cm_core.queues.services import QueueService

pytestmark = pytest.mark.django_db


def test_numbers_run_one_to_k_per_day(patient, other_patient):
    day = date(2024, 5, 1)
    numbers = [
        QueueService.create_queue(patient_id=p.id, queue_date=day).queue_number
        for p in (patient, other_patient, patient)
    ]
    assert numbers == [1, 2, 3]


def test_numbering_restarts_on_another_day(patient):
    QueueService.create_queue(patient_id=patient.id, queue_date=date(2024, 5, 1))
    QueueService.create_queue(patient_id=patient.id, queue_date=date(2024, 5, 1))

    e = QueueService.create_queue(patient_id=patient.id, queue_date=date(2024, 5, 2))
    assert e.queue_number == 1


def test_new_entry_defaults(patient):
    e = QueueService.create_queue(patient_id=patient.id)
    assert e.queue_date == timezone.localdate()
    assert e.status == QueueStatus.WAITING
    assert e.priority == 0
    assert e.notes is None


def test_priority_sorts_before_arrival(patient, other_patient):
    first = QueueService.create_queue(patient_id=patient.id, priority=0)
    urgent = QueueService.create_queue(patient_id=other_patient.id, priority=2)

    assert (first.queue_number, urgent.queue_number) == (1, 2)
    assert [e.id for e in queue_for_day()] == [urgent.id, first.id]


def test_ties_keep_arrival_order(patient, other_patient):
    a = QueueService.create_queue(patient_id=patient.id, priority=1)
    b = QueueService.create_queue(patient_id=other_patient.id, priority=1)
    assert [e.id for e in queue_for_day()] == [a.id, b.id]


def test_status_changes_are_unrestricted(patient):
    e = QueueService.create_queue(patient_id=patient.id)

    for s in (QueueStatus.COMPLETED, QueueStatus.WAITING, QueueStatus.CANCELLED, QueueStatus.IN_PROGRESS):
        e = QueueService.update_queue_status(queue_id=e.id, status=s)
        e.refresh_from_db()
        assert e.status == s


def test_unknown_patient_is_not_found():
    with pytest.raises(NotFound) as exc:
        QueueService.create_queue(patient_id=424242)
    assert "Patient with id 424242 not found" in str(exc.value.detail)


def test_unknown_queue_entry_is_not_found():
    with pytest.raises(NotFound):
        QueueService.update_queue_status(queue_id=999, status=QueueStatus.COMPLETED)
