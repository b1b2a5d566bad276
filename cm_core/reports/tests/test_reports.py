from datetime import date, datetime, time, timedelta
from decimal import Decimal

import pytest
from django.test import override_settings
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from cm_core.billing.services import InvoiceService, PaymentService
from cm_core.lab.models import LabTest
from cm_core.lab.services import LabTestService
from cm_core.queues.models import QueueStatus
from cm_core.queues.services import QueueService
from cm_core.radiology.models import RadiologyExam
from cm_core.radiology.services import RadiologyService
from cm_core.records.models import MedicalRecord
from cm_core.records.services import MedicalRecordService
from cm_core.reports.services import ReportService

pytestmark = pytest.mark.django_db


def _today_range():
    today = timezone.localdate()
    return today - timedelta(days=1), today


def test_file_name_and_url():
    start, end = _today_range()
    out = ReportService.generate_report(report_type="patient_summary", start_date=start, end_date=end, format="pdf")

    assert out["file_name"].startswith("patient_summary_")
    assert out["file_name"].endswith(".pdf")
    assert out["report_url"] == f"/reports/{out['file_name']}"
    assert out["data"]["date_range"] == {"start": start.isoformat(), "end": end.isoformat()}


@override_settings(CLINIC_REPORTS_URL_PREFIX="https://files.clinic.test/r/")
def test_url_prefix_is_configurable():
    start, end = _today_range()
    out = ReportService.generate_report(report_type="inventory_report", start_date=start, end_date=end, format="excel")
    assert out["report_url"].startswith("https://files.clinic.test/r/inventory_report_")


def test_end_before_start_rejected():
    with pytest.raises(ValidationError):
        ReportService.generate_report(
            report_type="patient_summary",
            start_date=date(2024, 2, 1),
            end_date=date(2024, 1, 1),
            format="pdf",
        )


def test_patient_summary(patient, other_patient):
    start, end = _today_range()
    data = ReportService.generate_report(
        report_type="patient_summary", start_date=start, end_date=end, format="pdf"
    )["data"]
    assert (data["total_patients"], data["male_patients"], data["female_patients"]) == (2, 1, 1)


def test_patient_summary_outside_range(patient):
    data = ReportService.generate_report(
        report_type="patient_summary", start_date=date(2000, 1, 1), end_date=date(2000, 12, 31), format="pdf"
    )["data"]
    assert data["total_patients"] == 0


def test_financial_summary(patient, cashier):
    items = [{"item_type": "service", "item_id": 1, "description": "Visit", "quantity": 1, "unit_price": Decimal("30.00")}]
    a = InvoiceService.create_invoice(patient_id=patient.id, items=items)
    InvoiceService.create_invoice(patient_id=patient.id, items=items, tax_amount=Decimal("10.00"))
    PaymentService.process_payment(invoice_id=a.id, payment_method="cash", cashier_id=cashier.user_id)

    start, end = _today_range()
    data = ReportService.generate_report(
        report_type="financial_summary", start_date=start, end_date=end, format="excel"
    )["data"]
    assert data["total_invoices"] == 2
    assert data["total_revenue"] == "70.00"
    assert data["average_invoice"] == "35.00"
    assert (data["paid_invoices"], data["paid_amount"]) == (1, "30.00")
    assert (data["pending_invoices"], data["pending_amount"]) == (1, "40.00")


def test_inventory_report(make_medication):
    make_medication("Low", price=Decimal("2.00"), stock_quantity=3, min_stock_level=5)
    make_medication("Fine", price=Decimal("1.50"), stock_quantity=10, min_stock_level=5)

    start, end = _today_range()
    data = ReportService.generate_report(
        report_type="inventory_report", start_date=start, end_date=end, format="pdf"
    )["data"]
    assert data["total_medications"] == 2
    assert data["low_stock_count"] == 1
    assert data["total_stock_value"] == "21.00"
    assert data["low_stock_items"][0]["name"] == "Low"


def test_appointment_report(patient, other_patient):
    QueueService.create_queue(patient_id=patient.id)
    e = QueueService.create_queue(patient_id=other_patient.id)
    QueueService.update_queue_status(queue_id=e.id, status=QueueStatus.COMPLETED)

    start, end = _today_range()
    data = ReportService.generate_report(
        report_type="appointment_report", start_date=start, end_date=end, format="pdf"
    )["data"]
    assert data == {
        "total_appointments": 2,
        "completed": 1,
        "waiting": 1,
        "cancelled": 0,
        "date_range": {"start": start.isoformat(), "end": end.isoformat()},
    }


def test_api_admin_only(api_client, client_for, doctor):
    body = {"report_type": "medical_statistics", "start_date": "2024-01-01", "end_date": "2024-01-31", "format": "pdf"}

    r = api_client.post("/api/v1/reports/", body, format="json")
    assert r.status_code == 200, r.data
    assert r.data["data"]["total_visits"] == 0

    assert client_for(doctor).post("/api/v1/reports/", body, format="json").status_code == 403


def test_api_validation(api_client):
    r = api_client.post(
        "/api/v1/reports/",
        {"report_type": "weather", "start_date": "2024-01-01", "end_date": "2024-01-31", "format": "pdf"},
        format="json",
    )
    assert r.status_code == 400
    assert "report_type" in r.data["error"]["details"]

    r = api_client.post(
        "/api/v1/reports/",
        {"report_type": "patient_summary", "start_date": "2024-02-01", "end_date": "2024-01-31", "format": "pdf"},
        format="json",
    )
    assert r.status_code == 400
    assert "end_date" in r.data["error"]["details"]


def _at(day: date):
    return timezone.make_aware(datetime.combine(day, time(12, 0)))


def test_medical_statistics_counts_rows_in_range(patient, doctor):
    start, end = date(2024, 3, 1), date(2024, 3, 31)
    days = [date(2024, 2, 29), start, date(2024, 3, 15), end, date(2024, 4, 1)]

    for i, day in enumerate(days):
        rec = MedicalRecordService.create_medical_record(
            patient_id=patient.id, doctor_id=doctor.user_id, chief_complaint="Cough", diagnosis="URTI"
        )
        MedicalRecord.objects.filter(pk=rec.pk).update(visit_date=_at(day))

        # second visit of the day
        rec = MedicalRecordService.create_medical_record(
            patient_id=patient.id, doctor_id=doctor.user_id, chief_complaint="Fever", diagnosis="Viral"
        )
        MedicalRecord.objects.filter(pk=rec.pk).update(visit_date=_at(day))

        lab = LabTestService.create_lab_test(
            patient_id=patient.id, ordered_by_id=doctor.user_id, test_name="CBC", test_type="hematology"
        )
        LabTest.objects.filter(pk=lab.pk).update(ordered_at=_at(day))

        if i % 2 == 0:
            exam = RadiologyService.create_radiology_exam(
                patient_id=patient.id, ordered_by_id=doctor.user_id, exam_type="X-Ray", body_part="Chest"
            )
            RadiologyExam.objects.filter(pk=exam.pk).update(ordered_at=_at(day))

    data = ReportService.generate_report(
        report_type="medical_statistics", start_date=start, end_date=end, format="pdf"
    )["data"]

    # Feb 29 and Apr 1 fall outside; both range ends count
    assert data["total_visits"] == 6
    assert data["total_lab_tests"] == 3
    assert data["total_radiology_exams"] == 1
    assert data["date_range"] == {"start": "2024-03-01", "end": "2024-03-31"}
