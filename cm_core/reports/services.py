# cm_core/reports/services.py
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from django.conf import settings
from django.db.models import Avg, Count, DecimalField, ExpressionWrapper, F, Q, Sum
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from cm_core.billing.models import Invoice, PaymentStatus
from cm_core.common.money import ZERO, round2
from cm_core.lab.models import LabTest, LabTestStatus
from cm_core.patients.models import Gender, Patient
from cm_core.pharmacy.models import Medication
from cm_core.queues.models import QueueEntry, QueueStatus
from cm_core.radiology.models import RadiologyExam, RadiologyStatus
from cm_core.records.models import MedicalRecord

logger = logging.getLogger(__name__)

REPORT_TYPES = (
    "patient_summary",
    "financial_summary",
    "inventory_report",
    "appointment_report",
    "medical_statistics",
)
REPORT_FORMATS = ("pdf", "excel")


def _money(value) -> str:
    return str(round2(value or ZERO))


def _in_range(qs, start: date, end: date, field: str = "created_at__date"):
    # both ends inclusive, whole calendar days in the clinic time zone
    return qs.filter(**{f"{field}__gte": start, f"{field}__lte": end})


def _patient_summary(start: date, end: date) -> dict[str, Any]:
    stats = _in_range(Patient.objects.all(), start, end).aggregate(
        total=Count("id"),
        male=Count("id", filter=Q(gender=Gender.MALE)),
        female=Count("id", filter=Q(gender=Gender.FEMALE)),
    )
    return {
        "total_patients": stats["total"],
        "male_patients": stats["male"],
        "female_patients": stats["female"],
    }


def _financial_summary(start: date, end: date) -> dict[str, Any]:
    paid = Q(payment_status=PaymentStatus.PAID)
    pending = Q(payment_status=PaymentStatus.PENDING)
    stats = _in_range(Invoice.objects.all(), start, end).aggregate(
        total_revenue=Sum("final_amount"),
        total_invoices=Count("id"),
        average_invoice=Avg("final_amount"),
        paid_invoices=Count("id", filter=paid),
        paid_amount=Sum("final_amount", filter=paid),
        pending_invoices=Count("id", filter=pending),
        pending_amount=Sum("final_amount", filter=pending),
    )
    return {
        "total_revenue": _money(stats["total_revenue"]),
        "total_invoices": stats["total_invoices"],
        "average_invoice": _money(stats["average_invoice"]),
        "paid_invoices": stats["paid_invoices"],
        "paid_amount": _money(stats["paid_amount"]),
        "pending_invoices": stats["pending_invoices"],
        "pending_amount": _money(stats["pending_amount"]),
    }


def _inventory_report(start: date, end: date) -> dict[str, Any]:
    # a snapshot of current stock; the date range is echoed but not applied
    stock_value = ExpressionWrapper(
        F("price") * F("stock_quantity"),
        output_field=DecimalField(max_digits=18, decimal_places=2),
    )
    stats = Medication.objects.aggregate(total=Count("id"), value=Sum(stock_value))

    low = Medication.objects.filter(stock_quantity__lte=F("min_stock_level")).order_by("name", "id")
    low_items = [
        {
            "id": m.id,
            "name": m.name,
            "stock_quantity": m.stock_quantity,
            "min_stock_level": m.min_stock_level,
            "price": _money(m.price),
        }
        for m in low
    ]
    return {
        "total_medications": stats["total"],
        "low_stock_count": len(low_items),
        "total_stock_value": _money(stats["value"]),
        "low_stock_items": low_items,
    }


def _appointment_report(start: date, end: date) -> dict[str, Any]:
    stats = _in_range(QueueEntry.objects.all(), start, end, field="queue_date").aggregate(
        total=Count("id"),
        completed=Count("id", filter=Q(status=QueueStatus.COMPLETED)),
        waiting=Count("id", filter=Q(status=QueueStatus.WAITING)),
        cancelled=Count("id", filter=Q(status=QueueStatus.CANCELLED)),
    )
    return {
        "total_appointments": stats["total"],
        "completed": stats["completed"],
        "waiting": stats["waiting"],
        "cancelled": stats["cancelled"],
    }


def _medical_statistics(start: date, end: date) -> dict[str, Any]:
    return {
        "total_visits": _in_range(MedicalRecord.objects.all(), start, end, field="visit_date__date").count(),
        "total_lab_tests": _in_range(LabTest.objects.all(), start, end, field="ordered_at__date").count(),
        "total_radiology_exams": _in_range(RadiologyExam.objects.all(), start, end, field="ordered_at__date").count(),
    }


_BUILDERS = {
    "patient_summary": _patient_summary,
    "financial_summary": _financial_summary,
    "inventory_report": _inventory_report,
    "appointment_report": _appointment_report,
    "medical_statistics": _medical_statistics,
}


class ReportService:
    @staticmethod
    def generate_report(
        *,
        report_type: str,
        start_date: date,
        end_date: date,
        format: str,
        filters: dict | None = None,
    ) -> dict[str, Any]:
        """
        Computes the report data and names the file it would be rendered to.
        Rendering itself (PDF / Excel) is not done here.
        """
        builder = _BUILDERS.get(report_type)
        if builder is None:
            raise ValidationError({"report_type": f"Unsupported report type: {report_type}"})
        if format not in REPORT_FORMATS:
            raise ValidationError({"format": f"Unsupported format: {format}"})
        if end_date < start_date:
            raise ValidationError({"end_date": "End date must not be before start date."})

        data = builder(start_date, end_date)
        data["date_range"] = {"start": start_date.isoformat(), "end": end_date.isoformat()}
        if filters:
            # echoed back unchanged
            data["filters"] = filters

        stamp = timezone.now().strftime("%Y-%m-%dT%H-%M-%S-%f")
        file_name = f"{report_type}_{stamp}.{format}"
        prefix = settings.CLINIC_REPORTS_URL_PREFIX

        logger.info("Report generated type=%s range=%s..%s file=%s", report_type, start_date, end_date, file_name)
        return {
            "report_url": f"{prefix}{file_name}",
            "file_name": file_name,
            "data": data,
        }


class DashboardService:
    @staticmethod
    def get_stats() -> dict[str, Any]:
        """
        Point-in-time counts for the front page. Recomputed on every call.
        "Today" is the local date of settings.TIME_ZONE.
        """
        today = timezone.localdate()

        revenue = Invoice.objects.filter(
            payment_status=PaymentStatus.PAID,
            payment_date__date=today,
        ).aggregate(s=Sum("final_amount"))["s"]

        return {
            "total_patients": Patient.objects.count(),
            "today_queue": QueueEntry.objects.filter(queue_date=today).count(),
            "pending_lab_tests": LabTest.objects.filter(status=LabTestStatus.ORDERED).count(),
            "pending_radiology": RadiologyExam.objects.filter(status=RadiologyStatus.ORDERED).count(),
            "low_stock_medications": Medication.objects.filter(stock_quantity__lte=F("min_stock_level")).count(),
            "unpaid_invoices": Invoice.objects.filter(payment_status=PaymentStatus.PENDING).count(),
            "today_revenue": round2(revenue or ZERO),
        }
