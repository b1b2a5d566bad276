# cm_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from cm_core.billing.api.views import InvoiceViewSet
from cm_core.catalog.api.views import ClinicServiceViewSet
from cm_core.common.views import HealthCheckView
from cm_core.iam.api.auth import LoginView, LogoutView, RefreshView
from cm_core.iam.api.me import MeView
from cm_core.iam.api.views import UserViewSet
from cm_core.lab.api.views import LabTestViewSet
from cm_core.patients.api.views import PatientViewSet
from cm_core.pharmacy.api.views import MedicationViewSet, PrescriptionViewSet
from cm_core.queues.api.views import QueueViewSet
from cm_core.radiology.api.views import RadiologyExamViewSet
from cm_core.records.api.views import MedicalRecordViewSet
from cm_core.reports.api.views import DashboardViewSet, ReportViewSet

router = DefaultRouter()

router.register(r"users", UserViewSet, basename="users")
router.register(r"patients", PatientViewSet, basename="patients")
router.register(r"queue", QueueViewSet, basename="queue")
router.register(r"medical-records", MedicalRecordViewSet, basename="medical-records")
router.register(r"lab/tests", LabTestViewSet, basename="lab-tests")
router.register(r"radiology/exams", RadiologyExamViewSet, basename="radiology-exams")
router.register(r"pharmacy/medications", MedicationViewSet, basename="pharmacy-medications")
router.register(r"pharmacy/prescriptions", PrescriptionViewSet, basename="pharmacy-prescriptions")
router.register(r"services", ClinicServiceViewSet, basename="services")
router.register(r"billing/invoices", InvoiceViewSet, basename="billing-invoices")
router.register(r"reports", ReportViewSet, basename="reports")
router.register(r"dashboard", DashboardViewSet, basename="dashboard")

urlpatterns = [
    path("health/", HealthCheckView.as_view(), name="health"),

    # Auth + /me
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/refresh/", RefreshView.as_view(), name="refresh"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    path("me/", MeView.as_view(), name="me"),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]
