from django.contrib import admin

from cm_core.patients.models import Patient


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = (
        "medical_record_number",
        "full_name",
        "gender",
        "date_of_birth",
        "phone",
        "email",
        "created_at",
    )
    list_filter = ("gender",)
    search_fields = ("full_name", "medical_record_number", "phone", "email")
    readonly_fields = ("medical_record_number", "created_at", "updated_at")
    ordering = ("-created_at",)
