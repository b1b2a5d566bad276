from django.contrib import admin

from cm_core.records.models import MedicalRecord


@admin.register(MedicalRecord)
class MedicalRecordAdmin(admin.ModelAdmin):
    list_display = ("id", "patient", "doctor", "visit_date", "diagnosis")
    search_fields = ("patient__full_name", "patient__medical_record_number", "diagnosis")
    autocomplete_fields = ("patient",)
    readonly_fields = ("visit_date", "created_at", "updated_at")
    ordering = ("-visit_date",)
