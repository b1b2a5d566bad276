from django.contrib import admin

from cm_core.lab.models import LabTest


@admin.register(LabTest)
class LabTestAdmin(admin.ModelAdmin):
    list_display = ("id", "test_name", "test_type", "patient", "status", "ordered_at", "completed_at")
    list_filter = ("status", "test_type")
    search_fields = ("test_name", "patient__full_name", "patient__medical_record_number")
    autocomplete_fields = ("patient",)
    readonly_fields = ("ordered_at", "completed_at", "created_at", "updated_at")
    ordering = ("-ordered_at",)
