from django.contrib import admin

from cm_core.radiology.models import RadiologyExam


@admin.register(RadiologyExam)
class RadiologyExamAdmin(admin.ModelAdmin):
    list_display = ("id", "exam_type", "body_part", "patient", "status", "ordered_at", "completed_at")
    list_filter = ("status", "exam_type")
    search_fields = ("exam_type", "body_part", "patient__full_name", "patient__medical_record_number")
    autocomplete_fields = ("patient",)
    readonly_fields = ("ordered_at", "completed_at", "created_at", "updated_at")
    ordering = ("-ordered_at",)
