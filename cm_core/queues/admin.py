from django.contrib import admin

from cm_core.queues.models import QueueEntry


@admin.register(QueueEntry)
class QueueEntryAdmin(admin.ModelAdmin):
    list_display = ("queue_date", "queue_number", "patient", "priority", "status", "created_at")
    list_filter = ("queue_date", "status")
    search_fields = ("patient__full_name", "patient__medical_record_number")
    autocomplete_fields = ("patient",)
    readonly_fields = ("queue_number", "queue_date", "created_at", "updated_at")
    ordering = ("-queue_date", "-priority", "queue_number")
