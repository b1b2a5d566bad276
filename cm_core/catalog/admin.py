from django.contrib import admin

from cm_core.catalog.models import ClinicService


@admin.register(ClinicService)
class ClinicServiceAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "is_active", "updated_at")
    list_filter = ("category", "is_active")
    search_fields = ("name", "category")
    ordering = ("category", "name")
