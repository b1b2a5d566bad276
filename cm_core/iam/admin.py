# cm_core/iam/admin.py
from __future__ import annotations

from django.contrib import admin

from cm_core.iam.models import StaffProfile


@admin.register(StaffProfile)
class StaffProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "full_name", "role", "is_active", "created_at", "updated_at")
    list_filter = ("role", "is_active")
    search_fields = ("full_name", "user__username", "user__email")
    autocomplete_fields = ("user",)
    ordering = ("-created_at",)
