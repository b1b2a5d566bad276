# cm_core/common/admin.py
from __future__ import annotations

from django.contrib import admin

from cm_core.common.models import SequenceCounter


@admin.register(SequenceCounter)
class SequenceCounterAdmin(admin.ModelAdmin):
    list_display = ("key", "last_value", "updated_at")
    search_fields = ("key",)
    readonly_fields = ("key", "last_value", "created_at", "updated_at")
    ordering = ("key",)
