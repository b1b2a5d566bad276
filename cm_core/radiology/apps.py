from __future__ import annotations

from django.apps import AppConfig


class RadiologyConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "cm_core.radiology"
