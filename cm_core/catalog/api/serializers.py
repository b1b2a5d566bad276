# cm_core/catalog/api/serializers.py
from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from cm_core.catalog.models import ClinicService


class ClinicServiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = ClinicService
        fields = ["id", "name", "description", "category", "price", "is_active", "created_at", "updated_at"]
        read_only_fields = fields


class ClinicServiceCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    category = serializers.CharField(max_length=128)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)

    def validate_description(self, value):
        return value or None


class ServiceActiveSerializer(serializers.Serializer):
    is_active = serializers.BooleanField()
