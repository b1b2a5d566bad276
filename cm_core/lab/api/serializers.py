# cm_core/lab/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from cm_core.iam.selectors import display_name
from cm_core.lab.models import LabTest, LabTestStatus


class LabTestSerializer(serializers.ModelSerializer):
    patient_name = serializers.CharField(source="patient.full_name", read_only=True)
    ordered_by_name = serializers.SerializerMethodField()
    technician_name = serializers.SerializerMethodField()

    class Meta:
        model = LabTest
        fields = [
            "id",
            "patient",
            "patient_name",
            "medical_record",
            "test_name",
            "test_type",
            "status",
            "ordered_by",
            "ordered_by_name",
            "technician",
            "technician_name",
            "results",
            "reference_values",
            "notes",
            "ordered_at",
            "completed_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_ordered_by_name(self, obj) -> str | None:
        return display_name(obj.ordered_by)

    def get_technician_name(self, obj) -> str | None:
        return display_name(obj.technician)


class LabTestCreateSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField()
    medical_record_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    test_name = serializers.CharField(max_length=255)
    test_type = serializers.CharField(max_length=128)
    reference_values = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)

    def validate(self, attrs):
        return {k: (None if v == "" else v) for k, v in attrs.items()}


class LabTestUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=LabTestStatus.choices, required=False)
    technician_id = serializers.IntegerField(required=False)
    results = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide at least one of status, technician_id, results.")
        return attrs
