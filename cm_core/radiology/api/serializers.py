# cm_core/radiology/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from cm_core.iam.selectors import display_name
from cm_core.radiology.models import RadiologyExam, RadiologyStatus


class RadiologyExamSerializer(serializers.ModelSerializer):
    patient_name = serializers.CharField(source="patient.full_name", read_only=True)
    ordered_by_name = serializers.SerializerMethodField()
    radiologist_name = serializers.SerializerMethodField()

    class Meta:
        model = RadiologyExam
        fields = [
            "id",
            "patient",
            "patient_name",
            "medical_record",
            "exam_type",
            "body_part",
            "status",
            "ordered_by",
            "ordered_by_name",
            "radiologist",
            "radiologist_name",
            "findings",
            "impression",
            "recommendations",
            "notes",
            "ordered_at",
            "completed_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_ordered_by_name(self, obj) -> str | None:
        return display_name(obj.ordered_by)

    def get_radiologist_name(self, obj) -> str | None:
        return display_name(obj.radiologist)


class RadiologyExamCreateSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField()
    medical_record_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    exam_type = serializers.CharField(max_length=128)
    body_part = serializers.CharField(max_length=128)
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)

    def validate(self, attrs):
        return {k: (None if v == "" else v) for k, v in attrs.items()}


class RadiologyExamUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=RadiologyStatus.choices, required=False)
    radiologist_id = serializers.IntegerField(required=False)
    findings = serializers.CharField(required=False, allow_blank=True)
    impression = serializers.CharField(required=False, allow_blank=True)
    recommendations = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Nothing to update.")
        return attrs
