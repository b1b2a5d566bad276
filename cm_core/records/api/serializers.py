# cm_core/records/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from cm_core.iam.selectors import display_name
from cm_core.records.models import MedicalRecord


class MedicalRecordSerializer(serializers.ModelSerializer):
    patient_name = serializers.CharField(source="patient.full_name", read_only=True)
    doctor_name = serializers.SerializerMethodField()

    class Meta:
        model = MedicalRecord
        fields = [
            "id",
            "patient",
            "patient_name",
            "doctor",
            "doctor_name",
            "visit_date",
            "chief_complaint",
            "present_illness",
            "physical_examination",
            "diagnosis",
            "treatment_plan",
            "prescription",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_doctor_name(self, obj) -> str | None:
        return display_name(obj.doctor)


class MedicalRecordCreateSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField()
    # defaults to the calling user
    doctor_id = serializers.IntegerField(required=False)

    chief_complaint = serializers.CharField()
    diagnosis = serializers.CharField()
    present_illness = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    physical_examination = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    treatment_plan = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    prescription = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)

    def validate(self, attrs):
        return {k: (None if v == "" else v) for k, v in attrs.items()}
