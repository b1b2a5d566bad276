# cm_core/patients/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from cm_core.patients.models import Gender, Patient


class PatientCreateSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=255)
    date_of_birth = serializers.DateField()
    gender = serializers.ChoiceField(choices=Gender.choices)

    phone = serializers.CharField(max_length=32, required=False, allow_null=True, allow_blank=True, default=None)
    email = serializers.EmailField(required=False, allow_null=True, allow_blank=True, default=None)
    address = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    emergency_contact = serializers.CharField(max_length=255, required=False, allow_null=True, allow_blank=True, default=None)
    emergency_phone = serializers.CharField(max_length=32, required=False, allow_null=True, allow_blank=True, default=None)
    blood_type = serializers.CharField(max_length=8, required=False, allow_null=True, allow_blank=True, default=None)
    allergies = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)

    def validate(self, attrs):
        # the form posts "" for untouched optional inputs
        return {k: (None if v == "" else v) for k, v in attrs.items()}


class PatientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Patient
        fields = [
            "id",
            "medical_record_number",
            "full_name",
            "date_of_birth",
            "gender",
            "phone",
            "email",
            "address",
            "emergency_contact",
            "emergency_phone",
            "blood_type",
            "allergies",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
