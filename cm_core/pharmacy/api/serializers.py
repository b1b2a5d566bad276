# cm_core/pharmacy/api/serializers.py
from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from cm_core.iam.selectors import display_name
from cm_core.pharmacy.models import Medication, Prescription, PrescriptionItem, StockOperation


class MedicationSerializer(serializers.ModelSerializer):
    is_low_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Medication
        fields = [
            "id",
            "name",
            "generic_name",
            "strength",
            "dosage_form",
            "manufacturer",
            "barcode",
            "price",
            "stock_quantity",
            "min_stock_level",
            "is_low_stock",
            "expiry_date",
            "description",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class MedicationCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    dosage_form = serializers.CharField(max_length=64)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
    stock_quantity = serializers.IntegerField(min_value=0)
    min_stock_level = serializers.IntegerField(min_value=0)

    generic_name = serializers.CharField(max_length=255, required=False, allow_null=True, allow_blank=True, default=None)
    strength = serializers.CharField(max_length=64, required=False, allow_null=True, allow_blank=True, default=None)
    manufacturer = serializers.CharField(max_length=255, required=False, allow_null=True, allow_blank=True, default=None)
    barcode = serializers.CharField(max_length=64, required=False, allow_null=True, allow_blank=True, default=None)
    expiry_date = serializers.DateField(required=False, allow_null=True, default=None)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)

    def validate(self, attrs):
        return {k: (None if v == "" else v) for k, v in attrs.items()}


class StockUpdateSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)
    operation = serializers.ChoiceField(choices=StockOperation.choices)


class PrescriptionItemSerializer(serializers.ModelSerializer):
    medication_name = serializers.CharField(source="medication.name", read_only=True)

    class Meta:
        model = PrescriptionItem
        fields = [
            "id",
            "medication",
            "medication_name",
            "quantity",
            "dosage",
            "frequency",
            "duration",
            "instructions",
            "unit_price",
            "total_price",
        ]
        read_only_fields = fields


class PrescriptionSerializer(serializers.ModelSerializer):
    patient_name = serializers.CharField(source="patient.full_name", read_only=True)
    prescribed_by_name = serializers.SerializerMethodField()
    dispensed_by_name = serializers.SerializerMethodField()
    items = PrescriptionItemSerializer(many=True, read_only=True)

    class Meta:
        model = Prescription
        fields = [
            "id",
            "patient",
            "patient_name",
            "medical_record",
            "prescribed_by",
            "prescribed_by_name",
            "dispensed_by",
            "dispensed_by_name",
            "status",
            "prescription_date",
            "dispensed_date",
            "total_amount",
            "notes",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_prescribed_by_name(self, obj) -> str | None:
        return display_name(obj.prescribed_by)

    def get_dispensed_by_name(self, obj) -> str | None:
        return display_name(obj.dispensed_by)


class PrescriptionItemInputSerializer(serializers.Serializer):
    medication_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)
    dosage = serializers.CharField(max_length=128)
    frequency = serializers.CharField(max_length=128)
    duration = serializers.CharField(max_length=128)
    instructions = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)


class PrescriptionCreateSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField()
    medical_record_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    # defaults to the calling user
    prescribed_by_id = serializers.IntegerField(required=False)
    items = PrescriptionItemInputSerializer(many=True, allow_empty=False)
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
