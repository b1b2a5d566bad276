# cm_core/billing/api/serializers.py
from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from cm_core.billing.models import Invoice, InvoiceItem, InvoiceItemType, PaymentMethod
from cm_core.iam.selectors import display_name


class InvoiceItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = InvoiceItem
        fields = ["id", "item_type", "item_id", "description", "quantity", "unit_price", "total_price"]
        read_only_fields = fields


class InvoiceSerializer(serializers.ModelSerializer):
    patient_name = serializers.CharField(source="patient.full_name", read_only=True)
    cashier_name = serializers.SerializerMethodField()
    items = InvoiceItemSerializer(many=True, read_only=True)

    class Meta:
        model = Invoice
        fields = [
            "id",
            "invoice_number",
            "patient",
            "patient_name",
            "cashier",
            "cashier_name",
            "total_amount",
            "discount_amount",
            "tax_amount",
            "final_amount",
            "payment_status",
            "payment_method",
            "payment_date",
            "notes",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_cashier_name(self, obj) -> str | None:
        return display_name(obj.cashier)


class InvoiceItemInputSerializer(serializers.Serializer):
    item_type = serializers.ChoiceField(choices=InvoiceItemType.choices)
    item_id = serializers.IntegerField(min_value=1)
    description = serializers.CharField(max_length=255)
    quantity = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))


class InvoiceCreateSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField()
    items = InvoiceItemInputSerializer(many=True, allow_empty=False)
    discount_amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.00"), required=False, default=Decimal("0.00")
    )
    tax_amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.00"), required=False, default=Decimal("0.00")
    )
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)

    def validate_notes(self, value):
        return value or None


class PaymentSerializer(serializers.Serializer):
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices)
