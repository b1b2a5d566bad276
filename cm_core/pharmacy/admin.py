from django.contrib import admin

from cm_core.pharmacy.models import Medication, Prescription, PrescriptionItem


@admin.register(Medication)
class MedicationAdmin(admin.ModelAdmin):
    list_display = ("name", "strength", "dosage_form", "price", "stock_quantity", "min_stock_level", "expiry_date")
    search_fields = ("name", "generic_name", "barcode")
    list_filter = ("dosage_form",)
    ordering = ("name",)
    # stock moves through MedicationService only
    readonly_fields = ("stock_quantity", "created_at", "updated_at")


class PrescriptionItemInline(admin.TabularInline):
    model = PrescriptionItem
    extra = 0
    can_delete = False
    readonly_fields = ("medication", "quantity", "dosage", "frequency", "duration", "instructions", "unit_price", "total_price")


@admin.register(Prescription)
class PrescriptionAdmin(admin.ModelAdmin):
    list_display = ("id", "patient", "status", "total_amount", "prescription_date", "dispensed_date")
    list_filter = ("status",)
    search_fields = ("patient__full_name", "patient__medical_record_number")
    readonly_fields = (
        "status",
        "total_amount",
        "prescription_date",
        "dispensed_date",
        "dispensed_by",
        "created_at",
        "updated_at",
    )
    inlines = [PrescriptionItemInline]
    ordering = ("-prescription_date",)
