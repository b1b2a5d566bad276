from django.contrib import admin

from cm_core.billing.models import Invoice, InvoiceItem


class InvoiceItemInline(admin.TabularInline):
    model = InvoiceItem
    extra = 0
    can_delete = False
    readonly_fields = ("item_type", "item_id", "description", "quantity", "unit_price", "total_price")


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = (
        "invoice_number",
        "patient",
        "final_amount",
        "payment_status",
        "payment_method",
        "payment_date",
        "created_at",
    )
    list_filter = ("payment_status", "payment_method")
    search_fields = ("invoice_number", "patient__full_name", "patient__medical_record_number")
    readonly_fields = (
        "invoice_number",
        "total_amount",
        "discount_amount",
        "tax_amount",
        "final_amount",
        "payment_status",
        "payment_method",
        "payment_date",
        "cashier",
        "created_at",
        "updated_at",
    )
    inlines = [InvoiceItemInline]
    ordering = ("-created_at",)
