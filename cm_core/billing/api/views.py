# cm_core/billing/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from cm_core.billing.api.serializers import InvoiceCreateSerializer, InvoiceSerializer, PaymentSerializer
from cm_core.billing.models import Invoice
from cm_core.billing.selectors import invoices_filtered
from cm_core.billing.services import InvoiceService, PaymentService
from cm_core.common.api.params import int_or_none
from cm_core.common.permissions import BillingPermission


def _invoice_out(invoice: Invoice) -> dict:
    return InvoiceSerializer(invoices_filtered().get(pk=invoice.pk)).data


class InvoiceViewSet(viewsets.ViewSet):
    """
    Invoices:
    - list (filter by patient / payment status), items nested
    - create with items (amounts computed server-side)
    - pay
    """
    permission_classes = [BillingPermission]

    serializer_class = InvoiceSerializer
    queryset = Invoice.objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(
        tags=["Billing"],
        responses={200: InvoiceSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="patient", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(
                name="status",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Payment status.",
            ),
        ],
    )
    def list(self, request):
        qs = invoices_filtered(
            patient_id=int_or_none(request.query_params.get("patient"), "patient"),
            status=request.query_params.get("status") or None,
        )
        return Response(InvoiceSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Billing"],
        request=InvoiceCreateSerializer,
        responses={201: InvoiceSerializer},
    )
    def create(self, request):
        ser = InvoiceCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        invoice = InvoiceService.create_invoice(**ser.validated_data)
        return Response(_invoice_out(invoice), status=status.HTTP_201_CREATED)

    @extend_schema(
        tags=["Billing"],
        request=PaymentSerializer,
        responses={200: InvoiceSerializer},
    )
    @action(detail=True, methods=["post"], url_path="pay")
    def pay(self, request, pk=None):
        ser = PaymentSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        invoice = PaymentService.process_payment(
            invoice_id=pk,
            payment_method=ser.validated_data["payment_method"],
            cashier_id=request.user.id,
        )
        return Response(_invoice_out(invoice), status=status.HTTP_200_OK)
