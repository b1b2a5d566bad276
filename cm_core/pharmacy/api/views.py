# cm_core/pharmacy/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from cm_core.common.api.params import bool_or_none, int_or_none
from cm_core.common.permissions import InventoryPermission, PrescriptionPermission
from cm_core.pharmacy.api.serializers import (
    MedicationCreateSerializer,
    MedicationSerializer,
    PrescriptionCreateSerializer,
    PrescriptionSerializer,
    StockUpdateSerializer,
)
from cm_core.pharmacy.models import Medication, Prescription
from cm_core.pharmacy.selectors import medications_filtered, prescriptions_filtered
from cm_core.pharmacy.services import MedicationService, PrescriptionService


def _prescription_out(rx: Prescription) -> dict:
    # reload with items and staff names for the response
    return PrescriptionSerializer(prescriptions_filtered().get(pk=rx.pk)).data


class MedicationViewSet(viewsets.ViewSet):
    """
    Medication inventory:
    - list (optionally only low stock)
    - create
    - stock add / subtract
    """
    permission_classes = [InventoryPermission]

    serializer_class = MedicationSerializer
    queryset = Medication.objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(
        tags=["Pharmacy"],
        responses={200: MedicationSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="low_stock",
                type=OpenApiTypes.BOOL,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Only medications at or below their minimum stock level.",
            ),
        ],
    )
    def list(self, request):
        qs = medications_filtered(low_stock=bool_or_none(request.query_params.get("low_stock"), "low_stock"))
        return Response(MedicationSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Pharmacy"],
        request=MedicationCreateSerializer,
        responses={201: MedicationSerializer},
    )
    def create(self, request):
        ser = MedicationCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        med = MedicationService.create_medication(**ser.validated_data)
        return Response(MedicationSerializer(med).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        tags=["Pharmacy"],
        request=StockUpdateSerializer,
        responses={200: MedicationSerializer},
    )
    @action(detail=True, methods=["post"], url_path="stock")
    def stock(self, request, pk=None):
        ser = StockUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        med = MedicationService.update_stock(medication_id=pk, **ser.validated_data)
        return Response(MedicationSerializer(med).data, status=status.HTTP_200_OK)


class PrescriptionViewSet(viewsets.ViewSet):
    """
    Prescriptions:
    - list (filter by patient / status), items nested
    - create (prices snapshotted)
    - dispense / cancel
    """
    permission_classes = [PrescriptionPermission]

    serializer_class = PrescriptionSerializer
    queryset = Prescription.objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(
        tags=["Pharmacy"],
        responses={200: PrescriptionSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="patient", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="status", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        qs = prescriptions_filtered(
            patient_id=int_or_none(request.query_params.get("patient"), "patient"),
            status=request.query_params.get("status") or None,
        )
        return Response(PrescriptionSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Pharmacy"],
        request=PrescriptionCreateSerializer,
        responses={201: PrescriptionSerializer},
    )
    def create(self, request):
        ser = PrescriptionCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        data = dict(ser.validated_data)
        data.setdefault("prescribed_by_id", request.user.id)

        rx = PrescriptionService.create_prescription(**data)
        return Response(_prescription_out(rx), status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Pharmacy"], request=None, responses={200: PrescriptionSerializer})
    @action(detail=True, methods=["post"], url_path="dispense")
    def dispense(self, request, pk=None):
        rx = PrescriptionService.dispense(prescription_id=pk, dispensed_by_id=request.user.id)
        return Response(_prescription_out(rx), status=status.HTTP_200_OK)

    @extend_schema(tags=["Pharmacy"], request=None, responses={200: PrescriptionSerializer})
    @action(detail=True, methods=["post"], url_path="cancel")
    def cancel(self, request, pk=None):
        rx = PrescriptionService.cancel(prescription_id=pk)
        return Response(_prescription_out(rx), status=status.HTTP_200_OK)
