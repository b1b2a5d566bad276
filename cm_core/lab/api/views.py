# cm_core/lab/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from cm_core.common.api.params import int_or_none
from cm_core.common.permissions import LabPermission
from cm_core.lab.api.serializers import LabTestCreateSerializer, LabTestSerializer, LabTestUpdateSerializer
from cm_core.lab.models import LabTest
from cm_core.lab.selectors import lab_tests_filtered
from cm_core.lab.services import LabTestService


class LabTestViewSet(viewsets.ViewSet):
    """
    Lab tests:
    - list (filter by patient / status)
    - order a test
    - PATCH status, technician, results
    """
    permission_classes = [LabPermission]

    serializer_class = LabTestSerializer
    queryset = LabTest.objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(
        tags=["Lab"],
        responses={200: LabTestSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="patient", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="status", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        qs = lab_tests_filtered(
            patient_id=int_or_none(request.query_params.get("patient"), "patient"),
            status=request.query_params.get("status") or None,
        )
        return Response(LabTestSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Lab"],
        request=LabTestCreateSerializer,
        responses={201: LabTestSerializer},
    )
    def create(self, request):
        ser = LabTestCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        lab_test = LabTestService.create_lab_test(ordered_by_id=request.user.id, **ser.validated_data)
        return Response(LabTestSerializer(lab_test).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        tags=["Lab"],
        request=LabTestUpdateSerializer,
        responses={200: LabTestSerializer},
    )
    def partial_update(self, request, pk=None):
        ser = LabTestUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        lab_test = LabTestService.update_lab_test(lab_test_id=pk, **ser.validated_data)
        return Response(LabTestSerializer(lab_test).data, status=status.HTTP_200_OK)
