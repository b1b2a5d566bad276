# cm_core/radiology/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from cm_core.common.api.params import int_or_none
from cm_core.common.permissions import RadiologyPermission
from cm_core.radiology.api.serializers import (
    RadiologyExamCreateSerializer,
    RadiologyExamSerializer,
    RadiologyExamUpdateSerializer,
)
from cm_core.radiology.models import RadiologyExam
from cm_core.radiology.selectors import radiology_exams_filtered
from cm_core.radiology.services import RadiologyService


class RadiologyExamViewSet(viewsets.ViewSet):
    permission_classes = [RadiologyPermission]

    serializer_class = RadiologyExamSerializer
    queryset = RadiologyExam.objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(
        tags=["Radiology"],
        responses={200: RadiologyExamSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="patient", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="status", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        qs = radiology_exams_filtered(
            patient_id=int_or_none(request.query_params.get("patient"), "patient"),
            status=request.query_params.get("status") or None,
        )
        return Response(RadiologyExamSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Radiology"],
        request=RadiologyExamCreateSerializer,
        responses={201: RadiologyExamSerializer},
    )
    def create(self, request):
        ser = RadiologyExamCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        exam = RadiologyService.create_radiology_exam(ordered_by_id=request.user.id, **ser.validated_data)
        return Response(RadiologyExamSerializer(exam).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        tags=["Radiology"],
        request=RadiologyExamUpdateSerializer,
        responses={200: RadiologyExamSerializer},
    )
    def partial_update(self, request, pk=None):
        ser = RadiologyExamUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        exam = RadiologyService.update_radiology_exam(exam_id=pk, **ser.validated_data)
        return Response(RadiologyExamSerializer(exam).data, status=status.HTTP_200_OK)
