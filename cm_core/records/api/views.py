# cm_core/records/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from cm_core.common.api.params import int_or_none
from cm_core.common.permissions import MedicalRecordPermission
from cm_core.records.api.serializers import MedicalRecordCreateSerializer, MedicalRecordSerializer
from cm_core.records.models import MedicalRecord
from cm_core.records.selectors import medical_records
from cm_core.records.services import MedicalRecordService


class MedicalRecordViewSet(viewsets.ViewSet):
    permission_classes = [MedicalRecordPermission]

    serializer_class = MedicalRecordSerializer
    queryset = MedicalRecord.objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(
        tags=["Medical Records"],
        responses={200: MedicalRecordSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="patient",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Only records of this patient.",
            ),
        ],
    )
    def list(self, request):
        patient_id = int_or_none(request.query_params.get("patient"), "patient")
        qs = medical_records(patient_id=patient_id)
        return Response(MedicalRecordSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Medical Records"],
        request=MedicalRecordCreateSerializer,
        responses={201: MedicalRecordSerializer},
    )
    def create(self, request):
        ser = MedicalRecordCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        data = dict(ser.validated_data)
        data.setdefault("doctor_id", request.user.id)

        record = MedicalRecordService.create_medical_record(**data)
        return Response(MedicalRecordSerializer(record).data, status=status.HTTP_201_CREATED)
