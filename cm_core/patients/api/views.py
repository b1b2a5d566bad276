# cm_core/patients/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from cm_core.common.permissions import PatientPermission
from cm_core.patients.api.serializers import PatientCreateSerializer, PatientSerializer
from cm_core.patients.models import Patient
from cm_core.patients.selectors import get_patient, search_patients
from cm_core.patients.services import PatientService


class PatientViewSet(viewsets.ViewSet):
    permission_classes = [PatientPermission]

    serializer_class = PatientSerializer
    queryset = Patient.objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(
        tags=["Patients"],
        responses={200: PatientSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="q",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Search by name, MRN, phone or email.",
            ),
        ],
    )
    def list(self, request):
        q = request.query_params.get("q", "").strip()
        qs = search_patients(q=q)
        return Response(PatientSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Patients"], responses={200: PatientSerializer})
    def retrieve(self, request, pk=None):
        patient = get_patient(patient_id=pk)
        return Response(PatientSerializer(patient).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Patients"],
        request=PatientCreateSerializer,
        responses={201: PatientSerializer},
    )
    def create(self, request):
        ser = PatientCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        patient = PatientService.create_patient(**ser.validated_data)
        return Response(PatientSerializer(patient).data, status=status.HTTP_201_CREATED)
