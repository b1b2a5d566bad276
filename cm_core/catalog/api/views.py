# cm_core/catalog/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from cm_core.catalog.api.serializers import (
    ClinicServiceCreateSerializer,
    ClinicServiceSerializer,
    ServiceActiveSerializer,
)
from cm_core.catalog.models import ClinicService
from cm_core.catalog.selectors import services_filtered
from cm_core.catalog.services import CatalogService
from cm_core.common.api.params import bool_or_none
from cm_core.common.permissions import ServiceCatalogPermission


class ClinicServiceViewSet(viewsets.ViewSet):
    permission_classes = [ServiceCatalogPermission]

    serializer_class = ClinicServiceSerializer
    queryset = ClinicService.objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(
        tags=["Services"],
        responses={200: ClinicServiceSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="category", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="active", type=OpenApiTypes.BOOL, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        qs = services_filtered(
            category=request.query_params.get("category") or None,
            is_active=bool_or_none(request.query_params.get("active"), "active"),
        )
        return Response(ClinicServiceSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Services"],
        request=ClinicServiceCreateSerializer,
        responses={201: ClinicServiceSerializer},
    )
    def create(self, request):
        ser = ClinicServiceCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        svc = CatalogService.create_service(**ser.validated_data)
        return Response(ClinicServiceSerializer(svc).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        tags=["Services"],
        request=ServiceActiveSerializer,
        responses={200: ClinicServiceSerializer},
    )
    @action(detail=True, methods=["post"], url_path="active")
    def set_active(self, request, pk=None):
        ser = ServiceActiveSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        svc = CatalogService.set_active(service_id=pk, is_active=ser.validated_data["is_active"])
        return Response(ClinicServiceSerializer(svc).data, status=status.HTTP_200_OK)
