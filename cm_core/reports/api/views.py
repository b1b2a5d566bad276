# cm_core/reports/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from cm_core.common.permissions import ReportPermission
from cm_core.reports.api.serializers import (
    DashboardStatsSerializer,
    ReportRequestSerializer,
    ReportResultSerializer,
)
from cm_core.reports.services import DashboardService, ReportService


class ReportViewSet(viewsets.ViewSet):
    permission_classes = [ReportPermission]
    serializer_class = ReportResultSerializer

    @extend_schema(
        tags=["Reports"],
        request=ReportRequestSerializer,
        responses={200: ReportResultSerializer},
    )
    def create(self, request):
        ser = ReportRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        result = ReportService.generate_report(**ser.validated_data)
        return Response(ReportResultSerializer(result).data, status=status.HTTP_200_OK)


class DashboardViewSet(viewsets.ViewSet):
    permission_classes = [ReportPermission]
    serializer_class = DashboardStatsSerializer

    @extend_schema(tags=["Reports"], responses={200: DashboardStatsSerializer})
    @action(detail=False, methods=["get"], url_path="stats")
    def stats(self, request):
        return Response(DashboardStatsSerializer(DashboardService.get_stats()).data, status=status.HTTP_200_OK)
