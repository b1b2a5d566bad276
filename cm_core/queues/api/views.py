# cm_core/queues/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from cm_core.common.api.params import date_or_none
from cm_core.common.permissions import QueuePermission
from cm_core.queues.api.serializers import QueueCreateSerializer, QueueEntrySerializer, QueueStatusSerializer
from cm_core.queues.models import QueueEntry
from cm_core.queues.selectors import queue_for_day
from cm_core.queues.services import QueueService


class QueueViewSet(viewsets.ViewSet):
    """
    Daily visit queue:
    - list one day's queue (today by default)
    - create entry (next number of that day)
    - set status
    """
    permission_classes = [QueuePermission]

    serializer_class = QueueEntrySerializer
    queryset = QueueEntry.objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(
        tags=["Queue"],
        responses={200: QueueEntrySerializer(many=True)},
        parameters=[
            OpenApiParameter(name="date", type=OpenApiTypes.DATE, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="status", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        day = date_or_none(request.query_params.get("date"), "date")
        qs = queue_for_day(day=day, status=request.query_params.get("status") or None)
        return Response(QueueEntrySerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Queue"],
        request=QueueCreateSerializer,
        responses={201: QueueEntrySerializer},
    )
    def create(self, request):
        ser = QueueCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        entry = QueueService.create_queue(**ser.validated_data)
        return Response(QueueEntrySerializer(entry).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        tags=["Queue"],
        request=QueueStatusSerializer,
        responses={200: QueueEntrySerializer},
    )
    @action(detail=True, methods=["post"], url_path="status")
    def set_status(self, request, pk=None):
        ser = QueueStatusSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        entry = QueueService.update_queue_status(queue_id=pk, status=ser.validated_data["status"])
        return Response(QueueEntrySerializer(entry).data, status=status.HTTP_200_OK)
