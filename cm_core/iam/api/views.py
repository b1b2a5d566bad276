# cm_core/iam/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from cm_core.common.api.params import bool_or_none
from cm_core.common.permissions import UserPermission
from cm_core.iam.api.serializers import StaffSerializer, UserCreateSerializer
from cm_core.iam.models import StaffProfile
from cm_core.iam.selectors import staff_filtered
from cm_core.iam.services import UserService


class UserViewSet(viewsets.ViewSet):
    permission_classes = [UserPermission]

    serializer_class = StaffSerializer
    queryset = StaffProfile.objects.none()

    @extend_schema(
        tags=["IAM"],
        responses={200: StaffSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="role", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="is_active", type=OpenApiTypes.BOOL, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        qs = staff_filtered(
            role=request.query_params.get("role") or None,
            is_active=bool_or_none(request.query_params.get("is_active"), "is_active"),
        )
        return Response(StaffSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["IAM"],
        request=UserCreateSerializer,
        responses={201: StaffSerializer},
    )
    def create(self, request):
        ser = UserCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        profile = UserService.create_user(**ser.validated_data)
        return Response(StaffSerializer(profile).data, status=status.HTTP_201_CREATED)
