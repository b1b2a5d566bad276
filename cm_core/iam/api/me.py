# cm_core/iam/api/me.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from cm_core.common.permissions import ROLE_ADMIN
from cm_core.iam.api.serializers import StaffSerializer


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: StaffSerializer}, tags=["IAM"])
    def get(self, request):
        """
        Returns the caller's staff record.
        A superuser created outside the app (createsuperuser) has no profile
        and is reported as an admin.
        """
        user = request.user
        profile = getattr(user, "staff_profile", None)
        if profile is not None:
            return Response(StaffSerializer(profile).data, status=status.HTTP_200_OK)

        return Response(
            {
                "id": user.id,
                "email": user.email,
                "full_name": user.get_full_name() or user.get_username(),
                "role": ROLE_ADMIN if user.is_superuser else None,
                "is_active": user.is_active,
            },
            status=status.HTTP_200_OK,
        )
