# cm_core/common/views.py
from django.utils import timezone
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView


class HealthCheckView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(tags=["System"], responses={200: OpenApiTypes.OBJECT})
    def get(self, request):
        return Response({"status": "ok", "timestamp": timezone.now().isoformat()})
