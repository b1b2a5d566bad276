# cm_core/iam/api/auth.py

from __future__ import annotations

from datetime import timedelta
from typing import Any

from django.conf import settings
from django.contrib.auth.models import update_last_login
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed, NotAuthenticated
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.tokens import RefreshToken

from cm_core.iam.api.serializers import (
    LoginRequestSerializer,
    LoginResponseSerializer,
    LogoutResponseSerializer,
    RefreshRequestSerializer,
    RefreshResponseSerializer,
    StaffSerializer,
)
from cm_core.iam.services import UserService


def _seconds(value: Any) -> int:
    """
    Convert a JWT lifetime setting into seconds.
    Supports timedelta OR int/float (already seconds).
    """
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    return int(value)


def _set_auth_cookies(response: Response, *, access: str, refresh: str | None) -> None:
    jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}

    access_name = jwt_cfg.get("AUTH_COOKIE", "cm_access")
    refresh_name = jwt_cfg.get("AUTH_COOKIE_REFRESH", "cm_refresh")

    access_lifetime = _seconds(jwt_cfg.get("ACCESS_TOKEN_LIFETIME", timedelta(minutes=10)))
    refresh_lifetime = _seconds(jwt_cfg.get("REFRESH_TOKEN_LIFETIME", timedelta(days=14)))

    secure = bool(jwt_cfg.get("AUTH_COOKIE_SECURE", False))
    samesite = jwt_cfg.get("AUTH_COOKIE_SAMESITE", "Lax")

    response.set_cookie(
        access_name,
        access,
        max_age=access_lifetime,
        httponly=True,
        secure=secure,
        samesite=samesite,
        path="/",
    )
    if refresh:
        response.set_cookie(
            refresh_name,
            refresh,
            max_age=refresh_lifetime,
            httponly=True,
            secure=secure,
            samesite=samesite,
            path="/",
        )


def _clear_auth_cookies(response: Response) -> None:
    jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}
    access_name = jwt_cfg.get("AUTH_COOKIE", "cm_access")
    refresh_name = jwt_cfg.get("AUTH_COOKIE_REFRESH", "cm_refresh")
    response.delete_cookie(access_name, path="/")
    response.delete_cookie(refresh_name, path="/")


class _TokenEndpoint(APIView):
    """
    Login and refresh skip authentication so a stale access cookie cannot block them.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def get_authenticate_header(self, request):
        # keeps credential failures at 401 instead of DRF's 403 fallback
        return 'Bearer realm="api"'


class LoginView(_TokenEndpoint):
    @extend_schema(
        request=LoginRequestSerializer,
        responses={200: LoginResponseSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        ser = LoginRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        profile = UserService.authenticate_user(
            email=ser.validated_data["email"],
            password=ser.validated_data["password"],
        )
        if profile is None:
            raise AuthenticationFailed("Invalid email or password.")

        refresh = RefreshToken.for_user(profile.user)
        access = str(refresh.access_token)

        if settings.SIMPLE_JWT.get("UPDATE_LAST_LOGIN", False):
            update_last_login(None, profile.user)

        res = Response(
            {
                "user": StaffSerializer(profile).data,
                "access": access,
                "refresh": str(refresh),
            },
            status=status.HTTP_200_OK,
        )
        _set_auth_cookies(res, access=access, refresh=str(refresh))
        return res


class RefreshView(_TokenEndpoint):
    @extend_schema(
        request=RefreshRequestSerializer,
        responses={200: RefreshResponseSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        body = RefreshRequestSerializer(data=request.data)
        body.is_valid(raise_exception=True)

        jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}
        refresh_cookie_name = jwt_cfg.get("AUTH_COOKIE_REFRESH", "cm_refresh")
        refresh = body.validated_data.get("refresh") or request.COOKIES.get(refresh_cookie_name)
        if not refresh:
            raise NotAuthenticated("Refresh token missing.")

        serializer = TokenRefreshSerializer(data={"refresh": refresh})
        serializer.is_valid(raise_exception=True)

        access = serializer.validated_data["access"]
        new_refresh = serializer.validated_data.get("refresh")

        res = Response({"detail": "refreshed", "access": access}, status=status.HTTP_200_OK)
        _set_auth_cookies(res, access=access, refresh=new_refresh)
        return res


class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=None,
        responses={200: LogoutResponseSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        res = Response({"detail": "logged out"}, status=status.HTTP_200_OK)
        _clear_auth_cookies(res)
        return res
