# cm_core/iam/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from cm_core.iam.models import StaffProfile, StaffRole


class StaffSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(source="user_id", read_only=True)
    email = serializers.EmailField(source="user.email", read_only=True)

    class Meta:
        model = StaffProfile
        fields = [
            "id",
            "email",
            "full_name",
            "role",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class UserCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True, trim_whitespace=False)
    full_name = serializers.CharField(max_length=255)
    role = serializers.ChoiceField(choices=StaffRole.choices)


class LoginRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)


class LoginResponseSerializer(serializers.Serializer):
    user = StaffSerializer()
    access = serializers.CharField()
    refresh = serializers.CharField()


class RefreshRequestSerializer(serializers.Serializer):
    # falls back to the refresh cookie when omitted
    refresh = serializers.CharField(required=False)


class RefreshResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()
    access = serializers.CharField()


class LogoutResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()
