# cm_core/iam/services.py
from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from cm_core.iam.models import StaffProfile, StaffRole

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MSG = "A user with this email already exists."


class UserService:
    @staticmethod
    @transaction.atomic
    def create_user(
        *,
        email: str,
        password: str,
        full_name: str,
        role: str,
    ) -> StaffProfile:
        User = get_user_model()

        if User.objects.filter(username=email).exists():
            raise ValidationError({"email": DUPLICATE_EMAIL_MSG})

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    username=email,
                    email=email,
                    password=password,
                    is_active=True,
                )
        except IntegrityError:
            # Lost a race against a concurrent signup with the same email.
            raise ValidationError({"email": DUPLICATE_EMAIL_MSG})

        if role == StaffRole.ADMIN:
            user.is_staff = True
            user.save(update_fields=["is_staff"])

        profile = StaffProfile.objects.create(
            user=user,
            full_name=full_name,
            role=role,
            is_active=True,
        )
        logger.info("Staff user created id=%s role=%s", user.id, role)
        return profile

    @staticmethod
    def authenticate_user(*, email: str, password: str) -> StaffProfile | None:
        """
        Returns the staff profile when the credentials are good, else None.

        Email comparison is exact; no case folding is applied.
        Unknown email, inactive account and wrong password all look the same
        to the caller.
        """
        User = get_user_model()
        user = User.objects.filter(username=email).select_related("staff_profile").first()
        if user is None or not user.is_active:
            return None

        profile = getattr(user, "staff_profile", None)
        if profile is None or not profile.is_active:
            return None

        if not user.check_password(password):
            logger.info("Rejected login for user id=%s", user.id)
            return None

        return profile
