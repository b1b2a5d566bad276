# cm_core/iam/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from cm_core.iam.models import StaffProfile


def staff_filtered(
    *,
    role: str | None = None,
    is_active: bool | None = None,
) -> QuerySet[StaffProfile]:
    qs = StaffProfile.objects.select_related("user").order_by("-created_at")

    if role:
        qs = qs.filter(role=role)

    if is_active is not None:
        qs = qs.filter(is_active=is_active)

    return qs


def display_name(user) -> str | None:
    """
    Name shown next to a staff reference (doctor, technician, cashier...).
    """
    if user is None:
        return None
    profile = getattr(user, "staff_profile", None)
    if profile is not None:
        return profile.full_name
    return user.get_full_name() or user.get_username()
