# cm_core/common/lookups.py
from __future__ import annotations

from django.contrib.auth import get_user_model
from django.db.models import Model, QuerySet
from django.utils.text import capfirst
from rest_framework.exceptions import NotFound


def require(model: type[Model], pk, *, label: str | None = None, queryset: QuerySet | None = None):
    """
    Fetch a referenced row before writing something that points at it.

    Raises NotFound("<Label> with id <pk> not found") instead of letting the
    insert fail later on a foreign key constraint.
    """
    qs = queryset if queryset is not None else model._default_manager.all()
    obj = qs.filter(pk=pk).first()
    if obj is None:
        name = label or capfirst(model._meta.verbose_name)
        raise NotFound(f"{name} with id {pk} not found")
    return obj


def require_user(user_id, *, label: str = "User"):
    return require(get_user_model(), user_id, label=label)
