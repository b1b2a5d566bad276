# cm_core/common/permissions.py

from __future__ import annotations

from typing import Set

from rest_framework.permissions import BasePermission, SAFE_METHODS

# Staff roles (values of cm_core.iam.models.StaffRole)
ROLE_ADMIN = "admin"
ROLE_DOCTOR = "doctor"
ROLE_NURSE = "nurse"
ROLE_CASHIER = "cashier"
ROLE_PHARMACIST = "pharmacist"
ROLE_LAB = "lab_technician"
ROLE_RADIOLOGIST = "radiologist"

ALL_ROLES = {
    ROLE_ADMIN,
    ROLE_DOCTOR,
    ROLE_NURSE,
    ROLE_CASHIER,
    ROLE_PHARMACIST,
    ROLE_LAB,
    ROLE_RADIOLOGIST,
}
CLINICAL_ROLES = {ROLE_DOCTOR, ROLE_NURSE}


def _user_roles(user) -> Set[str]:
    """
    Resolve roles from:
    1) superuser flag (treated as admin)
    2) the active StaffProfile attached to the user

    Users without a staff profile get no roles at all.
    """
    roles: Set[str] = set()

    if not user or not getattr(user, "is_authenticated", False):
        return roles

    if getattr(user, "is_superuser", False):
        roles.add(ROLE_ADMIN)
        return roles

    profile = getattr(user, "staff_profile", None)
    if profile is not None and profile.is_active and profile.role:
        roles.add(str(profile.role))

    return roles


class BaseRolePermission(BasePermission):
    """
    Base permission class for role-based access control.

    - Requires authentication.
    - ADMIN bypass.
    - Uses allowed_roles_per_action for strict RBAC.
    - If action is unknown and request is SAFE, fall back to list/retrieve.
    """
    message = "You do not have permission to perform this action."

    # Override in subclasses: dict of action -> set of allowed roles
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": {ROLE_ADMIN},
        "update": {ROLE_ADMIN},
        "partial_update": {ROLE_ADMIN},
        "destroy": {ROLE_ADMIN},
    }

    def _infer_action(self, request, view) -> str | None:
        action = getattr(view, "action", None)
        if action:
            return action

        kwargs = getattr(view, "kwargs", {}) or {}
        is_detail = "pk" in kwargs or "id" in kwargs

        method = request.method.upper()
        if method in ("GET", "HEAD", "OPTIONS"):
            return "retrieve" if is_detail else "list"
        if method == "POST":
            return "create"
        if method == "PUT":
            return "update"
        if method == "PATCH":
            return "partial_update"
        if method == "DELETE":
            return "destroy"
        return None

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not getattr(user, "is_authenticated", False):
            return False

        roles = _user_roles(user)

        if ROLE_ADMIN in roles:
            return True

        action = self._infer_action(request, view)
        allowed = self.allowed_roles_per_action.get(action)

        if allowed is None and request.method in SAFE_METHODS:
            kwargs = getattr(view, "kwargs", {}) or {}
            is_detail = "pk" in kwargs or "id" in kwargs
            read_action = "retrieve" if is_detail else "list"
            allowed = self.allowed_roles_per_action.get(read_action)

        if allowed is not None:
            return bool(roles & allowed)

        # Unknown action => deny
        return False

    def has_object_permission(self, request, view, obj) -> bool:
        return self.has_permission(request, view)


# Specific permission classes for each module

class UserPermission(BaseRolePermission):
    """Staff accounts are managed by admins only"""
    allowed_roles_per_action = {
        "list": set(),
        "retrieve": set(),
        "create": set(),
    }


class PatientPermission(BaseRolePermission):
    """Permissions for Patient registration"""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": {ROLE_DOCTOR, ROLE_NURSE, ROLE_CASHIER},
    }


class QueuePermission(BaseRolePermission):
    """Permissions for the daily visit queue"""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "create": {ROLE_DOCTOR, ROLE_NURSE, ROLE_CASHIER},
        "set_status": {ROLE_DOCTOR, ROLE_NURSE},
    }


class MedicalRecordPermission(BaseRolePermission):
    """Permissions for medical records"""
    allowed_roles_per_action = {
        "list": CLINICAL_ROLES,
        "create": {ROLE_DOCTOR},
    }


class LabPermission(BaseRolePermission):
    """Permissions for Lab tests"""
    allowed_roles_per_action = {
        "list": CLINICAL_ROLES | {ROLE_LAB},
        "create": CLINICAL_ROLES,
        "partial_update": {ROLE_DOCTOR, ROLE_LAB},
    }


class RadiologyPermission(BaseRolePermission):
    """Permissions for Radiology exams"""
    allowed_roles_per_action = {
        "list": CLINICAL_ROLES | {ROLE_RADIOLOGIST},
        "create": CLINICAL_ROLES,
        "partial_update": {ROLE_DOCTOR, ROLE_RADIOLOGIST},
    }


class InventoryPermission(BaseRolePermission):
    """Permissions for the medication inventory"""
    allowed_roles_per_action = {
        "list": CLINICAL_ROLES | {ROLE_PHARMACIST, ROLE_CASHIER},
        "create": {ROLE_PHARMACIST},
        "stock": {ROLE_PHARMACIST},
    }


class PrescriptionPermission(BaseRolePermission):
    """Permissions for prescriptions"""
    allowed_roles_per_action = {
        "list": CLINICAL_ROLES | {ROLE_PHARMACIST, ROLE_CASHIER},
        "create": {ROLE_DOCTOR},
        "dispense": {ROLE_PHARMACIST},
        "cancel": {ROLE_DOCTOR, ROLE_PHARMACIST},
    }


class ServiceCatalogPermission(BaseRolePermission):
    """Permissions for the billable service catalog"""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "create": set(),
        "set_active": set(),
    }


class BillingPermission(BaseRolePermission):
    """Permissions for invoices and payments"""
    allowed_roles_per_action = {
        "list": CLINICAL_ROLES | {ROLE_CASHIER},
        "create": {ROLE_CASHIER},
        "pay": {ROLE_CASHIER},
    }


class ReportPermission(BaseRolePermission):
    """Reports are admin-only, the dashboard is visible to all staff"""
    allowed_roles_per_action = {
        "create": set(),
        "stats": ALL_ROLES,
    }
