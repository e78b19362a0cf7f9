"""
Role checks for the patient, doctor and admin facing endpoints.

Roles live on ``User.role``; Django superusers count as admins so the
createsuperuser account can use the admin API without a role edit.
"""
from rest_framework.permissions import BasePermission

ADMIN_ROLES = {"admin"}


def is_admin(user) -> bool:
    return bool(user and user.is_authenticated and (getattr(user, "role", None) in ADMIN_ROLES or user.is_superuser))


def is_doctor(user) -> bool:
    return bool(user and user.is_authenticated and getattr(user, "role", None) == "doctor")


class IsAdminRole(BasePermission):
    """Allow access only to users with an administrative role."""
    message = 'Administrator access required'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return is_admin(getattr(request, "user", None))


class IsDoctorRole(BasePermission):
    """Allow access only to users with the doctor role."""
    message = 'Doctor access required'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return is_doctor(getattr(request, "user", None))
