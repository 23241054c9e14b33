"""Permission classes shared by the admin API."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


def _has_role(user, role: str) -> bool:
    if not user or not user.is_authenticated:
        return False
    if getattr(user, "is_superuser", False):
        return True
    return hasattr(user, "has_role") and user.has_role(role)


class IsStaffMember(permissions.BasePermission):
    """
    Any dashboard user may read; writes need the admin role.

    Viewers get read-only access to bookings, clients and statistics.
    """

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not _has_role(user, "viewer"):
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return _has_role(user, "admin")


class IsAdminRole(permissions.BasePermission):
    """Admin or superadmin only, for every method."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        return _has_role(request.user, "admin")


class IsSuperAdmin(permissions.BasePermission):
    """Only superadmins manage other staff accounts."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        return _has_role(request.user, "superadmin")


def is_staff_user(user) -> bool:
    """True for any dashboard user; used to show inactive catalogue entries."""
    return _has_role(user, "viewer")
