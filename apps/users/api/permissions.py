"""Role-based permission classes for the back-office API."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


def can_manage_content(user) -> bool:
    if not user or not user.is_authenticated:
        return False
    if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
        return True
    return hasattr(user, "can_manage_content") and user.can_manage_content()


class IsAdminOrManager(permissions.BasePermission):
    """
    Only ADMIN and MANAGER roles (and Django staff) may access.

    Used for lead lists, status changes and settings updates.
    """

    def has_permission(self, request, view) -> bool:  # type: ignore
        return can_manage_content(request.user)


class IsAdminOrManagerOrReadOnly(permissions.BasePermission):
    """
    Anyone may read; writes require the ADMIN or MANAGER role.

    Reference data (cities, branches, attribute schema, pages) is public
    but only editable from the back office.
    """

    def has_permission(self, request, view) -> bool:  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        return can_manage_content(request.user)


class IsStaffMemberOrReadOnly(permissions.BasePermission):
    """Any authenticated back-office user may write (listings)."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj) -> bool:  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        user = request.user
        if can_manage_content(user):
            return True
        # Consultants edit only what they created or what is assigned to them
        if getattr(obj, "created_by_id", None) == user.id:
            return True
        consultant = getattr(obj, "consultant", None)
        return consultant is not None and consultant.user_id == user.id
