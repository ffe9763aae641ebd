"""
Role based permission classes.
"""
from rest_framework.permissions import BasePermission

ADMIN_ROLES = {"admin"}


class IsAdminRole(BasePermission):
    """Allow access only to users with an administrative role."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) in ADMIN_ROLES)


class IsAdminRoleToDelete(IsAdminRole):
    """Any authenticated user may read or write; only administrators delete."""
    message = "only administrators can delete records"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        if request.method != "DELETE":
            return True
        return super().has_permission(request, view)
