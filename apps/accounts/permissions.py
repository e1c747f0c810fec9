from rest_framework.permissions import BasePermission, SAFE_METHODS
from .models import Role


class HasOrganization(BasePermission):
    message = "Organization not found on user profile"

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            # Let IsAuthenticated answer with a 401
            return True
        return user.org_id is not None


class IsAdmin(BasePermission):
    message = "Forbidden"

    def has_permission(self, request, view):
        return (
            request.user.is_authenticated and
            request.user.role == Role.ADMIN
        )


class IsAdminOrReadOnly(BasePermission):
    message = "Forbidden"

    def has_permission(self, request, view):
        if not request.user.is_authenticated:
            return False
        if request.method in SAFE_METHODS:
            return True
        return request.user.role == Role.ADMIN
