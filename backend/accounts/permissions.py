from rest_framework.permissions import BasePermission

from .models import User


class HasRole(BasePermission):
    """
    Allow access only to authenticated users holding one of `allowed_roles`.
    Superusers automatically pass.
    """

    allowed_roles: set[str] = set()
    message = "You do not have permission to perform this action."

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        if request.user.is_superuser:
            return True
        return request.user.role in self.allowed_roles


class IsAdminRole(HasRole):
    allowed_roles = {User.ADMIN}
    message = "Admin access required."
