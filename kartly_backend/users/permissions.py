# users/permissions.py

from rest_framework.permissions import SAFE_METHODS, BasePermission

from users.models.user import ROLE_ADMIN


# ---------------- BASE ROLE PERMISSION ----------------
class HasRole(BasePermission):
    """
    Base permission to check user role safely.
    """

    allowed_roles = set()

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.role in self.allowed_roles)


# ---------------- ROLE PERMISSIONS ----------------
class IsAdmin(HasRole):
    allowed_roles = {ROLE_ADMIN}


class IsAdminOrReadOnly(IsAdmin):
    """
    Anyone may read; only admins may write (catalog management).
    """

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return super().has_permission(request, view)
