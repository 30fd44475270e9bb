from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsAdminOrReadOnly(BasePermission):
    """Anyone may read, only staff members may write"""

    def has_permission(self, request, view):
        # Allow read-only access (GET) to all users.
        if request.method in SAFE_METHODS:
            return True

        return bool(request.user and request.user.is_authenticated and request.user.is_staff)


class IsAdminUser(BasePermission):
    """Allow access to only users marked as staff"""

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_staff)
