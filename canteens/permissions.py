from rest_framework import permissions
from rest_framework.permissions import BasePermission


class IsStaffOrReadOnly(BasePermission):
    """
    Anyone may browse canteens and menus; only staff may create or modify them.
    """
    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True

        return bool(request.user and request.user.is_authenticated and request.user.is_staff)

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return True

        return bool(request.user and request.user.is_staff)
