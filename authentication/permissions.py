from rest_framework import permissions


class IsAdmin(permissions.BasePermission):
    """
    Permission to only allow requests carrying a verified admin token
    """
    message = 'Unauthorized'

    def has_permission(self, request, view):
        return request.auth is not None
