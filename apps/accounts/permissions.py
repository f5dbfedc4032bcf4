from rest_framework import permissions

from .models import Role


def _role_of(user):
    profile = getattr(user, 'profile', None)
    return profile.role if profile else None


class HasProfile(permissions.BasePermission):
    """
    Permission: User must have a rider or partner profile.

    Accounts created outside registration (e.g. superusers) have none.
    """

    message = 'Account has no rider or partner profile'

    def has_permission(self, request, view):
        return _role_of(request.user) is not None


class IsRider(permissions.BasePermission):
    """
    Permission: User must have a rider profile.
    """

    message = 'Only riders can perform this action'

    def has_permission(self, request, view):
        return _role_of(request.user) == Role.RIDER


class IsPartner(permissions.BasePermission):
    """
    Permission: User must have a partner profile.
    """

    message = 'Only partners can perform this action'

    def has_permission(self, request, view):
        return _role_of(request.user) == Role.PARTNER
