from rest_framework import permissions

from apps.accounts.models import UserRole


class HasChurch(permissions.BasePermission):
    """
    Permission: User must be attached to an active church.

    Every tenant-scoped view reads ``request.user.church_id``; a user
    without one has nothing to see.
    """

    message = 'Your account is not associated with an active church.'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        church = getattr(user, 'church', None)
        return church is not None and church.is_active


class IsChurchAdmin(permissions.BasePermission):
    """
    Permission: User must be a church admin or the account owner.
    """

    message = 'Only church administrators can perform this action.'

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user and user.is_authenticated
            and user.role in [UserRole.ACCOUNT_OWNER, UserRole.ADMIN]
        )
