# common/permissions.py

from rest_framework import permissions

from apps.accounts.constants import ELEVATED_ROLES


def is_moderator(user) -> bool:
    """Staff, admins and moderators may act on the moderation console."""
    if not user or not getattr(user, "is_authenticated", False):
        return False
    if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
        return True
    return getattr(user, "role", None) in ELEVATED_ROLES


# Is Moderator ----------------------------------------------------------------------------------------
class IsModerator(permissions.BasePermission):
    """Moderation console: staff / admin / moderator roles only."""
    def has_permission(self, request, view):
        return is_moderator(request.user)


# Is Owner or Moderator -------------------------------------------------------------------------------
class IsOwnerOrModerator(permissions.BasePermission):
    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        if is_moderator(request.user):
            return True
        owner_id = getattr(obj, "author_id", None) or getattr(obj, "user_id", None)
        return owner_id == request.user.id
