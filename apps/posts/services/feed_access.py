# apps/posts/services/feed_access.py
# ======================================================
# Moderation-aware feed access
# ======================================================

from typing import Optional

from django.db.models import Q, QuerySet
from django.utils import timezone

from common.permissions import is_moderator
from apps.moderation.constants.targets import TARGET_CONTENT
from apps.moderation.constants.states import PUBLISHED, ACTIVE, MODERATION
from apps.moderation.services.status import restore_if_overdue
from apps.posts.models import Post

# Lazy restorations per feed read (the hourly sweep handles the rest)
LAZY_RESTORE_LIMIT = 50


def restore_overdue_posts(limit: int = LAZY_RESTORE_LIMIT) -> int:
    overdue_ids = list(
        Post.objects
        .filter(status=MODERATION, moderation_due_at__lte=timezone.now())
        .order_by("moderation_due_at")
        .values_list("id", flat=True)[:limit]
    )
    restored = 0
    for post_id in overdue_ids:
        if restore_if_overdue(TARGET_CONTENT, post_id):
            restored += 1
    return restored


def get_visible_posts(*, viewer=None, base_queryset: Optional[QuerySet] = None) -> QuerySet:
    """
    Rules:
    - Everyone sees published posts of active accounts
    - Authors always see their own posts (whatever the status)
    - Moderators see everything

    Returns a QuerySet (NOT evaluated).
    """
    qs = base_queryset if base_queryset is not None else Post.objects.all()
    qs = qs.select_related("author", "status_decision")

    if is_moderator(viewer):
        return qs

    public = Q(status=PUBLISHED, author__status=ACTIVE)

    if viewer is not None and getattr(viewer, "is_authenticated", False):
        return qs.filter(public | Q(author=viewer))

    return qs.filter(public)
