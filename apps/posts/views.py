# apps/posts/views.py

import logging

from rest_framework import mixins, viewsets
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticatedOrReadOnly

from apps.moderation.constants.targets import TARGET_CONTENT
from apps.moderation.services.lifecycle import can_view
from apps.moderation.services.status import refresh_target
from apps.posts.models import Post
from apps.posts.serializers import PostSerializer
from apps.posts.services.feed_access import get_visible_posts, restore_overdue_posts

logger = logging.getLogger(__name__)


# Post ViewSet -----------------------------------------------------------------------------
class PostViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    - Anyone can read published posts.
    - Authors can always read their own posts (to see why they were hidden).
    - Status is never writable here; it moves only through moderation decisions.
    """
    serializer_class = PostSerializer
    permission_classes = [IsAuthenticatedOrReadOnly]
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        return get_visible_posts(viewer=self.request.user)

    def list(self, request, *args, **kwargs):
        restore_overdue_posts()
        return super().list(request, *args, **kwargs)

    def get_object(self):
        post = Post.objects.select_related("author", "status_decision").filter(pk=self.kwargs.get("pk")).first()
        if post is None:
            raise NotFound("Not found.")

        # Lazy SLA check before deciding visibility
        post = refresh_target(TARGET_CONTENT, post)
        if not can_view(TARGET_CONTENT, post, self.request.user):
            raise NotFound("Not found.")
        return post

    def perform_create(self, serializer):
        serializer.save(author=self.request.user)
