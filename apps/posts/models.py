# apps/posts/models.py

from django.db import models
from django.conf import settings

from common.models import StatusRecordMixin
from apps.moderation.constants.states import CONTENT_STATUS_CHOICES, PUBLISHED


# POST Model ------------------------------------------------------------------------------
class Post(StatusRecordMixin):
    id = models.BigAutoField(primary_key=True)

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="posts",
        verbose_name="Author",
    )
    body = models.TextField(verbose_name="Body")
    image_url = models.URLField(max_length=500, null=True, blank=True, verbose_name="Image URL")

    # Visible lifecycle (only the moderation decision recorder writes this)
    status = models.CharField(
        max_length=20,
        choices=CONTENT_STATUS_CHOICES,
        default=PUBLISHED,
        db_index=True,
        verbose_name="Status",
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name="Created At")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="Last Updated")

    class Meta:
        verbose_name = "Post"
        verbose_name_plural = "Posts"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["author", "status"], name="post_author_status_idx"),
        ]

    def __str__(self):
        return f"Post #{self.id} by {self.author_id} ({self.status})"
