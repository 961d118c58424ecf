# apps/notifications/models.py

from django.db import models
from django.conf import settings
from django.utils import timezone

from .constants import NOTIFICATION_TYPES, NOTIFICATION_TYPE_SYSTEM


# -----------------------------------------------------------------------------
class Notification(models.Model):
    id = models.BigAutoField(primary_key=True)

    # Recipient
    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name='notifications', on_delete=models.CASCADE)

    # Actor (who did the action); null for system messages
    actor = models.ForeignKey(settings.AUTH_USER_MODEL, related_name='actor_notifications', on_delete=models.SET_NULL, null=True, blank=True)

    # Core fields
    message = models.TextField()
    notification_type = models.CharField(max_length=50, choices=NOTIFICATION_TYPES, default=NOTIFICATION_TYPE_SYSTEM)
    created_at = models.DateTimeField(default=timezone.now)
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)

    # What the notification is about ("content" / "account" + id)
    object_type = models.CharField(max_length=32, null=True, blank=True)
    object_id = models.PositiveBigIntegerField(null=True, blank=True)

    dedupe_key = models.CharField(max_length=200, unique=True, null=True, blank=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'is_read', 'created_at'], name='notif_user_read_created_idx'),
        ]

    def mark_as_read(self):
        if not self.is_read:
            self.is_read = True
            self.read_at = timezone.now()
            self.save(update_fields=['is_read', 'read_at'])

    def __str__(self):
        return f"Notification for {self.user_id}: {self.message[:40]}"
