# apps/notifications/serializers.py

from rest_framework import serializers

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    actor = serializers.ReadOnlyField(source="actor.username")

    class Meta:
        model = Notification
        fields = [
            "id",
            "notification_type",
            "message",
            "actor",
            "object_type",
            "object_id",
            "is_read",
            "read_at",
            "created_at",
        ]
        read_only_fields = fields
