from django.contrib import admin

from .models import Notification


# --- Notification Admin ---------------------------------------------------
@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "user",
        "notification_type",
        "short_message",
        "object_type",
        "object_id",
        "created_at",
        "is_read",
    )
    list_filter = (
        "notification_type",
        "is_read",
        ("created_at", admin.DateFieldListFilter),
    )
    search_fields = (
        "user__username",
        "message",
    )
    readonly_fields = (
        "user",
        "actor",
        "notification_type",
        "message",
        "object_type",
        "object_id",
        "dedupe_key",
        "created_at",
    )

    def short_message(self, obj):
        return (obj.message or "")[:60]
    short_message.short_description = "Message"
