# apps/notifications/constants.py

# Flat, stable types (good for analytics & prefs)
NOTIFICATION_TYPE_SYSTEM = "system"
NOTIFICATION_TYPE_MODERATION_QUEUE = "moderation_queue"

NOTIFICATION_TYPES = [
    (NOTIFICATION_TYPE_SYSTEM, "System"),
    (NOTIFICATION_TYPE_MODERATION_QUEUE, "Moderation Queue"),
]

# Private per-user Channels group
def user_group_name(user_id) -> str:
    return f"notif_user_{user_id}"
