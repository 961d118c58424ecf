# apps/notifications/services/services.py

import logging
from typing import Optional, Dict, Any

from django.db import transaction, IntegrityError
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from apps.notifications.models import Notification
from apps.notifications.constants import NOTIFICATION_TYPE_SYSTEM, user_group_name

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------------
# Deliver over WebSocket
# -------------------------------------------------------------------------
def _deliver_notification(notif: Notification, extra_payload: Optional[Dict[str, Any]] = None):
    try:
        layer = get_channel_layer()
        if not layer:
            logger.warning("[Notif] No channel_layer; skipping WS")
            return

        payload = {
            "id": notif.id,
            "type": notif.notification_type,
            "message": notif.message,
            "object_type": notif.object_type,
            "object_id": notif.object_id,
            "created_at": notif.created_at.isoformat(),
            "is_read": notif.is_read,
        }
        if extra_payload:
            payload["extra"] = extra_payload

        async_to_sync(layer.group_send)(
            user_group_name(notif.user_id),
            {
                "type": "dispatch_event",
                "app": "notifications",
                "event": "notification",
                "data": payload,
            },
        )
    except Exception as e:
        logger.warning(
            "[Notif] WS delivery failed for user %s: %s",
            notif.user_id,
            e,
            exc_info=True,
        )


# -------------------------------------------------------------------------
# Create + dispatch (fire-and-forget)
# -------------------------------------------------------------------------
def create_and_dispatch_notification(
    *,
    recipient,
    message: str,
    notif_type: str = NOTIFICATION_TYPE_SYSTEM,
    actor=None,
    object_type: Optional[str] = None,
    object_id: Optional[int] = None,
    dedupe_key: Optional[str] = None,
    extra_payload: Optional[Dict[str, Any]] = None,
):
    """
    Persist a notification row and push it to the recipient's WS group.
    Failures are logged, never raised: callers are on the moderation path.
    Inside an atomic block the work is deferred to on_commit.
    """
    if recipient is None:
        return None

    def _persist():
        try:
            if dedupe_key:
                notif, created = Notification.objects.get_or_create(
                    dedupe_key=dedupe_key,
                    defaults=dict(
                        user=recipient,
                        actor=actor,
                        message=message,
                        notification_type=notif_type,
                        object_type=object_type,
                        object_id=object_id,
                    ),
                )
                if not created:
                    logger.info("[Notif] Dedup hit → notif_id=%s dedupe_key=%s", notif.id, dedupe_key)
                    return notif
            else:
                notif = Notification.objects.create(
                    user=recipient,
                    actor=actor,
                    message=message,
                    notification_type=notif_type,
                    object_type=object_type,
                    object_id=object_id,
                )
            _deliver_notification(notif, extra_payload)
            return notif

        except IntegrityError:
            logger.info("[Notif] Dedup race → dedupe_key=%s", dedupe_key)
            return None
        except Exception as e:
            logger.error("[Notif] persist failed user=%s type=%s: %s", getattr(recipient, "id", None), notif_type, e, exc_info=True)
            return None

    if transaction.get_connection().in_atomic_block:
        transaction.on_commit(_persist)
        return None
    return _persist()
