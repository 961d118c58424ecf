# apps/moderation/realtime.py

import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)


def target_group_name(target_type: str, target_id) -> str:
    return f"moderation.target.{target_type}.{target_id}"


def broadcast_status_change(*, target_type: str, target_id: int, status: str, decision: str = None):
    """
    Push a status change to everyone watching the target. Carries the public
    part of the status only; reasons and codes go to the owner by notification.
    """
    try:
        layer = get_channel_layer()
        if not layer:
            logger.warning("[Moderation][WS] No channel_layer; skipping broadcast")
            return

        async_to_sync(layer.group_send)(
            target_group_name(target_type, target_id),
            {
                "type": "dispatch_event",
                "app": "moderation",
                "event": "status_changed",
                "data": {
                    "target_type": target_type,
                    "target_id": target_id,
                    "status": status,
                    "decision": decision,
                },
            },
        )
    except Exception as e:
        logger.warning(
            "[Moderation][WS] broadcast failed target=%s:%s: %s",
            target_type,
            target_id,
            e,
            exc_info=True,
        )
