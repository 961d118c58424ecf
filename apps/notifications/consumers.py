# apps/notifications/consumers.py

import logging
from channels.generic.websocket import AsyncJsonWebsocketConsumer

from apps.notifications.constants import user_group_name

logger = logging.getLogger(__name__)


class NotificationConsumer(AsyncJsonWebsocketConsumer):

    async def connect(self):
        """
        Private WebSocket for the user's notification stream.
        """
        user = self.scope.get("user")

        if not user or user.is_anonymous:
            logger.warning("[WS-Notif] Anonymous user attempted to connect")
            await self.close()
            return

        self.user = user
        self.group_name = user_group_name(user.id)

        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        await self.send_json({"type": "connected", "status": "ok"})

    async def disconnect(self, close_code):
        if hasattr(self, "group_name"):
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def receive_json(self, content, **kwargs):
        if content.get("type") == "ping":
            await self.send_json({"type": "pong"})

    # ------------------------------------------------------------------
    # Server → Client Delivery
    # ------------------------------------------------------------------
    async def dispatch_event(self, event):
        """Handler for group_send(type="dispatch_event")."""
        await self.send_json({
            "type": "event",
            "app": event.get("app"),
            "event": event.get("event"),
            "data": event.get("data", {}),
        })
