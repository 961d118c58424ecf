# apps/moderation/consumers.py

import logging

from channels.generic.websocket import AsyncJsonWebsocketConsumer

from apps.moderation.constants.targets import TARGET_MODEL_MAP
from apps.moderation.realtime import target_group_name

logger = logging.getLogger(__name__)


class ModerationStatusConsumer(AsyncJsonWebsocketConsumer):
    """
    Live status updates for targets the client is rendering.

    Client messages:
      - {type: "ping"}
      - {type: "status.subscribe", target_type: str, target_id: int}
      - {type: "status.unsubscribe", target_type: str, target_id: int}
    """

    async def connect(self):
        self._groups = set()
        await self.accept()

    async def disconnect(self, close_code):
        for g in list(self._groups):
            await self.channel_layer.group_discard(g, self.channel_name)
        self._groups.clear()

    def _group_from(self, content):
        target_type = content.get("target_type")
        target_id = content.get("target_id")
        if target_type not in TARGET_MODEL_MAP or not isinstance(target_id, int):
            return None
        return target_group_name(target_type, target_id)

    async def receive_json(self, content, **kwargs):
        t = content.get("type")

        if t == "ping":
            await self.send_json({"type": "pong"})
            return

        if t == "status.subscribe":
            g = self._group_from(content)
            if g is None:
                await self.send_json({"type": "error", "detail": "invalid target"})
                return
            await self.channel_layer.group_add(g, self.channel_name)
            self._groups.add(g)
            await self.send_json({"type": "subscribed", "group": g})
            return

        if t == "status.unsubscribe":
            g = self._group_from(content)
            if g and g in self._groups:
                await self.channel_layer.group_discard(g, self.channel_name)
                self._groups.discard(g)
                await self.send_json({"type": "unsubscribed", "group": g})
            return

    async def dispatch_event(self, event):
        await self.send_json({
            "type": "event",
            "app": event.get("app"),
            "event": event.get("event"),
            "data": event.get("data", {}),
        })
