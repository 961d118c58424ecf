# apps/moderation/tests/test_consumers.py

from channels.layers import get_channel_layer
from channels.testing import WebsocketCommunicator
from django.test import SimpleTestCase

from apps.moderation.consumers import ModerationStatusConsumer
from apps.moderation.realtime import target_group_name


class ModerationStatusConsumerTests(SimpleTestCase):

    async def test_subscribe_and_receive_status_change(self):
        communicator = WebsocketCommunicator(ModerationStatusConsumer.as_asgi(), "/ws/moderation/status/")
        connected, _ = await communicator.connect()
        self.assertTrue(connected)

        await communicator.send_json_to({"type": "status.subscribe", "target_type": "content", "target_id": 5})
        ack = await communicator.receive_json_from()
        self.assertEqual(ack, {"type": "subscribed", "group": target_group_name("content", 5)})

        await get_channel_layer().group_send(
            target_group_name("content", 5),
            {
                "type": "dispatch_event",
                "app": "moderation",
                "event": "status_changed",
                "data": {"target_type": "content", "target_id": 5, "status": "moderation"},
            },
        )
        event = await communicator.receive_json_from()
        self.assertEqual(event["event"], "status_changed")
        self.assertEqual(event["data"]["status"], "moderation")

        await communicator.disconnect()

    async def test_rejects_unknown_target(self):
        communicator = WebsocketCommunicator(ModerationStatusConsumer.as_asgi(), "/ws/moderation/status/")
        await communicator.connect()

        await communicator.send_json_to({"type": "status.subscribe", "target_type": "comment", "target_id": 1})
        self.assertEqual((await communicator.receive_json_from())["type"], "error")

        await communicator.send_json_to({"type": "ping"})
        self.assertEqual(await communicator.receive_json_from(), {"type": "pong"})

        await communicator.disconnect()
