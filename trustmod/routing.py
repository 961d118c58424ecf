# trustmod/routing.py
from apps.notifications.routing import websocket_urlpatterns as notifications_ws
from apps.moderation.routing import websocket_urlpatterns as moderation_ws

websocket_urlpatterns = [
    *notifications_ws,
    *moderation_ws,
]
