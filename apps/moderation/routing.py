# apps/moderation/routing.py
from django.urls import re_path

from apps.moderation.consumers import ModerationStatusConsumer

websocket_urlpatterns = [
    re_path(r"^ws/moderation/status/$", ModerationStatusConsumer.as_asgi()),
]
