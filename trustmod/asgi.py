# trustmod/asgi.py
import os
import django

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'trustmod.settings')
django.setup()

from django.core.asgi import get_asgi_application
from channels.auth import AuthMiddlewareStack
from channels.routing import ProtocolTypeRouter, URLRouter
from trustmod.routing import websocket_urlpatterns


# ASGI HTTP
django_asgi_app = get_asgi_application()

# Main application
application = ProtocolTypeRouter({
    "http": django_asgi_app,
    "websocket": AuthMiddlewareStack(
        URLRouter(websocket_urlpatterns)
    ),
})
