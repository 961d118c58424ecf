from rest_framework.routers import DefaultRouter
from .views import NotificationViewSet

router = DefaultRouter()

# Notifications list + actions
router.register(r'notifications', NotificationViewSet, basename='notifications')

urlpatterns = router.urls
