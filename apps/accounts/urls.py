# apps/accounts/urls.py

from rest_framework.routers import DefaultRouter

from apps.accounts.views import AccountModerationViewSet

router = DefaultRouter()

# Self-service lifecycle: /api/accounts/status/, /freeze/, /unfreeze/, ...
router.register(r"", AccountModerationViewSet, basename="account")

urlpatterns = router.urls
