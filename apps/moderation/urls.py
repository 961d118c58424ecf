# apps/moderation/urls.py
from django.urls import path
from rest_framework.routers import SimpleRouter

from apps.moderation.views import (
    ReportViewSet,
    AppealViewSet,
    ReasonCatalogueView,
    TargetStatusView,
    ModerationQueueView,
    ModeratorActionView,
    StrikeView,
    ModerationLogView,
)

router = SimpleRouter()
router.register(r'reports', ReportViewSet, basename='moderation-report')
router.register(r'appeals', AppealViewSet, basename='moderation-appeal')

urlpatterns = [
    path('reasons/', ReasonCatalogueView.as_view(), name='moderation-reasons'),
    path('status/<str:target_type>/<int:target_id>/', TargetStatusView.as_view(), name='moderation-status'),

    # Moderator console
    path('queue/', ModerationQueueView.as_view(), name='moderation-queue'),
    path('actions/', ModeratorActionView.as_view(), name='moderation-actions'),
    path('strikes/', StrikeView.as_view(), name='moderation-strikes'),
    path('logs/', ModerationLogView.as_view(), name='moderation-logs'),
]

urlpatterns += router.urls
