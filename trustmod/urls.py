from django.contrib import admin
from django.urls import path, include

from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView


urlpatterns = [
    path('admin/', admin.site.urls),

    path('api/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    path('api/', include([
        path('accounts/', include('apps.accounts.urls')),
        path('posts/', include('apps.posts.urls')),
        path('notifications/', include('apps.notifications.urls')),
        path('moderation/', include('apps.moderation.urls')),
    ])),
]
