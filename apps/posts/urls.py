# apps/posts/urls.py
from rest_framework.routers import SimpleRouter

from apps.posts.views import PostViewSet


app_name = 'posts'
router = SimpleRouter()

# /api/posts/ and /api/posts/<id>/
router.register(r'', PostViewSet, basename='post')

urlpatterns = router.urls
