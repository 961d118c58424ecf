# apps/posts/serializers.py

from rest_framework import serializers

from common.permissions import is_moderator
from apps.posts.models import Post


class PostSerializer(serializers.ModelSerializer):
    author = serializers.ReadOnlyField(source="author.username")
    reference_code = serializers.SerializerMethodField()

    class Meta:
        model = Post
        fields = [
            "id",
            "author",
            "body",
            "image_url",
            "status",
            "status_reason",
            "moderation_due_at",
            "reference_code",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "author",
            "status",
            "status_reason",
            "moderation_due_at",
            "reference_code",
            "created_at",
            "updated_at",
        ]

    def _can_see_details(self, obj) -> bool:
        request = self.context.get("request")
        user = getattr(request, "user", None)
        if not user or not user.is_authenticated:
            return False
        return obj.author_id == user.id or is_moderator(user)

    def get_reference_code(self, obj):
        # The author needs the code to appeal; observers never see it
        if not obj.status_decision_id or not self._can_see_details(obj):
            return None
        return obj.status_decision.reference_code

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if not self._can_see_details(instance):
            data.pop("status_reason", None)
            data.pop("moderation_due_at", None)
        return data
