# apps/posts/tests/test_posts.py

from datetime import timedelta

from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APITestCase

from apps.accounts.constants import ROLE_MODERATOR
from apps.moderation.constants.targets import TARGET_CONTENT, TARGET_ACCOUNT
from apps.moderation.constants.states import (
    PUBLISHED, MODERATION,
    DECISION_MODERATION, DECISION_REMOVED, DECISION_BLOCKED, ISSUER_SYSTEM,
)
from apps.moderation.services.decision_recorder import record_decision
from apps.posts.models import Post
from apps.posts.services.feed_access import get_visible_posts

CustomUser = get_user_model()


class PostVisibilityTests(APITestCase):

    def setUp(self):
        self.author = CustomUser.objects.create_user(email="author@example.com", password="pass-1234")
        self.reader = CustomUser.objects.create_user(email="reader@example.com", password="pass-1234")
        self.moderator = CustomUser.objects.create_user(email="mod@example.com", password="pass-1234", role=ROLE_MODERATOR)

        self.visible = Post.objects.create(author=self.author, body="visible")
        self.hidden = Post.objects.create(author=self.author, body="under review")
        record_decision(target_type=TARGET_CONTENT, target_id=self.hidden.id, decision=DECISION_MODERATION, issuer_kind=ISSUER_SYSTEM)

    def test_feed_rules(self):
        self.assertEqual(list(get_visible_posts(viewer=None)), [self.visible])
        self.assertEqual(list(get_visible_posts(viewer=self.reader)), [self.visible])
        self.assertEqual(set(get_visible_posts(viewer=self.author)), {self.visible, self.hidden})
        self.assertEqual(set(get_visible_posts(viewer=self.moderator)), {self.visible, self.hidden})

    def test_blocked_author_disappears_from_feed(self):
        record_decision(target_type=TARGET_ACCOUNT, target_id=self.author.id, decision=DECISION_BLOCKED, issuer=self.moderator)
        self.assertEqual(list(get_visible_posts(viewer=self.reader)), [])
        self.assertEqual(set(get_visible_posts(viewer=self.author)), {self.visible, self.hidden})

    def test_detail_hidden_from_observers(self):
        url = f"/api/posts/{self.hidden.id}/"
        self.assertEqual(self.client.get(url).status_code, 404)

        self.client.force_authenticate(self.reader)
        self.assertEqual(self.client.get(url).status_code, 404)

        self.client.force_authenticate(self.author)
        response = self.client.get(url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["status"], MODERATION)
        self.assertRegex(response.data["reference_code"], r"^\d{6}$")
        self.assertIn("status_reason", response.data)

    def test_public_detail_hides_review_details(self):
        response = self.client.get(f"/api/posts/{self.visible.id}/")
        self.assertEqual(response.status_code, 200)
        self.assertNotIn("status_reason", response.data)
        self.assertIsNone(response.data["reference_code"])

    def test_overdue_post_restored_on_read(self):
        Post.objects.filter(pk=self.hidden.pk).update(moderation_due_at=timezone.now() - timedelta(hours=1))

        response = self.client.get(f"/api/posts/{self.hidden.id}/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["status"], PUBLISHED)

    def test_list_restores_overdue_posts(self):
        Post.objects.filter(pk=self.hidden.pk).update(moderation_due_at=timezone.now() - timedelta(hours=1))
        response = self.client.get("/api/posts/")
        self.assertEqual(len(response.data), 2)

    def test_create_sets_author_and_ignores_status(self):
        self.client.force_authenticate(self.reader)
        response = self.client.post("/api/posts/", {"body": "new post", "status": "removed"}, format="json")

        self.assertEqual(response.status_code, 201)
        post = Post.objects.get(pk=response.data["id"])
        self.assertEqual(post.author, self.reader)
        self.assertEqual(post.status, PUBLISHED)

    def test_anonymous_cannot_create(self):
        response = self.client.post("/api/posts/", {"body": "nope"}, format="json")
        self.assertEqual(response.status_code, 401)

    def test_non_numeric_id_is_not_found(self):
        self.assertEqual(self.client.get("/api/posts/abc/").status_code, 404)

    def test_removed_post_stays_visible_to_author(self):
        record_decision(target_type=TARGET_CONTENT, target_id=self.visible.id, decision=DECISION_REMOVED, issuer=self.moderator)
        self.client.force_authenticate(self.author)
        self.assertEqual(self.client.get(f"/api/posts/{self.visible.id}/").status_code, 200)
        self.client.force_authenticate(self.reader)
        self.assertEqual(self.client.get(f"/api/posts/{self.visible.id}/").status_code, 404)
