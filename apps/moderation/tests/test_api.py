# apps/moderation/tests/test_api.py

from unittest import mock

from django.core.cache import cache
from django.test import override_settings
from rest_framework import status
from rest_framework.test import APITestCase

from apps.moderation.models import Appeal, Report
from apps.moderation.constants.targets import TARGET_CONTENT, TARGET_ACCOUNT
from apps.moderation.constants.states import (
    PUBLISHED, MODERATION, REMOVED, BLOCKED,
    DECISION_REMOVED, DECISION_MODERATION, ISSUER_SYSTEM,
    REPORT_DISMISSED,
)
from apps.moderation.services.decision_recorder import record_decision
from apps.moderation.tests.helpers import make_user, make_moderator, make_post


@mock.patch("apps.moderation.tasks.rescan_target.delay")
class ReportApiTests(APITestCase):

    def setUp(self):
        cache.clear()
        self.reporter = make_user(trust_score=80)
        self.post = make_post()
        self.url = "/api/moderation/reports/"

    def test_submit_report(self, _delay):
        self.client.force_authenticate(self.reporter)
        response = self.client.post(self.url, {
            "target_type": TARGET_CONTENT,
            "target_id": self.post.id,
            "reason": "spam",
            "description": "Link farm",
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data, {"accepted": True})
        self.assertEqual(Report.objects.get().description, "Link farm")

    def test_duplicate_is_conflict(self, _delay):
        self.client.force_authenticate(self.reporter)
        payload = {"target_type": TARGET_CONTENT, "target_id": self.post.id, "reason": "spam"}
        self.client.post(self.url, payload, format="json")
        response = self.client.post(self.url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["detail"].code, "duplicate_report")

    def test_invalid_reason_is_bad_request(self, _delay):
        self.client.force_authenticate(self.reporter)
        response = self.client.post(self.url, {
            "target_type": TARGET_CONTENT, "target_id": self.post.id, "reason": "underage",
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_missing_target_is_bad_request(self, _delay):
        self.client.force_authenticate(self.reporter)
        response = self.client.post(self.url, {
            "target_type": TARGET_ACCOUNT, "target_id": 999999, "reason": "spam",
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_anonymous_cannot_report(self, _delay):
        response = self.client.post(self.url, {
            "target_type": TARGET_CONTENT, "target_id": self.post.id, "reason": "spam",
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    @override_settings(MODERATION={"REPORT_RATE": "2/m"})
    def test_rate_limited(self, _delay):
        self.client.force_authenticate(self.reporter)
        codes = []
        for _ in range(3):
            post = make_post()
            response = self.client.post(self.url, {
                "target_type": TARGET_CONTENT, "target_id": post.id, "reason": "spam",
            }, format="json")
            codes.append(response.status_code)

        self.assertEqual(codes, [201, 201, 429])


class ReasonAndStatusApiTests(APITestCase):

    def test_reason_catalogue(self):
        response = self.client.get("/api/moderation/reasons/", {"target_type": TARGET_ACCOUNT})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        values = [r["value"] for r in response.data]
        self.assertIn("impersonation", values)

        response = self.client.get("/api/moderation/reasons/")
        self.assertEqual(set(response.data), {TARGET_CONTENT, TARGET_ACCOUNT})

        response = self.client.get("/api/moderation/reasons/", {"target_type": "comment"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_status_visibility(self):
        author = make_user()
        post = make_post(author=author)
        url = f"/api/moderation/status/{TARGET_CONTENT}/{post.id}/"

        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], PUBLISHED)

        record_decision(target_type=TARGET_CONTENT, target_id=post.id, decision=DECISION_MODERATION, issuer_kind=ISSUER_SYSTEM)

        self.assertEqual(self.client.get(url).status_code, status.HTTP_404_NOT_FOUND)

        self.client.force_authenticate(author)
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], MODERATION)
        self.assertRegex(response.data["reference_code"], r"^\d{6}$")

    def test_status_unknown_target(self):
        self.assertEqual(self.client.get("/api/moderation/status/content/999999/").status_code, 404)
        self.assertEqual(self.client.get("/api/moderation/status/comment/1/").status_code, 404)


class AppealApiTests(APITestCase):

    def setUp(self):
        self.moderator = make_moderator()
        self.author = make_user()
        self.post = make_post(author=self.author)
        self.decision = record_decision(
            target_type=TARGET_CONTENT,
            target_id=self.post.id,
            decision=DECISION_REMOVED,
            issuer=self.moderator,
        )

    def submit(self, code=None):
        return self.client.post("/api/moderation/appeals/", {
            "reference_code": code or self.decision.reference_code,
            "justification": "Please take another look.",
        }, format="json")

    def test_submit_and_duplicate(self):
        self.client.force_authenticate(self.author)
        response = self.submit()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data, {"queued": True})

        response = self.submit()
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_unknown_code(self):
        self.client.force_authenticate(self.author)
        # Generated codes never start with zero
        self.assertEqual(self.submit(code="000000").status_code, 404)

    def test_malformed_code(self):
        self.client.force_authenticate(self.author)
        self.assertEqual(self.submit(code="12ab").status_code, 400)

    def test_moderator_overturns(self):
        self.client.force_authenticate(self.author)
        self.submit()
        appeal = Appeal.objects.get()

        response = self.client.post(f"/api/moderation/appeals/{appeal.id}/resolve/", {"overturn": True}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.moderator)
        response = self.client.post(f"/api/moderation/appeals/{appeal.id}/resolve/", {"overturn": True, "note": "OK"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "overturned")
        self.post.refresh_from_db()
        self.assertEqual(self.post.status, PUBLISHED)

        response = self.client.get(f"/api/moderation/appeals/{appeal.id}/")
        self.assertEqual(response.data["decision"]["reference_code"], self.decision.reference_code)

    def test_resolve_missing_appeal(self):
        self.client.force_authenticate(self.moderator)
        response = self.client.post("/api/moderation/appeals/424242/resolve/", {"overturn": False}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class ConsoleApiTests(APITestCase):

    def setUp(self):
        self.moderator = make_moderator()
        self.user = make_user(trust_score=80)
        self.post = make_post()

    def test_console_requires_moderator(self):
        self.client.force_authenticate(self.user)
        self.assertEqual(self.client.get("/api/moderation/queue/").status_code, 403)
        self.assertEqual(self.client.post("/api/moderation/actions/", {}, format="json").status_code, 403)

    def test_queue_tabs(self):
        Report.objects.create(reporter=self.user, target_type=TARGET_CONTENT, target_id=self.post.id, reason="spam", weight=1.0)
        record_decision(target_type=TARGET_CONTENT, target_id=make_post().id, decision=DECISION_MODERATION, issuer_kind=ISSUER_SYSTEM)
        self.client.force_authenticate(self.moderator)

        response = self.client.get("/api/moderation/queue/", {"tab": "reports"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data[0]["target_id"], self.post.id)
        self.assertEqual(response.data[0]["weighted_sum"], 1.0)

        response = self.client.get("/api/moderation/queue/", {"tab": "moderation"})
        self.assertEqual(len(response.data), 1)

        response = self.client.get("/api/moderation/queue/", {"tab": "overview"})
        self.assertEqual(response.data["pending_reports"], 1)
        self.assertEqual(response.data["content_in_moderation"], 1)

        self.assertEqual(self.client.get("/api/moderation/queue/", {"tab": "nope"}).status_code, 400)

    def test_remove_action(self):
        self.client.force_authenticate(self.moderator)
        response = self.client.post("/api/moderation/actions/", {
            "action": "remove",
            "target_type": TARGET_CONTENT,
            "target_id": self.post.id,
            "reason": "Graphic violence",
        }, format="json")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["decision"], "removed")
        self.post.refresh_from_db()
        self.assertEqual(self.post.status, REMOVED)

    def test_illegal_action_is_conflict(self):
        record_decision(target_type=TARGET_CONTENT, target_id=self.post.id, decision=DECISION_REMOVED, issuer=self.moderator)
        self.client.force_authenticate(self.moderator)
        response = self.client.post("/api/moderation/actions/", {
            "action": "approve", "target_type": TARGET_CONTENT, "target_id": self.post.id,
        }, format="json")
        self.assertEqual(response.status_code, 409)

    def test_dismiss_report(self):
        report = Report.objects.create(reporter=self.user, target_type=TARGET_CONTENT, target_id=self.post.id, reason="spam", weight=1.0)
        self.client.force_authenticate(self.moderator)
        response = self.client.post("/api/moderation/actions/", {"action": "dismiss_report", "report_id": report.id}, format="json")

        self.assertEqual(response.status_code, 200)
        report.refresh_from_db()
        self.assertEqual(report.status, REPORT_DISMISSED)
        self.assertEqual(report.resolved_by, self.moderator)

    @override_settings(MODERATION={"STRIKE_CEILING": 1})
    def test_strike_endpoint(self):
        self.client.force_authenticate(self.moderator)
        response = self.client.post("/api/moderation/strikes/", {"account_id": self.user.id, "reason": "Scam DMs"}, format="json")

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data["blocked"])
        self.assertRegex(response.data["reference_code"], r"^\d{6}$")
        self.user.refresh_from_db()
        self.assertEqual(self.user.status, BLOCKED)

        response = self.client.get("/api/moderation/logs/", {"target_type": TARGET_ACCOUNT, "target_id": self.user.id})
        self.assertIn("strike_added", [row["action"] for row in response.data])
