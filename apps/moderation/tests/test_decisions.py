# apps/moderation/tests/test_decisions.py

from unittest import mock

from django.contrib.auth.models import AnonymousUser
from django.test import TestCase

from apps.moderation.models import Decision, EscalationMark, ModerationLog, Report
from apps.moderation.constants.targets import TARGET_CONTENT, TARGET_ACCOUNT
from apps.moderation.constants.states import (
    PUBLISHED, MODERATION, REMOVED,
    ACTIVE, FROZEN, BLOCKED,
    DECISION_APPROVED, DECISION_REMOVED, DECISION_MODERATION,
    DECISION_FROZEN, DECISION_BLOCKED, DECISION_RESTORED,
    ISSUER_MODERATOR, ISSUER_SYSTEM,
    ACTION_RESCAN, REPORT_PENDING, REPORT_RESOLVED,
)
from apps.moderation.exceptions import InvalidTransition, ReferenceCodeExhausted
from apps.moderation.services.decision_recorder import record_decision
from apps.moderation.services.lifecycle import VIA_APPEAL, can_view, assert_transition
from apps.moderation.tests.helpers import make_user, make_moderator, make_post


CODE_GENERATOR = "apps.moderation.services.decision_recorder.generate_reference_code"


class DecisionRecorderTests(TestCase):

    def setUp(self):
        self.moderator = make_moderator()
        self.post = make_post()

    def decide(self, decision, **kwargs):
        kwargs.setdefault("issuer", self.moderator)
        return record_decision(
            target_type=TARGET_CONTENT,
            target_id=self.post.id,
            decision=decision,
            **kwargs,
        )

    def test_decision_and_status_written_together(self):
        decision = self.decide(DECISION_REMOVED, reason="Spam links")

        self.assertRegex(decision.reference_code, r"^[1-9]\d{5}$")
        self.assertEqual(decision.issuer_kind, ISSUER_MODERATOR)

        self.post.refresh_from_db()
        self.assertEqual(self.post.status, REMOVED)
        self.assertEqual(self.post.status_reason, "Spam links")
        self.assertEqual(self.post.status_prior, PUBLISHED)
        self.assertEqual(self.post.status_decision_id, decision.id)
        self.assertIsNone(self.post.moderation_due_at)

        log = ModerationLog.objects.get(action="decision_removed")
        self.assertEqual(log.metadata["reference_code"], decision.reference_code)

    def test_moderation_sets_review_deadline(self):
        self.decide(DECISION_MODERATION, issuer=None, issuer_kind=ISSUER_SYSTEM)
        self.post.refresh_from_db()
        self.assertEqual(self.post.status, MODERATION)
        delta = self.post.moderation_due_at - self.post.status_entered_at
        self.assertEqual(delta.total_seconds(), 48 * 3600)

    def test_repeated_moderation_keeps_original_deadline(self):
        self.decide(DECISION_MODERATION, issuer=None, issuer_kind=ISSUER_SYSTEM)
        self.post.refresh_from_db()
        first_due = self.post.moderation_due_at

        self.decide("flagged", issuer=None, issuer_kind=ISSUER_SYSTEM)
        self.post.refresh_from_db()
        self.assertEqual(self.post.moderation_due_at, first_due)

    def test_decisions_are_immutable(self):
        decision = self.decide(DECISION_APPROVED)
        decision.reason = "edited"
        with self.assertRaises(ValueError):
            decision.save()

    def test_reference_code_collision_is_retried(self):
        existing = self.decide(DECISION_APPROVED)

        with mock.patch(CODE_GENERATOR, side_effect=[existing.reference_code, existing.reference_code, "222222"]):
            decision = self.decide(DECISION_REMOVED)

        self.assertEqual(decision.reference_code, "222222")
        self.assertEqual(Decision.objects.count(), 2)

    def test_reference_code_exhaustion_rolls_back_status(self):
        existing = self.decide(DECISION_APPROVED)

        with mock.patch(CODE_GENERATOR, return_value=existing.reference_code):
            with self.assertRaises(ReferenceCodeExhausted):
                self.decide(DECISION_REMOVED)

        self.post.refresh_from_db()
        self.assertEqual(self.post.status, PUBLISHED)
        self.assertEqual(Decision.objects.count(), 1)

    def test_precondition_false_skips_write(self):
        result = self.decide(DECISION_RESTORED, precondition=lambda target: target.status == MODERATION)
        self.assertIsNone(result)
        self.assertFalse(Decision.objects.exists())

    def test_moderator_ruling_closes_report_wave(self):
        reporter = make_user(trust_score=80)
        Report.objects.create(reporter=reporter, target_type=TARGET_CONTENT, target_id=self.post.id, reason="spam", weight=1.0)
        EscalationMark.objects.create(target_type=TARGET_CONTENT, target_id=self.post.id, action=ACTION_RESCAN)

        self.decide(DECISION_REMOVED)

        report = Report.objects.get()
        self.assertEqual(report.status, REPORT_RESOLVED)
        self.assertEqual(report.resolved_by, self.moderator)
        self.assertFalse(EscalationMark.objects.filter(is_open=True).exists())

    def test_system_decision_leaves_wave_open(self):
        reporter = make_user(trust_score=80)
        Report.objects.create(reporter=reporter, target_type=TARGET_CONTENT, target_id=self.post.id, reason="spam", weight=1.0)

        self.decide(DECISION_MODERATION, issuer=None, issuer_kind=ISSUER_SYSTEM)

        self.assertEqual(Report.objects.get().status, REPORT_PENDING)


class LifecycleTests(TestCase):

    def setUp(self):
        self.moderator = make_moderator()

    def test_removed_content_needs_an_appeal(self):
        post = make_post()
        record_decision(target_type=TARGET_CONTENT, target_id=post.id, decision=DECISION_REMOVED, issuer=self.moderator)

        with self.assertRaises(InvalidTransition):
            record_decision(target_type=TARGET_CONTENT, target_id=post.id, decision=DECISION_APPROVED, issuer=self.moderator)

        record_decision(
            target_type=TARGET_CONTENT,
            target_id=post.id,
            decision=DECISION_RESTORED,
            issuer=self.moderator,
            via=VIA_APPEAL,
        )
        post.refresh_from_db()
        self.assertEqual(post.status, PUBLISHED)
        self.assertEqual(post.status_prior, REMOVED)

    def test_account_decisions(self):
        account = make_user()
        record_decision(target_type=TARGET_ACCOUNT, target_id=account.id, decision=DECISION_FROZEN, issuer=self.moderator)
        account.refresh_from_db()
        self.assertEqual(account.status, FROZEN)

        # Frozen accounts can only go back to active or be deleted
        with self.assertRaises(InvalidTransition):
            record_decision(target_type=TARGET_ACCOUNT, target_id=account.id, decision=DECISION_BLOCKED, issuer=self.moderator)

    def test_blocked_account_needs_appeal_or_reverification(self):
        self.assertRaises(InvalidTransition, assert_transition, TARGET_ACCOUNT, BLOCKED, ACTIVE)
        assert_transition(TARGET_ACCOUNT, BLOCKED, ACTIVE, via=VIA_APPEAL)

    def test_decision_must_fit_target_type(self):
        account = make_user()
        with self.assertRaises(InvalidTransition):
            record_decision(target_type=TARGET_CONTENT, target_id=make_post(author=account).id, decision=DECISION_FROZEN, issuer=self.moderator)

    def test_visibility(self):
        author = make_user()
        stranger = make_user()
        post = make_post(author=author)

        self.assertTrue(can_view(TARGET_CONTENT, post, AnonymousUser()))

        record_decision(target_type=TARGET_CONTENT, target_id=post.id, decision=DECISION_MODERATION, issuer_kind=ISSUER_SYSTEM)
        post.refresh_from_db()

        self.assertFalse(can_view(TARGET_CONTENT, post, AnonymousUser()))
        self.assertFalse(can_view(TARGET_CONTENT, post, stranger))
        self.assertTrue(can_view(TARGET_CONTENT, post, author))
        self.assertTrue(can_view(TARGET_CONTENT, post, self.moderator))
