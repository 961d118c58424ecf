# apps/moderation/tests/test_reports.py

from unittest import mock

from django.test import TestCase

from apps.accounts.services.self_service import freeze_account, unfreeze_account
from apps.moderation.models import Report, EscalationMark
from apps.moderation.constants.targets import TARGET_CONTENT, TARGET_ACCOUNT
from apps.moderation.constants.states import (
    ACTION_NONE,
    ACTION_RESCAN,
    ACTION_PRIORITY_QUEUE,
    MODERATION,
    PUBLISHED,
    DECISION_APPROVED,
    DECISION_MODERATION,
    DECISION_RESTORED,
    ISSUER_SYSTEM,
    REPORT_PENDING,
    REPORT_RESOLVED,
)
from apps.moderation.exceptions import DuplicateReport, InvalidTarget
from apps.moderation.models import Decision
from apps.moderation.services.aggregator import weighted_aggregate, aggregate_snapshot
from apps.moderation.services.decision_recorder import record_decision
from apps.moderation.services.escalation import evaluate, resolve_action_for
from apps.moderation.services.reports import submit_report
from apps.moderation.services.weights import resolve_report_weight
from apps.moderation.tests.helpers import make_user, make_moderator, make_post


RESCAN_DELAY = "apps.moderation.tasks.rescan_target.delay"


class ReportWeightTests(TestCase):

    def test_step_function(self):
        cases = [
            (100, 1.0), (70, 1.0), (69, 0.7), (50, 0.7), (49, 0.4),
            (30, 0.4), (29, 0.2), (10, 0.2), (9, 0.0), (0, 0.0),
        ]
        for score, expected in cases:
            self.assertEqual(resolve_report_weight(score), expected, msg=f"trust={score}")

    def test_missing_or_garbage_score_is_zero(self):
        self.assertEqual(resolve_report_weight(None), 0.0)
        self.assertEqual(resolve_report_weight("not-a-number"), 0.0)

    def test_threshold_mapping(self):
        self.assertEqual(resolve_action_for(2.99), ACTION_NONE)
        self.assertEqual(resolve_action_for(3.0), ACTION_RESCAN)
        self.assertEqual(resolve_action_for(9.99), ACTION_RESCAN)
        self.assertEqual(resolve_action_for(10.0), ACTION_PRIORITY_QUEUE)


@mock.patch(RESCAN_DELAY)
class SubmitReportTests(TestCase):

    def setUp(self):
        self.author = make_user()
        self.post = make_post(author=self.author)

    def report(self, reporter, target_type=TARGET_CONTENT, target_id=None, reason="spam"):
        return submit_report(
            reporter=reporter,
            target_type=target_type,
            target_id=target_id or self.post.id,
            reason=reason,
        )

    def test_report_is_persisted_with_frozen_weight(self, _delay):
        reporter = make_user(trust_score=55)
        result = self.report(reporter)

        self.assertTrue(result["accepted"])
        report = Report.objects.get(pk=result["report"].pk)
        self.assertEqual(report.weight, 0.7)
        self.assertEqual(report.status, REPORT_PENDING)

        # Later trust changes do not touch the stored weight
        reporter.trust_score = 90
        reporter.save()
        report.refresh_from_db()
        self.assertEqual(report.weight, 0.7)

    def test_duplicate_pending_report_rejected(self, _delay):
        reporter = make_user(trust_score=80)
        self.report(reporter)

        with self.assertRaises(DuplicateReport):
            self.report(reporter, reason="harassment")

        self.assertEqual(Report.objects.filter(reporter=reporter).count(), 1)
        self.assertEqual(weighted_aggregate(TARGET_CONTENT, self.post.id), 1.0)

    def test_reporter_may_report_again_after_wave_closed(self, _delay):
        reporter = make_user(trust_score=80)
        self.report(reporter)
        Report.objects.filter(reporter=reporter).update(status=REPORT_RESOLVED)

        result = self.report(reporter)
        self.assertTrue(result["accepted"])
        self.assertEqual(Report.objects.filter(reporter=reporter).count(), 2)

    def test_cannot_report_own_target(self, _delay):
        with self.assertRaises(InvalidTarget):
            self.report(self.author)
        with self.assertRaises(InvalidTarget):
            self.report(self.author, target_type=TARGET_ACCOUNT, target_id=self.author.id)

    def test_unknown_reason_or_target(self, _delay):
        reporter = make_user()
        with self.assertRaises(InvalidTarget):
            self.report(reporter, reason="impersonation")  # account-only reason
        with self.assertRaises(InvalidTarget):
            self.report(reporter, target_type="comment")
        with self.assertRaises(InvalidTarget):
            self.report(reporter, target_id=999999)

    def test_zero_weight_report_never_moves_aggregate(self, _delay):
        for _ in range(5):
            self.report(make_user(trust_score=0))
        self.assertEqual(weighted_aggregate(TARGET_CONTENT, self.post.id), 0.0)
        snapshot = aggregate_snapshot(TARGET_CONTENT, self.post.id)
        self.assertEqual(snapshot["pending_count"], 5)

    def test_worked_example(self, delay):
        # A (1.0) + B (0.4) -> 1.4 -> none
        with self.captureOnCommitCallbacks(execute=True):
            self.assertEqual(self.report(make_user(trust_score=80))["action"], ACTION_NONE)
            self.assertEqual(self.report(make_user(trust_score=40))["action"], ACTION_NONE)
        self.assertAlmostEqual(weighted_aggregate(TARGET_CONTENT, self.post.id), 1.4)

        # Eight more at 0.4 -> 4.6 -> rescan exactly once
        actions = []
        with self.captureOnCommitCallbacks(execute=True):
            for _ in range(8):
                actions.append(self.report(make_user(trust_score=40))["action"])
        self.assertAlmostEqual(weighted_aggregate(TARGET_CONTENT, self.post.id), 4.6)
        self.assertEqual(actions.count(ACTION_RESCAN), 1)
        delay.assert_called_once_with(TARGET_CONTENT, self.post.id)

        # Two more at 1.0 -> 6.6 -> no re-trigger
        with self.captureOnCommitCallbacks(execute=True):
            for _ in range(2):
                self.assertEqual(self.report(make_user(trust_score=80))["action"], ACTION_NONE)
        self.assertAlmostEqual(weighted_aggregate(TARGET_CONTENT, self.post.id), 6.6)
        self.assertEqual(delay.call_count, 1)

        # Keep going at 1.0 until W >= 10 -> priority_queue exactly once
        actions = []
        for _ in range(4):
            actions.append(self.report(make_user(trust_score=80))["action"])
        self.assertEqual(actions, [ACTION_NONE, ACTION_NONE, ACTION_NONE, ACTION_PRIORITY_QUEUE])

        self.post.refresh_from_db()
        self.assertEqual(self.post.status, MODERATION)
        self.assertIsNotNone(self.post.moderation_due_at)
        decision = Decision.objects.for_target(TARGET_CONTENT, self.post.id).get()
        self.assertEqual(decision.decision, DECISION_MODERATION)
        self.assertEqual(decision.issuer_kind, ISSUER_SYSTEM)
        self.assertEqual(
            EscalationMark.objects.filter(target_type=TARGET_CONTENT, target_id=self.post.id, is_open=True).count(),
            2,
        )

        # Post is no longer visible to observers, so it cannot be reported further
        with self.assertRaises(InvalidTarget):
            self.report(make_user(trust_score=80))

    def test_priority_fires_once_even_if_reevaluated(self, _delay):
        for _ in range(10):
            self.report(make_user(trust_score=80))
        self.assertEqual(Decision.objects.for_target(TARGET_CONTENT, self.post.id).count(), 1)

        # A second evaluation of the same wave hands out nothing
        self.assertEqual(evaluate(target_type=TARGET_CONTENT, target_id=self.post.id), ACTION_NONE)
        self.assertEqual(Decision.objects.for_target(TARGET_CONTENT, self.post.id).count(), 1)

    def test_new_wave_escalates_again_after_human_decision(self, delay):
        with self.captureOnCommitCallbacks(execute=True):
            for _ in range(3):
                self.report(make_user(trust_score=80))
        self.assertEqual(delay.call_count, 1)

        # A moderator ruling closes the wave (restored keeps the post reportable)
        record_decision(
            target_type=TARGET_CONTENT,
            target_id=self.post.id,
            decision=DECISION_RESTORED,
            issuer=make_moderator(),
        )
        self.assertFalse(EscalationMark.objects.filter(is_open=True).exists())
        self.assertFalse(Report.objects.filter(status=REPORT_PENDING).exists())

        with self.captureOnCommitCallbacks(execute=True):
            for _ in range(3):
                self.report(make_user(trust_score=80))
        self.assertEqual(delay.call_count, 2)


@mock.patch(RESCAN_DELAY)
class ImmunityTests(TestCase):

    def test_elevated_owner_never_escalates(self, delay):
        post = make_post(author=make_moderator())
        with self.captureOnCommitCallbacks(execute=True):
            for _ in range(12):
                result = submit_report(
                    reporter=make_user(trust_score=80),
                    target_type=TARGET_CONTENT,
                    target_id=post.id,
                    reason="spam",
                )
                self.assertEqual(result["action"], ACTION_NONE)

        post.refresh_from_db()
        self.assertEqual(post.status, PUBLISHED)
        self.assertFalse(EscalationMark.objects.exists())
        delay.assert_not_called()

    def test_human_approval_grants_immunity(self, delay):
        post = make_post()
        record_decision(
            target_type=TARGET_CONTENT,
            target_id=post.id,
            decision=DECISION_APPROVED,
            issuer=make_moderator(),
        )

        for _ in range(12):
            result = submit_report(
                reporter=make_user(trust_score=80),
                target_type=TARGET_CONTENT,
                target_id=post.id,
                reason="spam",
            )
            self.assertEqual(result["action"], ACTION_NONE)

        post.refresh_from_db()
        self.assertEqual(post.status, PUBLISHED)
        # Reports are still recorded for the audit trail
        self.assertEqual(Report.objects.filter(target_id=post.id).count(), 12)

    def test_account_approval_survives_freeze_and_unfreeze(self, delay):
        account = make_user()
        record_decision(
            target_type=TARGET_ACCOUNT,
            target_id=account.id,
            decision=DECISION_APPROVED,
            issuer=make_moderator(),
        )
        freeze_account(user=account)
        unfreeze_account(user=account)

        actions = [
            submit_report(
                reporter=make_user(trust_score=80),
                target_type=TARGET_ACCOUNT,
                target_id=account.id,
                reason="spam",
            )["action"]
            for _ in range(12)
        ]
        self.assertEqual(set(actions), {ACTION_NONE})
        self.assertFalse(EscalationMark.objects.filter(target_type=TARGET_ACCOUNT, target_id=account.id).exists())

    def test_later_moderator_ruling_lifts_approval(self, _delay):
        post = make_post()
        moderator = make_moderator()
        record_decision(target_type=TARGET_CONTENT, target_id=post.id, decision=DECISION_APPROVED, issuer=moderator)
        record_decision(target_type=TARGET_CONTENT, target_id=post.id, decision=DECISION_MODERATION, issuer=moderator)
        record_decision(target_type=TARGET_CONTENT, target_id=post.id, decision=DECISION_RESTORED, issuer_kind=ISSUER_SYSTEM)

        for _ in range(3):
            submit_report(
                reporter=make_user(trust_score=80),
                target_type=TARGET_CONTENT,
                target_id=post.id,
                reason="spam",
            )
        self.assertTrue(EscalationMark.objects.filter(target_id=post.id, action=ACTION_RESCAN).exists())

    def test_system_restore_is_not_an_approval(self, _delay):
        post = make_post()
        record_decision(
            target_type=TARGET_CONTENT,
            target_id=post.id,
            decision=DECISION_MODERATION,
            issuer_kind=ISSUER_SYSTEM,
        )
        record_decision(
            target_type=TARGET_CONTENT,
            target_id=post.id,
            decision=DECISION_RESTORED,
            issuer_kind=ISSUER_SYSTEM,
        )
        for _ in range(3):
            submit_report(
                reporter=make_user(trust_score=80),
                target_type=TARGET_CONTENT,
                target_id=post.id,
                reason="spam",
            )
        self.assertTrue(EscalationMark.objects.filter(target_id=post.id, action=ACTION_RESCAN).exists())
