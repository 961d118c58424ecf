# apps/moderation/services/console.py
# ============================================================
# Moderator console: actions + review queues
# ============================================================

import logging

from django.db import transaction
from django.db.models import Count, Max, Sum
from django.utils import timezone

from apps.moderation.models import Appeal, ModerationLog, Report
from apps.moderation.constants.targets import TARGET_CONTENT, TARGET_ACCOUNT
from apps.moderation.constants.states import (
    MODERATION,
    REPORT_PENDING,
    REPORT_RESOLVED,
    REPORT_DISMISSED,
    APPEAL_PENDING,
    DECISION_APPROVED,
    DECISION_REMOVED,
    DECISION_MODERATION,
    DECISION_BLOCKED,
    ISSUER_MODERATOR,
)
from apps.moderation.exceptions import InvalidTarget
from apps.moderation.services.audit import log_action
from apps.moderation.services.decision_recorder import record_decision
from apps.moderation.services.targets import get_target_model

logger = logging.getLogger(__name__)


ACTION_APPROVE = "approve"
ACTION_REMOVE = "remove"
ACTION_MODERATE = "moderate"
ACTION_BLOCK = "block"
ACTION_RESOLVE_REPORT = "resolve_report"
ACTION_DISMISS_REPORT = "dismiss_report"

DECISION_ACTIONS = {
    ACTION_APPROVE: DECISION_APPROVED,
    ACTION_REMOVE: DECISION_REMOVED,
    ACTION_MODERATE: DECISION_MODERATION,
    ACTION_BLOCK: DECISION_BLOCKED,
}
REPORT_ACTIONS = {
    ACTION_RESOLVE_REPORT: REPORT_RESOLVED,
    ACTION_DISMISS_REPORT: REPORT_DISMISSED,
}
CONSOLE_ACTIONS = list(DECISION_ACTIONS) + list(REPORT_ACTIONS)

QUEUE_TABS = ("reports", "moderation", "appeals", "overview")
QUEUE_LIMIT = 100


# Actions ----------------------------------------------------------------------------------
def close_report(*, moderator, report_id: int, action: str, reason: str = "") -> Report:
    new_status = REPORT_ACTIONS[action]
    with transaction.atomic():
        report = Report.objects.select_for_update().filter(pk=report_id).first()
        if report is None:
            raise InvalidTarget("Report not found.")
        if report.status != REPORT_PENDING:
            raise InvalidTarget("Report is already closed.")

        report.status = new_status
        report.resolved_at = timezone.now()
        report.resolved_by = moderator
        report.save(update_fields=["status", "resolved_at", "resolved_by"])

        log_action(
            actor=moderator,
            action=action,
            target_type=report.target_type,
            target_id=report.target_id,
            reason=reason,
            metadata={"report_id": report.id},
        )
    return report


def perform_action(*, moderator, action: str, target_type: str = None, target_id=None, reason: str = "", report_id=None) -> dict:
    """Single entry point for console actions; every action leaves a log entry."""
    if action in REPORT_ACTIONS:
        if not report_id:
            raise InvalidTarget("report_id is required for report actions.")
        report = close_report(moderator=moderator, report_id=report_id, action=action, reason=reason)
        return {"action": action, "report_id": report.id, "report_status": report.status}

    decision_value = DECISION_ACTIONS.get(action)
    if decision_value is None:
        raise InvalidTarget(f"Unknown action '{action}'.")

    decision = record_decision(
        target_type=target_type,
        target_id=target_id,
        decision=decision_value,
        reason=reason,
        issuer=moderator,
        issuer_kind=ISSUER_MODERATOR,
    )
    return {
        "action": action,
        "decision": decision.decision,
        "reference_code": decision.reference_code,
    }


# Queues -----------------------------------------------------------------------------------
def reports_queue():
    """Targets with pending reports, heaviest weighted sum first."""
    return list(
        Report.objects
        .filter(status=REPORT_PENDING)
        .values("target_type", "target_id")
        .annotate(
            weighted_sum=Sum("weight"),
            report_count=Count("id"),
            last_reported_at=Max("created_at"),
        )
        .order_by("-weighted_sum", "-last_reported_at")[:QUEUE_LIMIT]
    )


def moderation_queue():
    """Content and accounts under review, closest deadline first."""
    items = []
    for target_type in (TARGET_CONTENT, TARGET_ACCOUNT):
        model = get_target_model(target_type)
        rows = (
            model.objects
            .filter(status=MODERATION)
            .select_related("status_decision")
            .order_by("moderation_due_at")[:QUEUE_LIMIT]
        )
        for obj in rows:
            items.append({
                "target_type": target_type,
                "target_id": obj.pk,
                "status_reason": obj.status_reason,
                "moderation_due_at": obj.moderation_due_at,
                "reference_code": obj.status_decision.reference_code if obj.status_decision else None,
            })
    items.sort(key=lambda i: (i["moderation_due_at"] is None, i["moderation_due_at"]))
    return items[:QUEUE_LIMIT]


def appeals_queue():
    return (
        Appeal.objects
        .filter(status=APPEAL_PENDING)
        .select_related("decision", "appellant")
        .order_by("submitted_at")[:QUEUE_LIMIT]
    )


def overview():
    content_model = get_target_model(TARGET_CONTENT)
    account_model = get_target_model(TARGET_ACCOUNT)
    return {
        "pending_reports": Report.objects.filter(status=REPORT_PENDING).count(),
        "content_in_moderation": content_model.objects.filter(status=MODERATION).count(),
        "accounts_in_moderation": account_model.objects.filter(status=MODERATION).count(),
        "pending_appeals": Appeal.objects.filter(status=APPEAL_PENDING).count(),
        "recent_logs": list(
            ModerationLog.objects
            .order_by("-created_at")
            .values("id", "actor_id", "action", "target_type", "target_id", "reason", "created_at")[:20]
        ),
    }
