# apps/moderation/services/reports.py
# ============================================================
# Report submission + escalation dispatch
# ============================================================

import logging

from django.db import IntegrityError, transaction

from apps.moderation.models import Report
from apps.moderation.constants.reasons import REASON_MAP, REPORT_DESCRIPTION_MAX_LENGTH
from apps.moderation.constants.states import (
    ACTION_RESCAN,
    ACTION_PRIORITY_QUEUE,
    DECISION_MODERATION,
    ISSUER_SYSTEM,
)
from apps.moderation.exceptions import DuplicateReport, InvalidTarget, InvalidTransition
from apps.moderation.services.decision_recorder import record_decision
from apps.moderation.services.escalation import evaluate
from apps.moderation.services.lifecycle import can_view
from apps.moderation.services.targets import resolve_target, get_owner_id
from apps.moderation.services.weights import resolve_report_weight

logger = logging.getLogger(__name__)


def _clean_description(description):
    text = (description or "").strip()
    return text[:REPORT_DESCRIPTION_MAX_LENGTH] or None


def submit_report(*, reporter, target_type: str, target_id, reason: str, description=None) -> dict:
    """
    Persist one weighted report, then evaluate the target.
    Returns {"accepted": True, "report": Report, "action": str}.
    """
    reasons = REASON_MAP.get(target_type)
    if reasons is None:
        raise InvalidTarget(f"Unknown target type '{target_type}'.")
    if reason not in reasons:
        raise InvalidTarget(f"Unknown reason '{reason}' for {target_type}.")

    target = resolve_target(target_type, target_id)

    if get_owner_id(target_type, target) == reporter.id:
        raise InvalidTarget("You cannot report your own content or account.")
    if not can_view(target_type, target, reporter):
        raise InvalidTarget("Target not found.")

    weight = resolve_report_weight(getattr(reporter, "trust_score", 0))

    try:
        with transaction.atomic():
            report = Report.objects.create(
                reporter=reporter,
                target_type=target_type,
                target_id=target.pk,
                reason=reason,
                description=_clean_description(description),
                weight=weight,
            )
    except IntegrityError:
        raise DuplicateReport()

    action = evaluate(target_type=target_type, target_id=target.pk)
    dispatch_escalation(target_type=target_type, target_id=target.pk, action=action)

    return {"accepted": True, "report": report, "action": action}


def _enqueue_rescan(target_type: str, target_id: int):
    # Local import: tasks imports services
    from apps.moderation.tasks import rescan_target

    try:
        rescan_target.delay(target_type, target_id)
    except Exception as e:
        logger.warning(
            "[Moderation] rescan enqueue failed target=%s:%s err=%s",
            target_type,
            target_id,
            e,
            exc_info=True,
        )


def dispatch_escalation(*, target_type: str, target_id: int, action: str):
    """
    rescan         -> background task after commit (caller never waits on it)
    priority_queue -> synchronous `moderation` decision, target hidden now
    """
    if action == ACTION_RESCAN:
        transaction.on_commit(lambda: _enqueue_rescan(target_type, target_id))
        return None

    if action == ACTION_PRIORITY_QUEUE:
        try:
            return record_decision(
                target_type=target_type,
                target_id=target_id,
                decision=DECISION_MODERATION,
                reason="Priority review: weighted reports crossed the review threshold.",
                issuer_kind=ISSUER_SYSTEM,
            )
        except InvalidTransition as e:
            # Target left the reportable states under a concurrent decision
            logger.info("[Moderation] priority decision not applicable target=%s:%s: %s", target_type, target_id, e)
            return None

    return None
