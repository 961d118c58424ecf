# apps/moderation/services/escalation.py
# ============================================================
# Escalation evaluator: none / rescan / priority_queue
# ============================================================

import logging

from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.moderation.models import EscalationMark, Report
from apps.moderation.constants.thresholds import policy
from apps.moderation.constants.states import (
    ACTION_NONE,
    ACTION_RESCAN,
    ACTION_PRIORITY_QUEUE,
    REPORT_PENDING,
    REPORT_RESOLVED,
)
from apps.moderation.services.aggregator import weighted_aggregate
from apps.moderation.services.immunity import is_immune
from apps.moderation.services.targets import resolve_target

logger = logging.getLogger(__name__)


def resolve_action_for(weighted_sum: float) -> str:
    """Pure threshold mapping; priority supersedes rescan."""
    if weighted_sum >= float(policy("PRIORITY_THRESHOLD")):
        return ACTION_PRIORITY_QUEUE
    if weighted_sum >= float(policy("RESCAN_THRESHOLD")):
        return ACTION_RESCAN
    return ACTION_NONE


def _claim_mark(target_type: str, target_id: int, action: str, weighted_sum: float) -> bool:
    """
    Insert the open mark for (target, action). The partial unique constraint
    makes exactly one concurrent caller win; everyone else gets False.
    """
    try:
        with transaction.atomic():
            EscalationMark.objects.create(
                target_type=target_type,
                target_id=target_id,
                action=action,
                aggregate_at_trigger=weighted_sum,
            )
        return True
    except IntegrityError:
        return False


def evaluate(*, target_type: str, target_id: int) -> str:
    """
    Returns the escalation action that this evaluation is responsible for
    carrying out. Each threshold crossing is handed out once per report wave.
    """
    target = resolve_target(target_type, target_id)
    target_id = int(target.pk)

    # Immunity first: elevated owner or human approval short-circuits everything
    if is_immune(target_type, target):
        return ACTION_NONE

    weighted_sum = weighted_aggregate(target_type, target_id)
    action = resolve_action_for(weighted_sum)

    if action == ACTION_NONE:
        return ACTION_NONE

    if action == ACTION_PRIORITY_QUEUE:
        won = _claim_mark(target_type, target_id, ACTION_PRIORITY_QUEUE, weighted_sum)
        # Absorb the lower threshold so it can never fire after priority
        _claim_mark(target_type, target_id, ACTION_RESCAN, weighted_sum)
        if won:
            logger.info("[Moderation] priority_queue target=%s:%s W=%s", target_type, target_id, weighted_sum)
            return ACTION_PRIORITY_QUEUE
        return ACTION_NONE

    if _claim_mark(target_type, target_id, ACTION_RESCAN, weighted_sum):
        logger.info("[Moderation] rescan target=%s:%s W=%s", target_type, target_id, weighted_sum)
        return ACTION_RESCAN
    return ACTION_NONE


def close_wave(target_type: str, target_id: int, *, resolved_by=None) -> int:
    """
    A human decision closes the current report wave: pending reports become
    resolved and open escalation marks are closed so a new wave can escalate.
    """
    now = timezone.now()
    resolved = Report.objects.filter(
        target_type=target_type,
        target_id=target_id,
        status=REPORT_PENDING,
    ).update(status=REPORT_RESOLVED, resolved_at=now, resolved_by=resolved_by)

    EscalationMark.objects.filter(
        target_type=target_type,
        target_id=target_id,
        is_open=True,
    ).update(is_open=False, closed_at=now)

    return resolved
