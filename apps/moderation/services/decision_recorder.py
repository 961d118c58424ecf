# apps/moderation/services/decision_recorder.py
# ============================================================
# Decision Recorder
# The only write path for a target's visible status.
# ============================================================

import logging
from typing import Callable, Optional

from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.moderation.models import Decision
from apps.moderation.constants.states import (
    MODERATION,
    ISSUER_MODERATOR,
    DECISION_APPROVED,
    DECISION_REMOVED,
    DECISION_BLOCKED,
    DECISION_RESTORED,
)
from apps.moderation.exceptions import ReferenceCodeExhausted
from apps.moderation.services.audit import log_action
from apps.moderation.services.escalation import close_wave
from apps.moderation.services.lifecycle import (
    status_for_decision,
    assert_transition,
    due_at_for,
)
from apps.moderation.services.reference_codes import (
    REFERENCE_CODE_ATTEMPTS,
    generate_reference_code,
)
from apps.moderation.services.targets import resolve_target

logger = logging.getLogger(__name__)


# Human rulings that close the current report wave
WAVE_CLOSING_DECISIONS = {
    DECISION_APPROVED,
    DECISION_REMOVED,
    DECISION_BLOCKED,
    DECISION_RESTORED,
}

_STATUS_FIELDS = [
    "status",
    "status_reason",
    "status_entered_at",
    "moderation_due_at",
    "status_prior",
    "status_decision",
]


def _create_decision(**fields) -> Decision:
    """Insert with a fresh 6-digit code; retry inside savepoints on collision."""
    for attempt in range(1, REFERENCE_CODE_ATTEMPTS + 1):
        code = generate_reference_code()
        try:
            with transaction.atomic():
                return Decision.objects.create(reference_code=code, **fields)
        except IntegrityError:
            logger.info("[Moderation] reference code collision code=%s attempt=%s", code, attempt)

    logger.error("[Moderation] reference code allocation failed after %s attempts", REFERENCE_CODE_ATTEMPTS)
    raise ReferenceCodeExhausted()


def apply_decision(
    *,
    target_type: str,
    target,
    decision: str,
    reason: str = "",
    issuer=None,
    issuer_kind: str = ISSUER_MODERATOR,
    via: Optional[str] = None,
    force: bool = False,
) -> Decision:
    """
    Write the Decision and the target's status in the caller's transaction.
    `target` must already be locked (select_for_update).
    force=True skips transition validation (strike ceiling only).
    """
    current = target.status
    new_status = status_for_decision(target_type, decision)
    if not force:
        assert_transition(target_type, current, new_status, via=via)

    decision_row = _create_decision(
        target_type=target_type,
        target_id=target.pk,
        decision=decision,
        reason=reason or "",
        issuer=issuer,
        issuer_kind=issuer_kind,
    )

    now = timezone.now()
    if current == new_status:
        # Same state: keep entry time and (for moderation) the original review window
        entered_at = target.status_entered_at or now
        due_at = target.moderation_due_at if new_status == MODERATION else None
        if new_status == MODERATION and due_at is None:
            due_at = due_at_for(MODERATION, entered_at)
    else:
        target.status_prior = current
        entered_at = now
        due_at = due_at_for(new_status, now)

    target.status = new_status
    target.status_reason = reason or None
    target.status_entered_at = entered_at
    target.moderation_due_at = due_at
    target.status_decision = decision_row
    target.save(update_fields=_STATUS_FIELDS)

    if issuer_kind == ISSUER_MODERATOR and decision in WAVE_CLOSING_DECISIONS:
        close_wave(target_type, target.pk, resolved_by=issuer)

    log_action(
        actor=issuer,
        action=f"decision_{decision}",
        target_type=target_type,
        target_id=target.pk,
        reason=reason,
        metadata={
            "reference_code": decision_row.reference_code,
            "issuer_kind": issuer_kind,
            "from": current,
            "to": new_status,
        },
    )

    logger.info(
        "[Moderation] decision=%s code=%s target=%s:%s %s->%s issuer=%s",
        decision,
        decision_row.reference_code,
        target_type,
        target.pk,
        current,
        new_status,
        issuer_kind,
    )
    return decision_row


def record_decision(
    *,
    target_type: str,
    target_id: int,
    decision: str,
    reason: str = "",
    issuer=None,
    issuer_kind: str = ISSUER_MODERATOR,
    via: Optional[str] = None,
    force: bool = False,
    precondition: Optional[Callable[[object], bool]] = None,
) -> Optional[Decision]:
    """
    Lock the target, validate, insert the Decision and update the status as
    one atomic unit. Returns None when `precondition(locked_target)` is False
    (the state already moved on under a concurrent writer).
    """
    with transaction.atomic():
        target = resolve_target(target_type, target_id, lock=True)

        if precondition is not None and not precondition(target):
            logger.info(
                "[Moderation] decision=%s skipped target=%s:%s status=%s",
                decision,
                target_type,
                target_id,
                target.status,
            )
            return None

        return apply_decision(
            target_type=target_type,
            target=target,
            decision=decision,
            reason=reason,
            issuer=issuer,
            issuer_kind=issuer_kind,
            via=via,
            force=force,
        )
