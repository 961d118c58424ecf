# apps/moderation/services/status.py
# ============================================================
# Status read contract + SLA auto-restoration
# ============================================================

import logging

from rest_framework.exceptions import NotFound

from common.permissions import is_moderator
from apps.moderation.constants.states import DECISION_RESTORED, ISSUER_SYSTEM
from apps.moderation.exceptions import InvalidTarget
from apps.moderation.services.decision_recorder import record_decision
from apps.moderation.services.lifecycle import can_view, is_overdue
from apps.moderation.services.targets import resolve_target, get_owner_id

logger = logging.getLogger(__name__)

SLA_RESTORE_REASON = "Review window elapsed without a decision; restored automatically."


def restore_if_overdue(target_type: str, target_id: int):
    """
    Restore a target whose review window elapsed. Re-checked under the row
    lock, so the sweep and lazy reads can race without double-restoring.
    """
    decision = record_decision(
        target_type=target_type,
        target_id=target_id,
        decision=DECISION_RESTORED,
        reason=SLA_RESTORE_REASON,
        issuer_kind=ISSUER_SYSTEM,
        precondition=is_overdue,
    )
    if decision is not None:
        logger.info("[Moderation][SLA] restored target=%s:%s code=%s", target_type, target_id, decision.reference_code)
    return decision


def refresh_target(target_type: str, target_obj):
    """Lazy SLA check on read; returns the (possibly reloaded) target."""
    if is_overdue(target_obj):
        restore_if_overdue(target_type, target_obj.pk)
        target_obj.refresh_from_db()
    return target_obj


def get_status(*, target_type: str, target_id, viewer=None) -> dict:
    """
    {status, reason?, reference_code?, due_at?} for rendering / feed layers.
    Observers who may not see the target get a 404; details are owner/moderator only.
    """
    try:
        target = resolve_target(target_type, target_id)
    except InvalidTarget:
        raise NotFound("Not found.")
    target = refresh_target(target_type, target)

    if not can_view(target_type, target, viewer):
        raise NotFound("Not found.")

    data = {
        "target_type": target_type,
        "target_id": target.pk,
        "status": target.status,
    }

    privileged = bool(
        viewer
        and getattr(viewer, "is_authenticated", False)
        and (get_owner_id(target_type, target) == viewer.id or is_moderator(viewer))
    )
    if privileged:
        decision = target.status_decision
        data.update({
            "reason": target.status_reason,
            "reference_code": decision.reference_code if decision else None,
            "due_at": target.moderation_due_at,
            "entered_at": target.status_entered_at,
        })
    return data

