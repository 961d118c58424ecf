# apps/moderation/services/appeals.py

import logging

from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework.exceptions import PermissionDenied

from common.permissions import is_moderator
from apps.moderation.models import Appeal, Decision
from apps.moderation.constants.targets import TARGET_ACCOUNT
from apps.moderation.constants.states import (
    APPEAL_PENDING,
    APPEAL_UPHELD,
    APPEAL_OVERTURNED,
    DECISION_BLOCKED,
    DECISION_RESTORED,
    ISSUER_MODERATOR,
)
from apps.moderation.exceptions import AlreadyAppealed, UnknownReferenceCode
from apps.moderation.services.audit import log_action
from apps.moderation.services.decision_recorder import record_decision
from apps.moderation.services.lifecycle import VIA_APPEAL
from apps.moderation.services.strikes import reset_strikes
from apps.moderation.services.targets import resolve_target, get_owner_id

logger = logging.getLogger(__name__)


# Access -----------------------------------------------------------------------------------
def can_user_appeal(decision: Decision, user) -> bool:
    """Owner of the decided target (or staff acting for them)."""
    if not user or not getattr(user, "is_authenticated", False):
        return False
    if is_moderator(user):
        return True
    target = resolve_target(decision.target_type, decision.target_id)
    return get_owner_id(decision.target_type, target) == user.id


def assert_can_appeal(decision: Decision, user):
    if not can_user_appeal(decision, user):
        raise PermissionDenied("You are not allowed to appeal this decision.")


# Submit -----------------------------------------------------------------------------------
def submit_appeal(*, reference_code, justification: str, appellant=None) -> dict:
    """
    One appeal per decision, ever. The decision stays in force until a
    moderator resolves the appeal.
    """
    code = str(reference_code or "").strip()
    decision = Decision.objects.filter(reference_code=code).first()
    if decision is None:
        raise UnknownReferenceCode()

    if appellant is not None:
        assert_can_appeal(decision, appellant)

    if Appeal.objects.filter(decision=decision).exists():
        raise AlreadyAppealed()

    try:
        with transaction.atomic():
            appeal = Appeal.objects.create(
                decision=decision,
                appellant=appellant,
                justification=(justification or "").strip(),
            )
    except IntegrityError:
        # Lost the race against a concurrent appeal on the same decision
        raise AlreadyAppealed()

    logger.info("[Moderation] appeal queued code=%s appeal=%s", decision.reference_code, appeal.id)
    return {"queued": True, "appeal": appeal}


# Resolve ----------------------------------------------------------------------------------
def resolve_appeal(*, appeal_id: int, moderator, overturn: bool, note: str = "") -> Appeal:
    """
    Final ruling on an appeal. Overturning records a `restored` decision
    (the only path from removed content back to published) and clears the
    strike ledger when a block is lifted.
    """
    with transaction.atomic():
        appeal = (
            Appeal.objects
            .select_for_update()
            .select_related("decision")
            .get(pk=appeal_id)
        )
        if appeal.status != APPEAL_PENDING:
            raise AlreadyAppealed("This appeal has already been resolved.")

        original = appeal.decision
        resolution = None

        if overturn:
            resolution = record_decision(
                target_type=original.target_type,
                target_id=original.target_id,
                decision=DECISION_RESTORED,
                reason=f"Appeal on {original.reference_code} overturned. {note}".strip(),
                issuer=moderator,
                issuer_kind=ISSUER_MODERATOR,
                via=VIA_APPEAL,
            )
            if original.target_type == TARGET_ACCOUNT and original.decision == DECISION_BLOCKED:
                reset_strikes(account_id=original.target_id)

        appeal.status = APPEAL_OVERTURNED if overturn else APPEAL_UPHELD
        appeal.resolved_at = timezone.now()
        appeal.resolved_by = moderator
        appeal.resolution_note = note or None
        appeal.resolution_decision = resolution
        appeal.save(update_fields=[
            "status",
            "resolved_at",
            "resolved_by",
            "resolution_note",
            "resolution_decision",
        ])

        log_action(
            actor=moderator,
            action=f"appeal_{appeal.status}",
            target_type=original.target_type,
            target_id=original.target_id,
            reason=note,
            metadata={"reference_code": original.reference_code, "appeal_id": appeal.id},
        )

    return appeal
