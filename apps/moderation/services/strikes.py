# apps/moderation/services/strikes.py
# ============================================================
# Strike Ledger
# ============================================================

import logging

from django.db import transaction
from django.utils import timezone

from apps.moderation.models import StrikeLedger
from apps.moderation.constants.targets import TARGET_ACCOUNT
from apps.moderation.constants.thresholds import policy
from apps.moderation.constants.states import DELETED, DECISION_BLOCKED, ISSUER_SYSTEM
from apps.moderation.exceptions import InvalidTarget
from apps.moderation.services.audit import log_action
from apps.moderation.services.decision_recorder import apply_decision
from apps.moderation.services.targets import resolve_target

logger = logging.getLogger(__name__)


def add_strike(*, account_id: int, reason: str, actor=None) -> dict:
    """
    Increment the account's strike count. Reaching the ceiling forces the
    account to `blocked` through a synthetic system decision (auditable and
    appealable like any other).
    """
    with transaction.atomic():
        # The account row lock serialises concurrent strikes for one account
        account = resolve_target(TARGET_ACCOUNT, account_id, lock=True)
        if account.status == DELETED:
            raise InvalidTarget("Deleted accounts cannot receive strikes.")

        ledger, _ = StrikeLedger.objects.select_for_update().get_or_create(account=account)

        now = timezone.now()
        ledger.strike_count += 1
        ledger.last_strike_at = now
        ledger.last_reason = reason or None

        decision = None
        ceiling = int(policy("STRIKE_CEILING"))
        if ledger.strike_count >= ceiling and ledger.ceiling_reached_at is None:
            decision = apply_decision(
                target_type=TARGET_ACCOUNT,
                target=account,
                decision=DECISION_BLOCKED,
                reason=f"Strike limit reached ({ledger.strike_count}/{ceiling}). Last strike: {reason}",
                issuer_kind=ISSUER_SYSTEM,
                force=True,
            )
            ledger.ceiling_reached_at = now
            logger.warning(
                "[Moderation][Strikes] ceiling reached account=%s count=%s code=%s",
                account.pk,
                ledger.strike_count,
                decision.reference_code,
            )

        ledger.save()

        log_action(
            actor=actor,
            action="strike_added",
            target_type=TARGET_ACCOUNT,
            target_id=account.pk,
            reason=reason,
            metadata={"strike_count": ledger.strike_count},
        )

    return {
        "strike_count": ledger.strike_count,
        "blocked": decision is not None,
        "decision": decision,
    }


def reset_strikes(*, account_id: int, actor=None) -> int:
    """Full reset (overturned block or identity re-verification)."""
    now = timezone.now()
    updated = StrikeLedger.objects.filter(account_id=account_id).update(
        strike_count=0,
        ceiling_reached_at=None,
        reset_at=now,
        updated_at=now,
    )
    if updated:
        log_action(
            actor=actor,
            action="strikes_reset",
            target_type=TARGET_ACCOUNT,
            target_id=account_id,
        )
    return updated
