# apps/accounts/services/self_service.py
# ============================================================
# Account self-service: freeze / unfreeze / delete / reactivate
# and unblock through identity re-verification.
# Every status change goes through the moderation decision recorder.
# ============================================================

import logging
from datetime import timedelta

from django.conf import settings
from django.core.mail import send_mail
from django.db import transaction
from django.utils import timezone

from apps.accounts.exceptions import FreezeLimitReached, VerificationFailed
from apps.moderation.models import Decision
from apps.moderation.constants.targets import TARGET_ACCOUNT
from apps.moderation.constants.thresholds import policy
from apps.moderation.constants.states import (
    FROZEN,
    BLOCKED,
    DELETED,
    MODERATION,
    DECISION_BLOCKED,
    DECISION_MODERATION,
    DECISION_FROZEN,
    DECISION_DELETED,
    DECISION_RESTORED,
    ISSUER_OWNER,
)
from apps.moderation.exceptions import InvalidTransition
from apps.moderation.services.decision_recorder import apply_decision
from apps.moderation.services.lifecycle import VIA_REACTIVATION, VIA_REVERIFICATION
from apps.moderation.services.strikes import reset_strikes
from apps.moderation.services.targets import resolve_target

logger = logging.getLogger(__name__)


def _lock_account(user):
    return resolve_target(TARGET_ACCOUNT, user.pk, lock=True)


def recent_self_freezes(user) -> int:
    since = timezone.now() - timedelta(days=int(policy("SELF_FREEZE_WINDOW_DAYS")))
    return Decision.objects.filter(
        target_type=TARGET_ACCOUNT,
        target_id=user.pk,
        decision=DECISION_FROZEN,
        issuer_kind=ISSUER_OWNER,
        created_at__gte=since,
    ).count()


# Freeze / Unfreeze ------------------------------------------------------------------------
def freeze_account(*, user, reason: str = "") -> Decision:
    with transaction.atomic():
        account = _lock_account(user)
        if recent_self_freezes(account) >= int(policy("SELF_FREEZE_LIMIT")):
            raise FreezeLimitReached()

        return apply_decision(
            target_type=TARGET_ACCOUNT,
            target=account,
            decision=DECISION_FROZEN,
            reason=reason or "Frozen by account owner.",
            issuer=account,
            issuer_kind=ISSUER_OWNER,
        )


def unfreeze_account(*, user) -> Decision:
    with transaction.atomic():
        account = _lock_account(user)
        if account.status != FROZEN:
            raise InvalidTransition("Only a frozen account can be unfrozen.")

        decision = apply_decision(
            target_type=TARGET_ACCOUNT,
            target=account,
            decision=DECISION_RESTORED,
            reason="Unfrozen by account owner.",
            issuer=account,
            issuer_kind=ISSUER_OWNER,
        )
        account.reactivated_at = timezone.now()
        account.save(update_fields=["reactivated_at"])
        return decision


# Delete / Reactivate ----------------------------------------------------------------------
def deletion_deadline(account):
    if account.status != DELETED or not account.status_entered_at:
        return None
    return account.status_entered_at + timedelta(days=int(policy("DELETION_GRACE_DAYS")))


def delete_account(*, user, reason: str = "") -> Decision:
    """Soft delete; the account is purged once the grace window elapses."""
    with transaction.atomic():
        account = _lock_account(user)
        return apply_decision(
            target_type=TARGET_ACCOUNT,
            target=account,
            decision=DECISION_DELETED,
            reason=reason or "Deletion requested by account owner.",
            issuer=account,
            issuer_kind=ISSUER_OWNER,
        )


def _reactivation_decision(account):
    """
    Decision kind and reason for leaving `deleted`. A block or a pending
    review in force at deletion time is reinstated, not cleared.
    """
    if account.status_prior == BLOCKED:
        return DECISION_BLOCKED, "Reactivated by account owner; the block in force before deletion still applies."
    if account.status_prior == MODERATION:
        return DECISION_MODERATION, "Reactivated by account owner; the account is back under review."
    return DECISION_RESTORED, "Reactivated by account owner."


def reactivate_account(*, user) -> Decision:
    with transaction.atomic():
        account = _lock_account(user)
        if account.status != DELETED:
            raise InvalidTransition("Only a deleted account can be reactivated.")

        deadline = deletion_deadline(account)
        if deadline is None or deadline <= timezone.now():
            raise InvalidTransition("The reactivation window for this account has closed.")

        kind, reason = _reactivation_decision(account)
        decision = apply_decision(
            target_type=TARGET_ACCOUNT,
            target=account,
            decision=kind,
            reason=reason,
            issuer=account,
            issuer_kind=ISSUER_OWNER,
            via=VIA_REACTIVATION,
        )
        account.reactivated_at = timezone.now()
        account.save(update_fields=["reactivated_at"])
        return decision


# Unblock (identity re-verification) -------------------------------------------------------
def _send_unblock_code(account, code: str):
    minutes = int(policy("UNBLOCK_CODE_TTL_MINUTES"))
    send_mail(
        subject="Your account verification code",
        message=(
            f"Your verification code is {code}.\n"
            f"It expires in {minutes} minutes. If you did not request this, ignore this email."
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[account.email],
    )


def start_unblock_verification(*, user, password: str) -> dict:
    """Step 1: password re-check, then an emailed one-time code."""
    account = resolve_target(TARGET_ACCOUNT, user.pk)
    if account.status != BLOCKED:
        raise InvalidTransition("This account is not blocked.")

    if not password or not account.check_password(password):
        raise VerificationFailed("Incorrect password.")

    account.unblock_password_verified_at = timezone.now()
    account.save(update_fields=["unblock_password_verified_at"])
    code = account.generate_unblock_code()

    try:
        _send_unblock_code(account, code)
    except Exception as e:
        logger.error("[Accounts] unblock code email failed user=%s: %s", account.pk, e, exc_info=True)
        raise VerificationFailed("Could not send the verification code. Please try again.")

    return {"code_sent": True, "expires_at": account.unblock_code_expiry}


def complete_unblock_verification(*, user, code: str) -> Decision:
    """Step 2: valid code after a fresh password check -> account active again."""
    with transaction.atomic():
        account = _lock_account(user)
        if account.status != BLOCKED:
            raise InvalidTransition("This account is not blocked.")

        if not account.unblock_password_verified_at:
            raise VerificationFailed("Verify your password first.")

        result = account.validate_unblock_code(code)
        if result != "valid":
            raise VerificationFailed("The code is invalid or has expired.")

        decision = apply_decision(
            target_type=TARGET_ACCOUNT,
            target=account,
            decision=DECISION_RESTORED,
            reason="Unblocked after identity re-verification.",
            issuer=account,
            issuer_kind=ISSUER_OWNER,
            via=VIA_REVERIFICATION,
        )
        account.reactivated_at = timezone.now()
        account.save(update_fields=["reactivated_at"])
        account.clear_unblock_challenge()
        reset_strikes(account_id=account.pk, actor=account)
        return decision
