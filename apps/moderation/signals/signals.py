# apps/moderation/signals/signals.py

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q
from django.db.models.signals import post_save
from django.dispatch import receiver

from apps.accounts.constants import ELEVATED_ROLES
from apps.moderation.models import Appeal, Decision
from apps.moderation.constants.states import APPEAL_PENDING, APPEAL_OVERTURNED, ISSUER_OWNER
from apps.moderation.exceptions import InvalidTarget
from apps.moderation.realtime import broadcast_status_change
from apps.moderation.services.lifecycle import status_for_decision
from apps.moderation.services.targets import resolve_target, get_owner
from apps.notifications.constants import NOTIFICATION_TYPE_SYSTEM, NOTIFICATION_TYPE_MODERATION_QUEUE
from apps.notifications.services.services import create_and_dispatch_notification

logger = logging.getLogger(__name__)


# -----------------------------------------------------
# Helpers
# -----------------------------------------------------
def _decision_message(decision: Decision) -> str:
    subject = "Your post" if decision.target_type == "content" else "Your account"
    text = f"{subject} status changed: {decision.decision}."
    if decision.reason:
        text += f" Reason: {decision.reason}"
    return f"{text} Reference code: {decision.reference_code}"


def _moderators():
    User = get_user_model()
    return User.objects.filter(
        Q(is_admin=True) | Q(is_superuser=True) | Q(role__in=ELEVATED_ROLES)
    ).distinct()


# -----------------------------------------------------
# Decision recorded -> owner notification + live status
# -----------------------------------------------------
@receiver(post_save, sender=Decision, dispatch_uid="moderation.decision_recorded_v1")
def on_decision_recorded(sender, instance: Decision, created, **kwargs):
    if not created:
        return

    decision_id = instance.id

    def _after_commit():
        decision = Decision.objects.filter(pk=decision_id).first()
        if decision is None:
            return

        broadcast_status_change(
            target_type=decision.target_type,
            target_id=decision.target_id,
            status=status_for_decision(decision.target_type, decision.decision),
            decision=decision.decision,
        )

        # Owners acting on themselves already know
        if decision.issuer_kind == ISSUER_OWNER:
            return

        try:
            target = resolve_target(decision.target_type, decision.target_id)
        except InvalidTarget:
            logger.info("[Moderation] decision %s target gone; no notification", decision.reference_code)
            return

        owner = get_owner(decision.target_type, target)
        create_and_dispatch_notification(
            recipient=owner,
            message=_decision_message(decision),
            notif_type=NOTIFICATION_TYPE_SYSTEM,
            object_type=decision.target_type,
            object_id=decision.target_id,
            dedupe_key=f"decision:{decision.id}",
            extra_payload={
                "decision": decision.decision,
                "reference_code": decision.reference_code,
            },
        )

    transaction.on_commit(_after_commit)


# -----------------------------------------------------
# Appeal submitted -> moderators; resolved -> appellant
# -----------------------------------------------------
@receiver(post_save, sender=Appeal, dispatch_uid="moderation.appeal_saved_v1")
def on_appeal_saved(sender, instance: Appeal, created, **kwargs):
    appeal_id = instance.id

    if created:
        def _notify_moderators():
            appeal = Appeal.objects.select_related("decision").filter(pk=appeal_id).first()
            if appeal is None:
                return
            for moderator in _moderators():
                create_and_dispatch_notification(
                    recipient=moderator,
                    actor=appeal.appellant,
                    message=f"New appeal on decision {appeal.decision.reference_code}.",
                    notif_type=NOTIFICATION_TYPE_MODERATION_QUEUE,
                    object_type=appeal.decision.target_type,
                    object_id=appeal.decision.target_id,
                    dedupe_key=f"appeal:{appeal.id}:mod:{moderator.id}",
                    extra_payload={"appeal_id": appeal.id},
                )

        transaction.on_commit(_notify_moderators)
        return

    if instance.status == APPEAL_PENDING or instance.appellant_id is None:
        return

    def _notify_appellant():
        appeal = Appeal.objects.select_related("decision", "appellant").filter(pk=appeal_id).first()
        if appeal is None or appeal.appellant is None:
            return
        outcome = "overturned" if appeal.status == APPEAL_OVERTURNED else "upheld"
        create_and_dispatch_notification(
            recipient=appeal.appellant,
            actor=appeal.resolved_by,
            message=f"Your appeal on {appeal.decision.reference_code} was reviewed: decision {outcome}.",
            notif_type=NOTIFICATION_TYPE_SYSTEM,
            object_type=appeal.decision.target_type,
            object_id=appeal.decision.target_id,
            dedupe_key=f"appeal:{appeal.id}:resolved",
        )

    transaction.on_commit(_notify_appellant)
