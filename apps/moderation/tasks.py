# apps/moderation/tasks.py

import logging
from datetime import timedelta

from celery import shared_task
from django.utils import timezone

from apps.moderation.models import ModerationLog, Report
from apps.moderation.constants.targets import TARGET_CONTENT, TARGET_ACCOUNT
from apps.moderation.constants.thresholds import policy
from apps.moderation.constants.states import (
    MODERATION,
    REPORT_RESOLVED,
    REPORT_DISMISSED,
    DECISION_FLAGGED,
    ISSUER_SYSTEM,
)
from apps.moderation.exceptions import InvalidTarget, InvalidTransition
from apps.moderation.services.classifier import build_payload, classify_safely
from apps.moderation.services.decision_recorder import record_decision
from apps.moderation.services.immunity import is_immune
from apps.moderation.services.lifecycle import is_open
from apps.moderation.services.status import restore_if_overdue
from apps.moderation.services.targets import get_target_model, resolve_target

logger = logging.getLogger(__name__)


# Rescan (classifier second opinion) ------------------------------------------------------
@shared_task(ignore_result=True)
def rescan_target(target_type, target_id):
    """
    Classify the target again. An unsafe verdict moves an open target into
    moderation; a safe (or failed) verdict leaves it alone.
    """
    try:
        target = resolve_target(target_type, target_id)
    except InvalidTarget:
        logger.info("[Moderation][Rescan] target gone %s:%s", target_type, target_id)
        return {"target": f"{target_type}:{target_id}", "result": "missing"}

    verdict = classify_safely(**build_payload(target_type, target))
    if verdict.safe:
        return {"target": f"{target_type}:{target_id}", "result": "safe"}

    reason = "Automated rescan flagged this for review"
    if verdict.category:
        reason += f" ({verdict.category})"

    try:
        decision = record_decision(
            target_type=target_type,
            target_id=target.pk,
            decision=DECISION_FLAGGED,
            reason=reason + ".",
            issuer_kind=ISSUER_SYSTEM,
            # A human ruling or another escalation may have landed meanwhile
            precondition=lambda locked: is_open(target_type, locked) and not is_immune(target_type, locked),
        )
    except (InvalidTarget, InvalidTransition) as e:
        logger.info("[Moderation][Rescan] flag not applied %s:%s: %s", target_type, target_id, e)
        return {"target": f"{target_type}:{target_id}", "result": "skipped"}
    except Exception as e:
        # Rolled back; the target keeps its current status
        logger.error("[Moderation][Rescan] flag failed %s:%s err=%s", target_type, target_id, e, exc_info=True)
        return {"target": f"{target_type}:{target_id}", "result": "error"}

    if decision is None:
        return {"target": f"{target_type}:{target_id}", "result": "skipped"}
    return {"target": f"{target_type}:{target_id}", "result": "flagged", "reference_code": decision.reference_code}


# SLA sweep -------------------------------------------------------------------------------
@shared_task
def restore_overdue_moderation():
    """
    Restore every target whose review window elapsed without a human
    decision. Each restore re-checks the deadline under the row lock.
    """
    now = timezone.now()
    batch_size = int(policy("SWEEP_BATCH_SIZE"))
    checked = restored = 0

    for target_type in (TARGET_CONTENT, TARGET_ACCOUNT):
        model = get_target_model(target_type)
        ids = list(
            model.objects
            .filter(status=MODERATION, moderation_due_at__lte=now)
            .order_by("moderation_due_at")
            .values_list("id", flat=True)[:batch_size]
        )
        for target_id in ids:
            checked += 1
            try:
                if restore_if_overdue(target_type, target_id):
                    restored += 1
            except Exception as e:
                logger.warning("[Moderation][SLA] restore failed %s:%s err=%s", target_type, target_id, e, exc_info=True)

    if checked:
        logger.info("[Moderation][SLA] restored %s/%s overdue targets", restored, checked)
    return {"checked": checked, "restored": restored}


# Retention -------------------------------------------------------------------------------
@shared_task
def purge_closed_reports():
    cutoff = timezone.now() - timedelta(days=int(policy("REPORT_RETENTION_DAYS")))
    deleted, _ = Report.objects.filter(
        status__in=[REPORT_RESOLVED, REPORT_DISMISSED],
        resolved_at__lt=cutoff,
    ).delete()
    logger.info("[Moderation][Task] purged %s closed reports", deleted)
    return {"purged": deleted}


@shared_task
def purge_moderation_logs():
    cutoff = timezone.now() - timedelta(days=int(policy("LOG_RETENTION_DAYS")))
    deleted, _ = ModerationLog.objects.filter(created_at__lt=cutoff).delete()
    logger.info("[Moderation][Task] purged %s moderation log entries", deleted)
    return {"purged": deleted}
