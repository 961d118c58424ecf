# apps/accounts/tasks.py

from celery import shared_task
from django.utils import timezone
from datetime import timedelta
import logging
from django.contrib.auth import get_user_model

from apps.moderation.constants.states import DELETED
from apps.moderation.constants.thresholds import policy

CustomUser = get_user_model()
logger = logging.getLogger(__name__)


# Purge soft-deleted accounts -----------------------------------------------------
@shared_task
def purge_deleted_accounts():
    """
    Hard-delete accounts that stayed `deleted` past the grace window.
    Batches of SWEEP_BATCH_SIZE; one failure never stops the batch.
    """
    cutoff = timezone.now() - timedelta(days=int(policy("DELETION_GRACE_DAYS")))
    batch_size = int(policy("SWEEP_BATCH_SIZE"))

    batch = list(
        CustomUser.objects
        .filter(status=DELETED, status_entered_at__lte=cutoff)
        .order_by("status_entered_at")
        .values_list("id", flat=True)[:batch_size]
    )
    if not batch:
        return {"checked": 0, "purged": 0}

    purged = 0
    for user_id in batch:
        try:
            # Re-check: the owner may have reactivated since the batch was read
            deleted, _ = CustomUser.objects.filter(
                pk=user_id,
                status=DELETED,
                status_entered_at__lte=cutoff,
            ).delete()
            if deleted:
                purged += 1
        except Exception as e:
            logger.warning("[Accounts][Task] purge failed user=%s err=%s", user_id, e, exc_info=True)

    logger.info("[Accounts][Task] purged %s/%s deleted accounts", purged, len(batch))
    return {"checked": len(batch), "purged": purged}
