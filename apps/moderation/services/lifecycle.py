# apps/moderation/services/lifecycle.py
# ============================================================
# Status lifecycle: decision -> status mapping, legal transitions,
# visibility, and the 48h review window
# ============================================================

from datetime import timedelta
from typing import Optional

from django.utils import timezone

from common.permissions import is_moderator
from apps.moderation.constants.targets import TARGET_CONTENT, TARGET_ACCOUNT
from apps.moderation.constants.thresholds import policy
from apps.moderation.constants.states import (
    PUBLISHED, MODERATION, REMOVED,
    ACTIVE, FROZEN, BLOCKED, DELETED,
    DECISION_APPROVED, DECISION_REMOVED, DECISION_FLAGGED, DECISION_MODERATION,
    DECISION_FROZEN, DECISION_BLOCKED, DECISION_DELETED, DECISION_RESTORED,
)
from apps.moderation.exceptions import InvalidTransition
from apps.moderation.services.targets import get_owner_id


# Transition contexts (who/what authorises a guarded move)
VIA_APPEAL = "appeal"
VIA_REVERIFICATION = "reverification"
VIA_REACTIVATION = "reactivation"


# Fully-open state per target type
OPEN_STATUS = {
    TARGET_CONTENT: PUBLISHED,
    TARGET_ACCOUNT: ACTIVE,
}

DECISION_TO_STATUS = {
    TARGET_CONTENT: {
        DECISION_APPROVED: PUBLISHED,
        DECISION_RESTORED: PUBLISHED,
        DECISION_REMOVED: REMOVED,
        DECISION_FLAGGED: MODERATION,
        DECISION_MODERATION: MODERATION,
    },
    TARGET_ACCOUNT: {
        DECISION_APPROVED: ACTIVE,
        DECISION_RESTORED: ACTIVE,
        DECISION_FLAGGED: MODERATION,
        DECISION_MODERATION: MODERATION,
        DECISION_REMOVED: BLOCKED,
        DECISION_BLOCKED: BLOCKED,
        DECISION_FROZEN: FROZEN,
        DECISION_DELETED: DELETED,
    },
}

# current status -> allowed next statuses
TRANSITIONS = {
    TARGET_CONTENT: {
        PUBLISHED: {PUBLISHED, MODERATION, REMOVED},
        MODERATION: {MODERATION, PUBLISHED, REMOVED},
        REMOVED: {PUBLISHED},
    },
    TARGET_ACCOUNT: {
        ACTIVE: {ACTIVE, MODERATION, FROZEN, BLOCKED, DELETED},
        MODERATION: {MODERATION, ACTIVE, BLOCKED, DELETED},
        FROZEN: {ACTIVE, DELETED},
        BLOCKED: {ACTIVE, DELETED},
        # Reactivation returns to the pre-deletion state; sanctions and reviews survive it
        DELETED: {ACTIVE, MODERATION, BLOCKED},
    },
}

# Moves that need a specific authorising context
GUARDED_TRANSITIONS = {
    (TARGET_CONTENT, REMOVED, PUBLISHED): {VIA_APPEAL},
    (TARGET_ACCOUNT, BLOCKED, ACTIVE): {VIA_APPEAL, VIA_REVERIFICATION},
    (TARGET_ACCOUNT, DELETED, ACTIVE): {VIA_REACTIVATION},
    (TARGET_ACCOUNT, DELETED, MODERATION): {VIA_REACTIVATION},
    (TARGET_ACCOUNT, DELETED, BLOCKED): {VIA_REACTIVATION},
}


# Mapping / validation ---------------------------------------------------------------------
def status_for_decision(target_type: str, decision: str) -> str:
    status = DECISION_TO_STATUS.get(target_type, {}).get(decision)
    if status is None:
        raise InvalidTransition(f"Decision '{decision}' does not apply to {target_type} targets.")
    return status


def assert_transition(target_type: str, current: str, new: str, *, via: Optional[str] = None):
    allowed = TRANSITIONS.get(target_type, {}).get(current, set())
    if new not in allowed:
        raise InvalidTransition(f"Cannot move {target_type} from '{current}' to '{new}'.")

    required = GUARDED_TRANSITIONS.get((target_type, current, new))
    if required and via not in required:
        raise InvalidTransition(f"Moving {target_type} from '{current}' to '{new}' requires {' or '.join(sorted(required))}.")


def due_at_for(status: str, entered_at=None):
    """Only `moderation` carries a review deadline."""
    if status != MODERATION:
        return None
    entered_at = entered_at or timezone.now()
    return entered_at + timedelta(hours=int(policy("MODERATION_SLA_HOURS")))


# Visibility -------------------------------------------------------------------------------
def is_open(target_type: str, target_obj) -> bool:
    return getattr(target_obj, "status", None) == OPEN_STATUS[target_type]


def can_view(target_type: str, target_obj, viewer) -> bool:
    """
    Everyone sees fully-open targets. Otherwise only the owner
    (who must still see why) and moderators.
    """
    if target_obj is None:
        return False
    if is_open(target_type, target_obj):
        return True
    if not viewer or not getattr(viewer, "is_authenticated", False):
        return False
    if get_owner_id(target_type, target_obj) == viewer.id:
        return True
    return is_moderator(viewer)


def is_overdue(target_obj, now=None) -> bool:
    now = now or timezone.now()
    due = getattr(target_obj, "moderation_due_at", None)
    return getattr(target_obj, "status", None) == MODERATION and due is not None and due <= now
