# apps/moderation/services/immunity.py

from common.permissions import is_moderator
from apps.moderation.models import Decision
from apps.moderation.constants.states import DECISION_APPROVED, DECISION_RESTORED, ISSUER_MODERATOR
from apps.moderation.services.targets import get_owner


# Human rulings that keep an earlier approval in force
CLEARING_DECISIONS = (DECISION_APPROVED, DECISION_RESTORED)


def has_human_approval(target_type: str, target_id: int) -> bool:
    """
    A moderator approved the target and no later moderator ruling went
    against it. Owner and system decisions never lift the approval.
    """
    human = Decision.objects.for_target(target_type, target_id).filter(issuer_kind=ISSUER_MODERATOR)
    approval = human.filter(decision=DECISION_APPROVED).latest_first().first()
    if approval is None:
        return False
    return not (
        human
        .filter(id__gt=approval.id)
        .exclude(decision__in=CLEARING_DECISIONS)
        .exists()
    )


def is_immune(target_type: str, target_obj) -> bool:
    """
    Targets that never escalate:
    - owned by an elevated-trust account (staff / admin / moderator)
    - already cleared by a human moderator
    """
    owner = get_owner(target_type, target_obj)
    if owner is not None and is_moderator(owner):
        return True
    return has_human_approval(target_type, target_obj.pk)
