# apps/moderation/services/audit.py

from apps.moderation.models import ModerationLog


def log_action(*, actor=None, action: str, target_type: str, target_id: int, reason: str = "", metadata=None):
    """Append a moderation audit entry (actor=None for system actions)."""
    return ModerationLog.objects.create(
        actor=actor,
        action=action,
        target_type=target_type,
        target_id=int(target_id),
        reason=reason or "",
        metadata=metadata or {},
    )
