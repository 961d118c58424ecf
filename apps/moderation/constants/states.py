# apps/moderation/constants/states.py
# ============================================================
# REPORT / STATUS / DECISION / APPEAL STATES
# ============================================================

# Report lifecycle
REPORT_PENDING = 'pending'
REPORT_RESOLVED = 'resolved'
REPORT_DISMISSED = 'dismissed'

REPORT_STATUS_CHOICES = [
    (REPORT_PENDING, 'Pending'),
    (REPORT_RESOLVED, 'Resolved'),
    (REPORT_DISMISSED, 'Dismissed'),
]

# Content status
PUBLISHED = 'published'
MODERATION = 'moderation'
REMOVED = 'removed'

CONTENT_STATUS_CHOICES = [
    (PUBLISHED, 'Published'),
    (MODERATION, 'Under Moderation'),
    (REMOVED, 'Removed'),
]

# Account status (MODERATION is shared with content)
ACTIVE = 'active'
FROZEN = 'frozen'
BLOCKED = 'blocked'
DELETED = 'deleted'

ACCOUNT_STATUS_CHOICES = [
    (ACTIVE, 'Active'),
    (MODERATION, 'Under Moderation'),
    (FROZEN, 'Frozen'),
    (BLOCKED, 'Blocked'),
    (DELETED, 'Deleted'),
]

# Escalation actions
ACTION_NONE = 'none'
ACTION_RESCAN = 'rescan'
ACTION_PRIORITY_QUEUE = 'priority_queue'

ESCALATION_ACTION_CHOICES = [
    (ACTION_RESCAN, 'Automated Rescan'),
    (ACTION_PRIORITY_QUEUE, 'Priority Human Review'),
]

# Decisions
DECISION_APPROVED = 'approved'
DECISION_REMOVED = 'removed'
DECISION_FLAGGED = 'flagged'
DECISION_MODERATION = 'moderation'
DECISION_FROZEN = 'frozen'
DECISION_BLOCKED = 'blocked'
DECISION_DELETED = 'deleted'
DECISION_RESTORED = 'restored'

DECISION_CHOICES = [
    (DECISION_APPROVED, 'Approved'),
    (DECISION_REMOVED, 'Removed'),
    (DECISION_FLAGGED, 'Flagged'),
    (DECISION_MODERATION, 'Sent to Moderation'),
    (DECISION_FROZEN, 'Frozen'),
    (DECISION_BLOCKED, 'Blocked'),
    (DECISION_DELETED, 'Deleted'),
    (DECISION_RESTORED, 'Restored'),
]

# Who issued a decision
ISSUER_MODERATOR = 'moderator'
ISSUER_SYSTEM = 'system'
ISSUER_OWNER = 'owner'

ISSUER_KIND_CHOICES = [
    (ISSUER_MODERATOR, 'Moderator'),
    (ISSUER_SYSTEM, 'System'),
    (ISSUER_OWNER, 'Owner'),
]

# Appeals
APPEAL_PENDING = 'pending'
APPEAL_UPHELD = 'upheld'
APPEAL_OVERTURNED = 'overturned'

APPEAL_STATUS_CHOICES = [
    (APPEAL_PENDING, 'Pending'),
    (APPEAL_UPHELD, 'Upheld'),
    (APPEAL_OVERTURNED, 'Overturned'),
]
