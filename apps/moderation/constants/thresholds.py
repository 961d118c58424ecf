# apps/moderation/constants/thresholds.py

# ============================================================
# MODERATION THRESHOLDS – Policy Configuration
# Purpose:
#   - Map reporter trust to report weight
#   - Define when a target is rescanned / sent to human review
#   - Timing windows for SLA, deletion grace and retention
# Every key can be overridden via settings.MODERATION
# ============================================================

from django.conf import settings


# ------------------------------------------------------------
# Reporter trust score -> report weight (first match wins)
# ------------------------------------------------------------

TRUST_WEIGHT_STEPS = (
    (70, 1.0),
    (50, 0.7),
    (30, 0.4),
    (10, 0.2),
)
TRUST_WEIGHT_FLOOR = 0.0


# ------------------------------------------------------------
# Defaults
# ------------------------------------------------------------

DEFAULTS = {
    'RESCAN_THRESHOLD': 3.0,          # weighted sum that triggers an automated rescan
    'PRIORITY_THRESHOLD': 10.0,       # weighted sum that forces priority human review
    'MODERATION_SLA_HOURS': 48,       # review window before auto-restoration
    'STRIKE_CEILING': 10,             # strikes that force a blocked account
    'DELETION_GRACE_DAYS': 14,        # soft-deleted accounts are purged after this
    'SELF_FREEZE_LIMIT': 2,           # self-service freezes allowed ...
    'SELF_FREEZE_WINDOW_DAYS': 30,    # ... within this window
    'UNBLOCK_CODE_TTL_MINUTES': 10,   # identity re-verification code lifetime
    'REPORT_RETENTION_DAYS': 30,      # closed reports kept for this long
    'LOG_RETENTION_DAYS': 90,         # moderation log entries kept for this long
    'CLASSIFIER_URL': '',             # empty -> rescans are no-ops (fail-open)
    'CLASSIFIER_TIMEOUT_SECONDS': 5.0,
    'REPORT_RATE': '10/m',            # per reporter (user or ip)
    'SWEEP_BATCH_SIZE': 300,
}


def policy(key):
    """Read a moderation policy value (settings.MODERATION overrides DEFAULTS)."""
    overrides = getattr(settings, 'MODERATION', None) or {}
    if key in overrides:
        return overrides[key]
    return DEFAULTS[key]
