# apps/moderation/constants/reasons.py
# ============================================================
# REPORT REASONS (per target type)
# ============================================================

from apps.moderation.constants.targets import TARGET_CONTENT, TARGET_ACCOUNT

CONTENT_REASONS = {
    "spam": "Spam",
    "harassment": "Harassment or bullying",
    "hate": "Hate speech",
    "violence": "Violent content",
    "nudity": "Nudity or sexual content",
    "misinformation": "False information",
    "copyright": "Copyright infringement",
    "other": "Other",
}

ACCOUNT_REASONS = {
    "spam": "Spam account",
    "impersonation": "Impersonation",
    "harassment": "Harassment or bullying",
    "hate": "Hate speech",
    "scam": "Scam or fraud",
    "underage": "Underage user",
    "other": "Other",
}

REASON_MAP = {
    TARGET_CONTENT: CONTENT_REASONS,
    TARGET_ACCOUNT: ACCOUNT_REASONS,
}

# Free-text description limit (characters)
REPORT_DESCRIPTION_MAX_LENGTH = 500
