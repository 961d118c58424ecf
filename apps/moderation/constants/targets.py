# apps/moderation/constants/targets.py
# ============================================================
# MODERATION TARGET TYPES
# ============================================================

TARGET_CONTENT = 'content'
TARGET_ACCOUNT = 'account'

TARGET_TYPE_CHOICES = [
    (TARGET_CONTENT, 'Content'),
    (TARGET_ACCOUNT, 'Account'),
]

# Concrete model behind each target type ("app_label.ModelName")
TARGET_MODEL_MAP = {
    TARGET_CONTENT: 'posts.Post',
    TARGET_ACCOUNT: 'accounts.CustomUser',
}
