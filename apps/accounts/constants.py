# apps/accounts/constants.py

ROLE_USER = 'user'
ROLE_MODERATOR = 'moderator'
ROLE_ADMIN = 'admin'

ROLE_CHOICES = [
    (ROLE_USER, 'User'),
    (ROLE_MODERATOR, 'Moderator'),
    (ROLE_ADMIN, 'Admin'),
]

# Roles that can act on the moderation console and are immune to escalation
ELEVATED_ROLES = (ROLE_MODERATOR, ROLE_ADMIN)
