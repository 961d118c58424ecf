# apps/accounts/models.py

from datetime import timedelta

import bcrypt
from django.db import models
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.utils import timezone

from common.models import StatusRecordMixin
from apps.accounts.constants import ROLE_CHOICES, ROLE_USER, ROLE_ADMIN, ELEVATED_ROLES
from apps.moderation.constants.states import ACCOUNT_STATUS_CHOICES, ACTIVE
from apps.moderation.constants.thresholds import policy
from apps.moderation.services.reference_codes import generate_numeric_code


# USER & SUPERUSER Manager ------------------------------------------
class CustomUserManager(BaseUserManager):

    def create_user(self, email, password=None, username=None, **extra_fields):
        # Ensure email is provided
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email)
        username = username or email.split('@')[0]

        user = self.model(email=email, username=username, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, username=None, **extra_fields):
        extra_fields.setdefault('role', ROLE_ADMIN)
        extra_fields.setdefault('trust_score', 100)

        user = self.create_user(email=email, password=password, username=username, **extra_fields)

        # Set additional attributes for superuser
        user.is_admin = True
        user.is_superuser = True
        user.save(using=self._db)
        return user


# CUSTOM USER Model -------------------------------------------------
class CustomUser(AbstractBaseUser, PermissionsMixin, StatusRecordMixin):
    id = models.BigAutoField(primary_key=True)
    email = models.EmailField(max_length=254, unique=True, verbose_name='Email')
    username = models.CharField(max_length=40, unique=True, verbose_name='Username')
    name = models.CharField(max_length=80, null=True, blank=True, verbose_name='Name')
    bio = models.TextField(null=True, blank=True, verbose_name='Bio')
    register_date = models.DateTimeField(default=timezone.now, verbose_name='Register Date')

    is_active = models.BooleanField(default=True, verbose_name='Is Active')
    is_admin = models.BooleanField(default=False, verbose_name='Is Admin')
    role = models.CharField(max_length=16, choices=ROLE_CHOICES, default=ROLE_USER, verbose_name='Role')

    # Reporter trust (0-100); drives report weight
    trust_score = models.PositiveSmallIntegerField(default=0, verbose_name='Trust Score')

    # Account lifecycle (only the moderation decision recorder writes these)
    status = models.CharField(max_length=20, choices=ACCOUNT_STATUS_CHOICES, default=ACTIVE, db_index=True, verbose_name='Account Status')
    reactivated_at = models.DateTimeField(null=True, blank=True, verbose_name='Reactivated Date')

    # Unblock (identity re-verification) --------------------------------------
    unblock_password_verified_at = models.DateTimeField(null=True, blank=True)
    unblock_code = models.CharField(max_length=60, null=True, blank=True, verbose_name="Unblock Code")
    unblock_code_expiry = models.DateTimeField(null=True, blank=True, verbose_name="Unblock Code Expiry")

    def generate_unblock_code(self):
        code = generate_numeric_code(6)
        hashed = bcrypt.hashpw(code.encode('utf-8'), bcrypt.gensalt())
        self.unblock_code = hashed.decode('utf-8')
        self.unblock_code_expiry = timezone.now() + timedelta(minutes=int(policy('UNBLOCK_CODE_TTL_MINUTES')))
        self.save(update_fields=['unblock_code', 'unblock_code_expiry'])
        return code

    def validate_unblock_code(self, entered_code):
        if not self.unblock_code or not self.unblock_code_expiry:
            return "no_token"
        if self.unblock_code_expiry < timezone.now():
            return "expired"
        if bcrypt.checkpw(str(entered_code).encode('utf-8'), self.unblock_code.encode('utf-8')):
            return "valid"
        return "invalid"

    def clear_unblock_challenge(self):
        self.unblock_code = None
        self.unblock_code_expiry = None
        self.unblock_password_verified_at = None
        self.save(update_fields=['unblock_code', 'unblock_code_expiry', 'unblock_password_verified_at'])

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []
    objects = CustomUserManager()

    class Meta:
        verbose_name = "Custom User"
        verbose_name_plural = "Custom Users"

    @property
    def is_staff(self):
        return self.is_admin

    @property
    def has_elevated_trust(self) -> bool:
        return bool(self.is_admin or self.is_superuser or self.role in ELEVATED_ROLES)

    def __str__(self):
        return f'{self.username}'

    def get_absolute_url(self):
        return f"/{self.username}"
