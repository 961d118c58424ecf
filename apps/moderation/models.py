# apps/moderation/models.py

from django.db import models
from django.db.models import Q
from django.conf import settings

from apps.moderation.constants.targets import TARGET_TYPE_CHOICES
from apps.moderation.constants.states import (
    REPORT_STATUS_CHOICES,
    REPORT_PENDING,
    ESCALATION_ACTION_CHOICES,
    DECISION_CHOICES,
    ISSUER_KIND_CHOICES,
    ISSUER_MODERATOR,
    APPEAL_STATUS_CHOICES,
    APPEAL_PENDING,
)


# REPORT Model ----------------------------------------------------------------------------
class Report(models.Model):
    """
    Append-only record of who reported what, why, and with what trust weight.
    Only the moderation workflow moves a report out of `pending`.
    """
    id = models.BigAutoField(primary_key=True)

    reporter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="moderation_reports",
        verbose_name="Reporter",
    )

    target_type = models.CharField(
        max_length=16,
        choices=TARGET_TYPE_CHOICES,
        verbose_name="Target Type",
    )
    target_id = models.PositiveBigIntegerField(verbose_name="Target ID")

    reason = models.CharField(max_length=32, verbose_name="Reason")
    description = models.TextField(
        null=True,
        blank=True,
        verbose_name="Additional Description",
    )

    # Frozen at submission time from the reporter's trust score
    weight = models.FloatField(default=0.0, verbose_name="Report Weight")

    status = models.CharField(
        max_length=16,
        choices=REPORT_STATUS_CHOICES,
        default=REPORT_PENDING,
        verbose_name="Report Status",
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name="Created At")
    resolved_at = models.DateTimeField(null=True, blank=True, verbose_name="Resolved At")
    resolved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="moderation_reports_resolved",
        verbose_name="Resolved By",
    )

    class Meta:
        verbose_name = "Report"
        verbose_name_plural = "Reports"
        constraints = [
            # One pending report per reporter per target
            models.UniqueConstraint(
                fields=["reporter", "target_type", "target_id"],
                condition=Q(status=REPORT_PENDING),
                name="uniq_pending_report_per_reporter",
            ),
        ]
        indexes = [
            models.Index(fields=["target_type", "target_id", "status"], name="report_target_status_idx"),
            models.Index(fields=["status", "created_at"], name="report_status_created_idx"),
        ]

    def __str__(self):
        return f"Report #{self.id} [{self.target_type}:{self.target_id}] by {self.reporter_id} ({self.status})"


# ESCALATION MARK Model -------------------------------------------------------------------
class EscalationMark(models.Model):
    """
    Proof that a threshold already fired for the current report wave.
    At most one open mark per (target, action); closed when a human decision
    resolves the wave.
    """
    id = models.BigAutoField(primary_key=True)

    target_type = models.CharField(max_length=16, choices=TARGET_TYPE_CHOICES)
    target_id = models.PositiveBigIntegerField()
    action = models.CharField(max_length=20, choices=ESCALATION_ACTION_CHOICES)

    aggregate_at_trigger = models.FloatField(default=0.0, verbose_name="Weighted Sum At Trigger")
    is_open = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    closed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = "Escalation Mark"
        verbose_name_plural = "Escalation Marks"
        constraints = [
            models.UniqueConstraint(
                fields=["target_type", "target_id", "action"],
                condition=Q(is_open=True),
                name="uniq_open_escalation_mark",
            ),
        ]
        indexes = [
            models.Index(fields=["target_type", "target_id", "is_open"], name="escmark_target_open_idx"),
        ]

    def __str__(self):
        state = "open" if self.is_open else "closed"
        return f"Escalation({self.action}) [{self.target_type}:{self.target_id}] {state}"


# DECISION Model --------------------------------------------------------------------------
class DecisionQuerySet(models.QuerySet):
    def for_target(self, target_type: str, target_id: int):
        return self.filter(target_type=target_type, target_id=target_id)

    def latest_first(self):
        return self.order_by("-created_at", "-id")


class Decision(models.Model):
    """
    Immutable moderation ruling. The reference code is the only handle an
    end user has to open an appeal.
    """
    id = models.BigAutoField(primary_key=True)

    target_type = models.CharField(max_length=16, choices=TARGET_TYPE_CHOICES)
    target_id = models.PositiveBigIntegerField()

    decision = models.CharField(max_length=16, choices=DECISION_CHOICES)
    reason = models.TextField(blank=True, default="")

    issuer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="moderation_decisions_issued",
        verbose_name="Issued By",
    )
    issuer_kind = models.CharField(
        max_length=16,
        choices=ISSUER_KIND_CHOICES,
        default=ISSUER_MODERATOR,
    )

    reference_code = models.CharField(
        max_length=6,
        unique=True,
        verbose_name="Reference Code",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    objects = DecisionQuerySet.as_manager()

    class Meta:
        verbose_name = "Decision"
        verbose_name_plural = "Decisions"
        indexes = [
            models.Index(fields=["target_type", "target_id", "created_at"], name="decision_target_created_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Decisions are immutable once recorded.")
        super().save(*args, **kwargs)

    @property
    def is_human(self) -> bool:
        return self.issuer_kind == ISSUER_MODERATOR

    def __str__(self):
        return f"Decision {self.reference_code}: {self.decision} [{self.target_type}:{self.target_id}]"


# APPEAL Model ----------------------------------------------------------------------------
class Appeal(models.Model):
    """One appeal per decision; the resolution is final."""
    id = models.BigAutoField(primary_key=True)

    decision = models.OneToOneField(
        Decision,
        on_delete=models.CASCADE,
        related_name="appeal",
        verbose_name="Appealed Decision",
    )
    appellant = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="moderation_appeals",
    )
    justification = models.TextField(verbose_name="Justification")

    status = models.CharField(
        max_length=16,
        choices=APPEAL_STATUS_CHOICES,
        default=APPEAL_PENDING,
    )
    submitted_at = models.DateTimeField(auto_now_add=True)

    resolved_at = models.DateTimeField(null=True, blank=True)
    resolved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="moderation_appeals_resolved",
        limit_choices_to={"is_admin": True},
    )
    resolution_note = models.TextField(null=True, blank=True)
    resolution_decision = models.OneToOneField(
        Decision,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="resolving_appeal",
        help_text="Restoring decision recorded when the appeal was overturned",
    )

    class Meta:
        verbose_name = "Appeal"
        verbose_name_plural = "Appeals"
        indexes = [
            models.Index(fields=["status", "submitted_at"], name="appeal_status_submitted_idx"),
        ]

    def __str__(self):
        return f"Appeal on {self.decision.reference_code} ({self.status})"


# STRIKE LEDGER Model ---------------------------------------------------------------------
class StrikeLedger(models.Model):
    id = models.BigAutoField(primary_key=True)

    account = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="strike_ledger",
    )
    strike_count = models.PositiveIntegerField(default=0)
    last_strike_at = models.DateTimeField(null=True, blank=True)
    last_reason = models.TextField(null=True, blank=True)

    ceiling_reached_at = models.DateTimeField(null=True, blank=True)
    reset_at = models.DateTimeField(null=True, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Strike Ledger"
        verbose_name_plural = "Strike Ledgers"

    def __str__(self):
        return f"Strikes(account={self.account_id}, count={self.strike_count})"


# MODERATION LOG Model --------------------------------------------------------------------
class ModerationLog(models.Model):
    """Append-only audit of moderator and system actions."""
    id = models.BigAutoField(primary_key=True)

    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="moderation_log_entries",
        help_text="Moderator / owner (null for system actions).",
    )
    action = models.CharField(max_length=40)
    target_type = models.CharField(max_length=16, choices=TARGET_TYPE_CHOICES)
    target_id = models.PositiveBigIntegerField()
    reason = models.TextField(null=True, blank=True)
    metadata = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Moderation Log"
        verbose_name_plural = "Moderation Logs"
        indexes = [
            models.Index(fields=["created_at"], name="modlog_created_idx"),
            models.Index(fields=["target_type", "target_id"], name="modlog_target_idx"),
        ]

    def __str__(self):
        return f"{self.action} [{self.target_type}:{self.target_id}] by {self.actor_id or 'system'}"
