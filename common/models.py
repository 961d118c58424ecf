# common/models.py

from django.db import models


# Status Record ----------------------------------------------------------------------------
class StatusRecordMixin(models.Model):
    """
    Visible lifecycle state shared by content and accounts.

    Concrete models declare their own `status` field (with their own choices);
    this mixin carries the bookkeeping that the moderation decision recorder
    writes alongside every status change.
    """
    status_reason = models.TextField(
        null=True,
        blank=True,
        verbose_name="Status Reason",
    )
    status_entered_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name="Status Entered At",
    )
    # Review deadline; only set while the target is under moderation
    moderation_due_at = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        verbose_name="Moderation Due At",
    )
    status_prior = models.CharField(
        max_length=20,
        null=True,
        blank=True,
        verbose_name="Previous Status",
    )
    status_decision = models.ForeignKey(
        "moderation.Decision",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="Status Decision",
        help_text="Decision that put the target in its current status",
    )

    class Meta:
        abstract = True
