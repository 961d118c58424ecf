from django.contrib import admin

from .models import Report, EscalationMark, Decision, Appeal, StrikeLedger, ModerationLog


class ReadOnlyAdminMixin:
    """Append-only records: viewable in admin, never edited there."""
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# Report Admin ----------------------------------------------------------
@admin.register(Report)
class ReportAdmin(admin.ModelAdmin):
    list_display = ("id", "target_type", "target_id", "reporter", "reason", "weight", "status", "created_at")
    list_filter = ("status", "target_type", "reason", "created_at")
    search_fields = ("reporter__username", "description")
    readonly_fields = (
        "reporter", "target_type", "target_id", "reason", "description",
        "weight", "created_at", "resolved_at", "resolved_by",
    )
    ordering = ("-created_at",)

    def has_add_permission(self, request):
        return False


# EscalationMark Admin --------------------------------------------------
@admin.register(EscalationMark)
class EscalationMarkAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ("target_type", "target_id", "action", "aggregate_at_trigger", "is_open", "created_at", "closed_at")
    list_filter = ("action", "is_open", "target_type")


# Decision Admin --------------------------------------------------------
@admin.register(Decision)
class DecisionAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ("reference_code", "target_type", "target_id", "decision", "issuer_kind", "issuer", "created_at")
    list_filter = ("decision", "issuer_kind", "target_type", "created_at")
    search_fields = ("reference_code", "reason")
    ordering = ("-created_at",)


# Appeal Admin ----------------------------------------------------------
@admin.register(Appeal)
class AppealAdmin(admin.ModelAdmin):
    list_display = ("id", "reference_code", "appellant", "status", "submitted_at", "resolved_by", "resolved_at")
    list_filter = ("status", "submitted_at")
    search_fields = ("decision__reference_code", "appellant__username", "justification")
    # Resolution goes through the console so the restoring decision is recorded
    readonly_fields = (
        "decision", "appellant", "justification", "status", "submitted_at",
        "resolved_at", "resolved_by", "resolution_note", "resolution_decision",
    )

    def reference_code(self, obj):
        return obj.decision.reference_code
    reference_code.short_description = "Reference Code"

    def has_add_permission(self, request):
        return False


# StrikeLedger Admin ----------------------------------------------------
@admin.register(StrikeLedger)
class StrikeLedgerAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ("account", "strike_count", "last_strike_at", "ceiling_reached_at", "reset_at")
    search_fields = ("account__username", "account__email")


# ModerationLog Admin ---------------------------------------------------
@admin.register(ModerationLog)
class ModerationLogAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ("action", "target_type", "target_id", "actor", "created_at")
    list_filter = ("action", "target_type", "created_at")
    search_fields = ("reason", "actor__username")
    ordering = ("-created_at",)
