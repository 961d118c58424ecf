# apps/moderation/serializers.py

from rest_framework import serializers

from apps.moderation.models import Appeal, Decision, ModerationLog, StrikeLedger
from apps.moderation.constants.targets import TARGET_TYPE_CHOICES
from apps.moderation.constants.reasons import REASON_MAP, REPORT_DESCRIPTION_MAX_LENGTH
from apps.moderation.services.console import CONSOLE_ACTIONS, REPORT_ACTIONS


# Report Create Serializer -----------------------------------------------------------------
class ReportCreateSerializer(serializers.Serializer):
    target_type = serializers.ChoiceField(choices=TARGET_TYPE_CHOICES)
    target_id = serializers.IntegerField(min_value=1)
    reason = serializers.CharField(max_length=32)
    description = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        max_length=REPORT_DESCRIPTION_MAX_LENGTH,
    )

    def validate(self, attrs):
        reasons = REASON_MAP.get(attrs["target_type"], {})
        if attrs["reason"] not in reasons:
            raise serializers.ValidationError({"reason": "Unknown reason for this target type."})
        return attrs


# Appeal Serializers -----------------------------------------------------------------------
class AppealCreateSerializer(serializers.Serializer):
    reference_code = serializers.RegexField(r"^\d{6}$", error_messages={"invalid": "Reference code must be 6 digits."})
    justification = serializers.CharField(max_length=2000, trim_whitespace=True)


class AppealResolveSerializer(serializers.Serializer):
    overturn = serializers.BooleanField()
    note = serializers.CharField(required=False, allow_blank=True, max_length=2000, default="")


class DecisionSerializer(serializers.ModelSerializer):
    issuer = serializers.ReadOnlyField(source="issuer.username", default=None)

    class Meta:
        model = Decision
        fields = [
            "id", "target_type", "target_id", "decision", "reason",
            "issuer", "issuer_kind", "reference_code", "created_at",
        ]
        read_only_fields = fields


class AppealSerializer(serializers.ModelSerializer):
    decision = DecisionSerializer(read_only=True)
    appellant = serializers.ReadOnlyField(source="appellant.username", default=None)
    resolved_by = serializers.ReadOnlyField(source="resolved_by.username", default=None)
    resolution_reference_code = serializers.ReadOnlyField(source="resolution_decision.reference_code", default=None)

    class Meta:
        model = Appeal
        fields = [
            "id", "decision", "appellant", "justification", "status",
            "submitted_at", "resolved_at", "resolved_by", "resolution_note",
            "resolution_reference_code",
        ]
        read_only_fields = fields


# Console Serializers ----------------------------------------------------------------------
class ModeratorActionSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=CONSOLE_ACTIONS)
    target_type = serializers.ChoiceField(choices=TARGET_TYPE_CHOICES, required=False)
    target_id = serializers.IntegerField(min_value=1, required=False)
    report_id = serializers.IntegerField(min_value=1, required=False)
    reason = serializers.CharField(required=False, allow_blank=True, max_length=2000, default="")

    def validate(self, attrs):
        if attrs["action"] in REPORT_ACTIONS:
            if not attrs.get("report_id"):
                raise serializers.ValidationError({"report_id": "Required for report actions."})
        elif not attrs.get("target_type") or not attrs.get("target_id"):
            raise serializers.ValidationError({"target": "target_type and target_id are required."})
        return attrs


class StrikeCreateSerializer(serializers.Serializer):
    account_id = serializers.IntegerField(min_value=1)
    reason = serializers.CharField(max_length=2000)


class StrikeLedgerSerializer(serializers.ModelSerializer):
    class Meta:
        model = StrikeLedger
        fields = ["account", "strike_count", "last_strike_at", "last_reason", "ceiling_reached_at", "reset_at"]
        read_only_fields = fields


class ModerationLogSerializer(serializers.ModelSerializer):
    actor = serializers.ReadOnlyField(source="actor.username", default=None)

    class Meta:
        model = ModerationLog
        fields = ["id", "actor", "action", "target_type", "target_id", "reason", "metadata", "created_at"]
        read_only_fields = fields


class ReportQueueItemSerializer(serializers.Serializer):
    target_type = serializers.CharField()
    target_id = serializers.IntegerField()
    weighted_sum = serializers.FloatField()
    report_count = serializers.IntegerField()
    last_reported_at = serializers.DateTimeField()


class ModerationQueueItemSerializer(serializers.Serializer):
    target_type = serializers.CharField()
    target_id = serializers.IntegerField()
    status_reason = serializers.CharField(allow_null=True)
    moderation_due_at = serializers.DateTimeField(allow_null=True)
    reference_code = serializers.CharField(allow_null=True)


class TargetStatusSerializer(serializers.Serializer):
    target_type = serializers.CharField()
    target_id = serializers.IntegerField()
    status = serializers.CharField()
    reason = serializers.CharField(required=False, allow_null=True)
    reference_code = serializers.CharField(required=False, allow_null=True)
    due_at = serializers.DateTimeField(required=False, allow_null=True)
    entered_at = serializers.DateTimeField(required=False, allow_null=True)
