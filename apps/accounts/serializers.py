# apps/accounts/serializers.py

from rest_framework import serializers

from apps.moderation.constants.states import ACCOUNT_STATUS_CHOICES


# ACCOUNT STATUS Serializer ------------------------------------------------------------------
class AccountStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ACCOUNT_STATUS_CHOICES)
    reason = serializers.CharField(allow_null=True, required=False)
    reference_code = serializers.CharField(allow_null=True, required=False)
    due_at = serializers.DateTimeField(allow_null=True, required=False)
    entered_at = serializers.DateTimeField(allow_null=True, required=False)
    deletion_deadline = serializers.DateTimeField(allow_null=True, required=False)
    self_freezes_remaining = serializers.IntegerField(required=False)


# FREEZE / DELETE Serializer -----------------------------------------------------------------
class AccountReasonSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, max_length=500)


# UNBLOCK VERIFY Serializer ------------------------------------------------------------------
class UnblockVerifySerializer(serializers.Serializer):
    ACTION_VERIFY_PASSWORD = "verify_password"
    ACTION_VERIFY_CODE = "verify_code"

    action = serializers.ChoiceField(choices=[ACTION_VERIFY_PASSWORD, ACTION_VERIFY_CODE])
    password = serializers.CharField(required=False, write_only=True, allow_blank=True)
    code = serializers.RegexField(r"^\d{6}$", required=False)

    def validate(self, attrs):
        if attrs["action"] == self.ACTION_VERIFY_PASSWORD and not attrs.get("password"):
            raise serializers.ValidationError({"password": "Password is required."})
        if attrs["action"] == self.ACTION_VERIFY_CODE and not attrs.get("code"):
            raise serializers.ValidationError({"code": "Verification code is required."})
        return attrs


# DECISION RESULT Serializer -----------------------------------------------------------------
class DecisionResultSerializer(serializers.Serializer):
    status = serializers.CharField()
    decision = serializers.CharField()
    reference_code = serializers.CharField()
