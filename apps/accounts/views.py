# apps/accounts/views.py

import logging

from django.utils.decorators import method_decorator
from django_ratelimit.decorators import ratelimit
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.serializers import (
    AccountStatusSerializer,
    AccountReasonSerializer,
    UnblockVerifySerializer,
    DecisionResultSerializer,
)
from apps.accounts.services.self_service import (
    freeze_account,
    unfreeze_account,
    delete_account,
    reactivate_account,
    start_unblock_verification,
    complete_unblock_verification,
    recent_self_freezes,
    deletion_deadline,
)
from apps.moderation.constants.targets import TARGET_ACCOUNT
from apps.moderation.constants.thresholds import policy
from apps.moderation.services.status import get_status

logger = logging.getLogger(__name__)


def _decision_response(user, decision, http_status=status.HTTP_200_OK):
    user.refresh_from_db()
    data = DecisionResultSerializer({
        "status": user.status,
        "decision": decision.decision,
        "reference_code": decision.reference_code,
    }).data
    return Response(data, status=http_status)


# Account Moderation ViewSet ---------------------------------------------------------------
class AccountModerationViewSet(viewsets.ViewSet):
    """
    Self-service account lifecycle. Frozen / blocked / deleted users can still
    authenticate and use these endpoints to see why and to recover.
    """
    permission_classes = [IsAuthenticated]

    @action(detail=False, methods=["get"], url_path="status")
    def account_status(self, request):
        user = request.user
        data = get_status(target_type=TARGET_ACCOUNT, target_id=user.pk, viewer=user)
        user.refresh_from_db()
        data["deletion_deadline"] = deletion_deadline(user)
        data["self_freezes_remaining"] = max(0, int(policy("SELF_FREEZE_LIMIT")) - recent_self_freezes(user))
        return Response(AccountStatusSerializer(data).data)

    @action(detail=False, methods=["post"], url_path="freeze")
    def freeze(self, request):
        serializer = AccountReasonSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        decision = freeze_account(user=request.user, reason=serializer.validated_data.get("reason", ""))
        return _decision_response(request.user, decision)

    @action(detail=False, methods=["post"], url_path="unfreeze")
    def unfreeze(self, request):
        decision = unfreeze_account(user=request.user)
        return _decision_response(request.user, decision)

    @action(detail=False, methods=["post"], url_path="delete")
    def delete_self(self, request):
        serializer = AccountReasonSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        decision = delete_account(user=request.user, reason=serializer.validated_data.get("reason", ""))
        return _decision_response(request.user, decision)

    @action(detail=False, methods=["post"], url_path="reactivate")
    def reactivate(self, request):
        decision = reactivate_account(user=request.user)
        return _decision_response(request.user, decision)

    @action(detail=False, methods=["post"], url_path="unblock-verify")
    @method_decorator(ratelimit(key="user_or_ip", rate="5/m", method="POST", block=True))
    def unblock_verify(self, request):
        serializer = UnblockVerifySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if data["action"] == UnblockVerifySerializer.ACTION_VERIFY_PASSWORD:
            result = start_unblock_verification(user=request.user, password=data["password"])
            return Response({"success": True, "code_sent": result["code_sent"]})

        decision = complete_unblock_verification(user=request.user, code=data["code"])
        return _decision_response(request.user, decision)
