# apps/moderation/views.py

import logging

from django.shortcuts import get_object_or_404
from django.utils.decorators import method_decorator
from django_ratelimit.decorators import ratelimit
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.permissions import IsModerator, is_moderator
from apps.moderation.models import Appeal, ModerationLog
from apps.moderation.constants.reasons import REASON_MAP
from apps.moderation.constants.thresholds import policy
from apps.moderation.serializers import (
    ReportCreateSerializer,
    AppealCreateSerializer,
    AppealResolveSerializer,
    AppealSerializer,
    ModeratorActionSerializer,
    StrikeCreateSerializer,
    ModerationLogSerializer,
    ReportQueueItemSerializer,
    ModerationQueueItemSerializer,
    TargetStatusSerializer,
)
from apps.moderation.services.appeals import submit_appeal, resolve_appeal
from apps.moderation.services.console import (
    QUEUE_TABS,
    perform_action,
    reports_queue,
    moderation_queue,
    appeals_queue,
    overview,
)
from apps.moderation.services.reports import submit_report
from apps.moderation.services.status import get_status
from apps.moderation.services.strikes import add_strike

logger = logging.getLogger(__name__)


def report_rate(group, request):
    return policy("REPORT_RATE")


# Report ViewSet ---------------------------------------------------------------------------
class ReportViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @method_decorator(ratelimit(key="user_or_ip", rate=report_rate, method="POST", block=True))
    def create(self, request):
        serializer = ReportCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        # Escalation side effects run after commit; the caller never waits on a rescan
        submit_report(
            reporter=request.user,
            target_type=data["target_type"],
            target_id=data["target_id"],
            reason=data["reason"],
            description=data.get("description"),
        )
        return Response({"accepted": True}, status=status.HTTP_201_CREATED)


# Reasons ----------------------------------------------------------------------------------
class ReasonCatalogueView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        target_type = request.query_params.get("target_type")
        if target_type:
            reasons = REASON_MAP.get(target_type)
            if reasons is None:
                raise ValidationError({"target_type": "Unknown target type."})
            return Response([{"value": k, "label": v} for k, v in reasons.items()])

        return Response({
            t: [{"value": k, "label": v} for k, v in reasons.items()]
            for t, reasons in REASON_MAP.items()
        })


# Appeal ViewSet ---------------------------------------------------------------------------
class AppealViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    def create(self, request):
        serializer = AppealCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        submit_appeal(
            reference_code=serializer.validated_data["reference_code"],
            justification=serializer.validated_data["justification"],
            appellant=request.user,
        )
        return Response({"queued": True}, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        appeal = get_object_or_404(Appeal.objects.select_related("decision"), pk=pk)
        if appeal.appellant_id != request.user.id and not is_moderator(request.user):
            raise PermissionDenied("You are not allowed to view this appeal.")
        return Response(AppealSerializer(appeal).data)

    @action(detail=True, methods=["post"], url_path="resolve", permission_classes=[IsModerator])
    def resolve(self, request, pk=None):
        get_object_or_404(Appeal, pk=pk)
        serializer = AppealResolveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        appeal = resolve_appeal(
            appeal_id=int(pk),
            moderator=request.user,
            overturn=serializer.validated_data["overturn"],
            note=serializer.validated_data.get("note", ""),
        )
        return Response(AppealSerializer(appeal).data)


# Target Status ----------------------------------------------------------------------------
class TargetStatusView(APIView):
    """Status read for rendering layers; details only for owner and moderators."""
    permission_classes = [AllowAny]

    def get(self, request, target_type, target_id):
        data = get_status(target_type=target_type, target_id=target_id, viewer=request.user)
        return Response(TargetStatusSerializer(data).data)


# Moderator Console ------------------------------------------------------------------------
class ModerationQueueView(APIView):
    permission_classes = [IsModerator]

    def get(self, request):
        tab = request.query_params.get("tab", "reports")
        if tab not in QUEUE_TABS:
            raise ValidationError({"tab": f"Must be one of: {', '.join(QUEUE_TABS)}."})

        if tab == "reports":
            return Response(ReportQueueItemSerializer(reports_queue(), many=True).data)
        if tab == "moderation":
            return Response(ModerationQueueItemSerializer(moderation_queue(), many=True).data)
        if tab == "appeals":
            return Response(AppealSerializer(appeals_queue(), many=True).data)
        return Response(overview())


class ModeratorActionView(APIView):
    permission_classes = [IsModerator]

    def post(self, request):
        serializer = ModeratorActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = perform_action(
            moderator=request.user,
            action=data["action"],
            target_type=data.get("target_type"),
            target_id=data.get("target_id"),
            reason=data.get("reason", ""),
            report_id=data.get("report_id"),
        )
        return Response(result)


class StrikeView(APIView):
    permission_classes = [IsModerator]

    def post(self, request):
        serializer = StrikeCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = add_strike(
            account_id=serializer.validated_data["account_id"],
            reason=serializer.validated_data["reason"],
            actor=request.user,
        )
        decision = result.get("decision")
        return Response({
            "strike_count": result["strike_count"],
            "blocked": result["blocked"],
            "reference_code": decision.reference_code if decision else None,
        })


class ModerationLogView(APIView):
    permission_classes = [IsModerator]

    def get(self, request):
        qs = ModerationLog.objects.select_related("actor").order_by("-created_at")
        target_type = request.query_params.get("target_type")
        target_id = request.query_params.get("target_id")
        if target_type:
            qs = qs.filter(target_type=target_type)
        if target_id and target_id.isdigit():
            qs = qs.filter(target_id=int(target_id))
        return Response(ModerationLogSerializer(qs[:200], many=True).data)
