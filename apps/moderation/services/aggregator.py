# apps/moderation/services/aggregator.py
# ============================================================
# Weighted consensus over pending reports
# ============================================================

from django.db.models import Count, Sum
from django.db.models.functions import Coalesce
from django.db.models import Value, FloatField

from apps.moderation.models import Report
from apps.moderation.constants.states import REPORT_PENDING


def pending_reports(target_type: str, target_id: int):
    return Report.objects.filter(
        target_type=target_type,
        target_id=target_id,
        status=REPORT_PENDING,
    )


def weighted_aggregate(target_type: str, target_id: int) -> float:
    """
    Live sum of weights over pending reports.
    Recomputed from rows on every call; there is no stored counter to drift.
    """
    total = pending_reports(target_type, target_id).aggregate(
        total=Coalesce(Sum("weight"), Value(0.0), output_field=FloatField()),
    )["total"]
    return round(float(total), 4)


def aggregate_snapshot(target_type: str, target_id: int) -> dict:
    data = pending_reports(target_type, target_id).aggregate(
        total=Coalesce(Sum("weight"), Value(0.0), output_field=FloatField()),
        count=Count("id"),
    )
    return {
        "target_type": target_type,
        "target_id": int(target_id),
        "weighted_sum": round(float(data["total"]), 4),
        "pending_count": int(data["count"]),
    }
