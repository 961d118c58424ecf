# apps/moderation/services/weights.py

from apps.moderation.constants.thresholds import TRUST_WEIGHT_STEPS, TRUST_WEIGHT_FLOOR


def resolve_report_weight(trust_score) -> float:
    """
    Step function over the reporter's trust score (0-100):
    >=70 -> 1.0, >=50 -> 0.7, >=30 -> 0.4, >=10 -> 0.2, else 0.0.
    A zero weight still records the report; it just never moves the aggregate.
    """
    try:
        score = float(trust_score or 0)
    except (TypeError, ValueError):
        return TRUST_WEIGHT_FLOOR

    for minimum, weight in TRUST_WEIGHT_STEPS:
        if score >= minimum:
            return weight
    return TRUST_WEIGHT_FLOOR
