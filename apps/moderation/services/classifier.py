# apps/moderation/services/classifier.py
# ============================================================
# Content classifier client (opaque scoring oracle)
# Fail-open: no timely / valid answer means "safe".
# ============================================================

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from apps.moderation.constants.targets import TARGET_CONTENT
from apps.moderation.constants.thresholds import policy
from apps.moderation.exceptions import ClassifierTimeout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassifierVerdict:
    safe: bool
    category: Optional[str] = None
    reason: Optional[str] = None


SAFE_RESULT = ClassifierVerdict(safe=True)


def classify(*, text: str = "", image_url: Optional[str] = None) -> ClassifierVerdict:
    """
    Ask the classifier about text and/or an image.
    Raises ClassifierTimeout on timeout; other transport / payload errors
    propagate as requests / ValueError exceptions.
    """
    url = policy("CLASSIFIER_URL")
    if not url:
        return SAFE_RESULT

    payload = {"text": text or ""}
    if image_url:
        payload["image_url"] = image_url

    try:
        response = requests.post(
            url,
            json=payload,
            timeout=float(policy("CLASSIFIER_TIMEOUT_SECONDS")),
        )
    except requests.Timeout as e:
        raise ClassifierTimeout(str(e)) from e

    response.raise_for_status()
    data = response.json()
    if not isinstance(data, dict) or "safe" not in data:
        raise ValueError("Classifier response is missing 'safe'.")

    return ClassifierVerdict(
        safe=bool(data.get("safe")),
        category=data.get("category"),
        reason=data.get("reason"),
    )


def classify_safely(*, text: str = "", image_url: Optional[str] = None) -> ClassifierVerdict:
    """classify() with every failure mapped to SAFE_RESULT."""
    try:
        return classify(text=text, image_url=image_url)
    except ClassifierTimeout:
        logger.warning("[Moderation][Classifier] timeout, treating as safe")
        return SAFE_RESULT
    except Exception as e:
        logger.warning("[Moderation][Classifier] failed, treating as safe: %s", e, exc_info=True)
        return SAFE_RESULT


def build_payload(target_type: str, target_obj) -> dict:
    """Text / image extracted from a target for classification."""
    if target_type == TARGET_CONTENT:
        return {
            "text": getattr(target_obj, "body", "") or "",
            "image_url": getattr(target_obj, "image_url", None) or None,
        }

    parts = [getattr(target_obj, "username", "") or "", getattr(target_obj, "bio", "") or ""]
    return {"text": "\n".join(p for p in parts if p), "image_url": None}
