# apps/moderation/exceptions.py

from rest_framework import status
from rest_framework.exceptions import APIException


class ModerationError(APIException):
    """Base class for moderation workflow errors surfaced to API clients."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Moderation request could not be processed."
    default_code = "moderation_error"


class DuplicateReport(ModerationError):
    """The reporter already has a pending report on this target."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = "You have already reported this item."
    default_code = "duplicate_report"


class InvalidTarget(ModerationError):
    """Unknown target, unknown reason, or a target the reporter may not report."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "This item cannot be reported."
    default_code = "invalid_target"


class AlreadyAppealed(ModerationError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "This decision has already been appealed."
    default_code = "already_appealed"


class UnknownReferenceCode(ModerationError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "No decision matches this reference code."
    default_code = "unknown_reference_code"


class InvalidTransition(ModerationError):
    """The requested decision is not a legal move from the target's current status."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = "This status change is not allowed."
    default_code = "invalid_transition"


class ReferenceCodeExhausted(ModerationError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Could not allocate a decision reference code. Please retry."
    default_code = "reference_code_exhausted"


class ClassifierTimeout(Exception):
    """Classifier did not answer in time. Always recovered by the caller (fail-open)."""
