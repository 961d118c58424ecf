# common/exceptions.py

import logging

from django_ratelimit.exceptions import Ratelimited
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


# API exception handler ----------------------------------------------------------------------
def api_exception_handler(exc, context):
    """
    DRF default handler, plus django-ratelimit blocks surfaced as 429
    (Ratelimited subclasses PermissionDenied and would otherwise become 403).
    """
    if isinstance(exc, Ratelimited):
        view = context.get("view")
        logger.info("[RateLimit] blocked view=%s", view.__class__.__name__ if view else None)
        return Response(
            {"detail": "Too many requests. Please slow down.", "code": "rate_limited"},
            status=status.HTTP_429_TOO_MANY_REQUESTS,
        )

    return exception_handler(exc, context)
