# apps/accounts/exceptions.py

from rest_framework import status
from rest_framework.exceptions import APIException


class FreezeLimitReached(APIException):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_detail = "You have reached the self-freeze limit for this period."
    default_code = "freeze_limit_reached"


class VerificationFailed(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Identity verification failed."
    default_code = "verification_failed"
