# apps/moderation/services/reference_codes.py

import secrets

# Collision retries before giving up
REFERENCE_CODE_ATTEMPTS = 5


def generate_numeric_code(length: int = 6) -> str:
    """Random numeric code without a leading zero (100000-999999 for length 6)."""
    low = 10 ** (length - 1)
    return str(low + secrets.randbelow(9 * low))


def generate_reference_code() -> str:
    return generate_numeric_code(6)
