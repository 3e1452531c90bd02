"""
NutriPlan API - Security Utilities.

Password policy checks and trimming of user-supplied display text.
"""

import re
from typing import Tuple

MIN_PASSWORD_LENGTH = 8

# (pattern, message) pairs checked in order after the length rule
PASSWORD_RULES = (
    (re.compile(r"[A-Z]"), "an uppercase letter"),
    (re.compile(r"[a-z]"), "a lowercase letter"),
    (re.compile(r"[0-9]"), "a digit"),
)


def validate_password_strength(password: str) -> Tuple[bool, str]:
    """
    Check a registration password against the account policy.

    Returns ``(True, "")`` when every rule passes, otherwise ``False`` and
    the message for the first rule that failed.

    Example:
        >>> validate_password_strength("abc")
        (False, 'Password needs at least 8 characters')
        >>> validate_password_strength("lowercase1")
        (False, 'Password needs an uppercase letter')
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        return False, f"Password needs at least {MIN_PASSWORD_LENGTH} characters"

    for pattern, requirement in PASSWORD_RULES:
        if pattern.search(password) is None:
            return False, f"Password needs {requirement}"

    return True, ""


def sanitize_string(value: str, max_length: int = 255) -> str:
    """Trim surrounding whitespace and clip to ``max_length`` characters."""
    return value.strip()[:max_length]
