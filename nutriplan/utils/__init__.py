"""NutriPlan API - Utilities Package."""

from nutriplan.utils.security import validate_password_strength, sanitize_string
from nutriplan.utils.errors import (
    NutriPlanException,
    AuthenticationError,
    NotFoundError,
    ValidationError,
    ForbiddenError,
    AIServiceError,
)

__all__ = [
    "validate_password_strength",
    "sanitize_string",
    "NutriPlanException",
    "AuthenticationError",
    "NotFoundError",
    "ValidationError",
    "ForbiddenError",
    "AIServiceError",
]
