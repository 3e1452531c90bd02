"""NutriPlan API - Services Package."""

from .auth import (
    hash_password,
    verify_password,
    create_access_token,
    create_refresh_token,
    verify_token,
)
from .cache import cache_service, CacheService
from .gemini import get_gemini_service, GeminiService

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "create_refresh_token",
    "verify_token",
    "cache_service",
    "CacheService",
    "get_gemini_service",
    "GeminiService",
]
