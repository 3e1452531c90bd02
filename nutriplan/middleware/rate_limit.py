"""
NutriPlan API - Rate Limiting Middleware.

Per-route rate limits with SlowAPI. Storage is in-process by default and can
point at Redis through RATE_LIMIT_STORAGE_URI for multi-worker deployments.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from settings import settings


logger = logging.getLogger(__name__)

AUTH_LIMIT = "5/minute"
AI_LIMIT = "10/hour"
AI_LIMIT_RELAXED = "1000/hour"
DEFAULT_RETRY_AFTER = 60


def get_user_identifier(request: Request) -> str:
    """
    Bucket key for a request.

    Authenticated calls are counted per user (``request.state.user_id`` is
    set by the JWT bearer); anonymous ones per client address.
    """
    user_id = getattr(request.state, "user_id", None)
    return f"user:{user_id}" if user_id else get_remote_address(request)


limiter = Limiter(
    key_func=get_user_identifier,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    enabled=settings.ENV != "testing",
)


def auth_limit() -> str:
    """Login and registration attempts."""
    return AUTH_LIMIT


def ai_limit() -> str:
    """Model-backed endpoints: plan creation and chat."""
    relaxed = settings.ENV in ("testing", "development")
    return AI_LIMIT_RELAXED if relaxed else AI_LIMIT


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """429 response telling the client how long to wait."""
    wait = getattr(exc, "retry_after", None) or DEFAULT_RETRY_AFTER
    logger.warning(f"Too many requests from {get_user_identifier(request)} on {request.url.path}")

    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "detail": {
                "message": "Too many requests, try again later",
                "retry_after_seconds": wait,
            }
        },
        headers={"Retry-After": str(wait)},
    )
