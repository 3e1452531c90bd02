"""NutriPlan API - Middleware Package."""

from nutriplan.middleware.auth import JWTBearer, jwt_bearer
from nutriplan.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from nutriplan.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "JWTBearer",
    "jwt_bearer",
    "limiter",
    "rate_limit_exceeded_handler",
    "SecurityHeadersMiddleware",
]
