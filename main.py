# main.py
"""
NutriPlan API - Main Application.

FastAPI app for AI-generated meal plans, consumption tracking, the plan
chatbot and the nutrition truth-or-dare quiz.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from slowapi.errors import RateLimitExceeded

from settings import settings
from nutriplan.database import init_db, ping_db
from nutriplan.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from nutriplan.middleware.security_headers import SecurityHeadersMiddleware
from nutriplan.services.cache import cache_service
from nutriplan.utils.errors import NutriPlanException

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize Sentry for error tracking
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(
                level=logging.INFO,
                event_level=logging.ERROR
            ),
        ],
    )
    logger.info(f"Sentry initialized ({settings.SENTRY_ENVIRONMENT})")
else:
    logger.warning("Sentry DSN not configured - error tracking disabled")

# Import routers
from nutriplan.routes import auth, user, plans, foods, chatbot, quiz

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting NutriPlan API...")
    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database at startup: {e}")
        raise

    if not settings.gemini_configured:
        logger.warning("GEMINI_API_KEY not set - plan generation and chat are unavailable")

    yield

    logger.info("NutriPlan API shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="NutriPlan API",
    version=VERSION,
    description="AI-assisted meal planning and nutrition tracking",
    lifespan=lifespan
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# CORS middleware - Allow frontend origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(SecurityHeadersMiddleware)


@app.exception_handler(NutriPlanException)
async def nutriplan_exception_handler(request: Request, exc: NutriPlanException):
    """Turn domain errors raised by services into JSON responses."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# Health check
@app.get("/health")
async def health_check():
    """Health check endpoint - fast response without database dependency."""
    return {
        "status": "ok",
        "environment": settings.ENV,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": VERSION
    }


@app.get("/health/detailed")
async def health_check_detailed():
    """Detailed health check with database connectivity test."""
    db_ok = ping_db()
    return {
        "status": "ok" if db_ok else "degraded",
        "database": "sqlite" if settings.is_sqlite else "postgresql",
        "database_connected": db_ok,
        "ai_configured": settings.gemini_configured,
        "environment": settings.ENV,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": VERSION
    }


@app.get("/health/redis")
async def redis_health_check():
    """Redis connectivity and statistics health check."""
    if not await cache_service.healthcheck():
        return {
            "status": "unhealthy",
            "redis_connected": False,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    stats = await cache_service.get_stats()

    hits = stats.get("keyspace_hits", 0)
    misses = stats.get("keyspace_misses", 0)
    total = hits + misses
    hit_rate = (hits / total * 100) if total > 0 else 0

    return {
        "status": "healthy",
        "redis_connected": True,
        "memory_used": stats.get("used_memory_human"),
        "connected_clients": stats.get("connected_clients"),
        "cache_hit_rate": f"{hit_rate:.2f}%",
        "cache_hits": hits,
        "cache_misses": misses,
        "evicted_keys": stats.get("evicted_keys"),
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


# Include routers
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(user.router, prefix="/user", tags=["User"])
app.include_router(plans.router, prefix="/plans", tags=["Meal Plans"])
app.include_router(foods.router, prefix="/foods", tags=["Food Items"])
app.include_router(chatbot.router, prefix="/chatbot", tags=["Chatbot"])
app.include_router(quiz.router, prefix="/quiz", tags=["Quiz"])


# Root endpoint
@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "message": "NutriPlan API",
        "version": VERSION,
        "docs": "/docs",
        "health": "/health"
    }
