# settings.py
"""
NutriPlan API Settings.

Pydantic settings management with environment variable support.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
from urllib.parse import urlparse, urlunparse


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Database - REQUIRED from environment
    DATABASE_URL: str = Field(..., description="SQLAlchemy database URL (required)")

    # JWT - REQUIRED from environment
    SECRET_KEY: str = Field(..., description="JWT signing secret (required)")
    ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=30)
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(default=7)

    # Environment
    ENV: str = Field(default="development")
    DEBUG: bool = Field(default=True)

    # Gemini AI (meal plan generation + plan chatbot)
    GEMINI_API_KEY: Optional[str] = Field(default=None, description="Google Gemini API key")
    GEMINI_MODEL: str = Field(default="gemini-2.0-flash")

    # Chatbot
    CHAT_HISTORY_LIMIT: int = Field(
        default=10,
        description="Number of persisted chat messages sent back to the model as context"
    )

    # Quiz
    QUIZ_RECENT_WINDOW: int = Field(
        default=20,
        description="Recently completed cards excluded from the next draw"
    )

    # Redis Configuration
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL (redis://[:password@]host:port/db)"
    )
    REDIS_PASSWORD: Optional[str] = Field(
        default=None,
        description="Redis password for authentication"
    )
    REDIS_MAX_CONNECTIONS: int = Field(default=50)
    REDIS_SOCKET_TIMEOUT: int = Field(default=5)
    REDIS_SOCKET_CONNECT_TIMEOUT: int = Field(default=5)

    # Rate limiting storage (memory:// or a redis:// URL)
    RATE_LIMIT_STORAGE_URI: str = Field(default="memory://")

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Sentry Error Tracking
    SENTRY_DSN: Optional[str] = None
    SENTRY_ENVIRONMENT: str = "production"
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite (vs PostgreSQL)."""
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def gemini_configured(self) -> bool:
        """Check if the Gemini API key is set."""
        return bool(self.GEMINI_API_KEY)

    @property
    def redis_url_with_auth(self) -> str:
        """Build Redis URL with authentication if password is provided."""
        if self.REDIS_PASSWORD:
            parsed = urlparse(self.REDIS_URL)
            netloc_with_auth = f":{self.REDIS_PASSWORD}@{parsed.netloc}"
            return urlunparse((
                parsed.scheme,
                netloc_with_auth,
                parsed.path,
                parsed.params,
                parsed.query,
                parsed.fragment
            ))
        return self.REDIS_URL

    def get_cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def validate_required_settings(self) -> None:
        """Validate that required settings are configured."""
        if not self.DATABASE_URL:
            raise ValueError("DATABASE_URL must be set")
        if not self.SECRET_KEY:
            raise ValueError("SECRET_KEY must be changed from default in production")
        if not self.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY must be set")


settings = Settings()

# Validate in production
if settings.ENV == "production":
    settings.validate_required_settings()
