"""
NutriPlan API - Database Configuration.

SQLAlchemy engine, session factory, and declarative base for ORM models.
LAZY INITIALIZATION: Engine connects on first use, not at import time.
"""

from typing import Generator, Optional
import logging

from sqlalchemy import create_engine, text, Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from settings import settings

logger = logging.getLogger(__name__)

# Declarative base for ORM models
Base = declarative_base()

# Global engine and session factory (initialized lazily)
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:")


def get_engine() -> Engine:
    """
    Get or create the SQLAlchemy engine (lazy initialization).

    SQLite is used for local development and tests, PostgreSQL in production
    with connection pooling and validation.

    Returns:
        Engine: SQLAlchemy engine instance.
    """
    global _engine
    if _engine is None:
        logger.info("Creating database engine...")
        try:
            if settings.is_sqlite:
                engine_kwargs = {
                    "echo": False,
                    "connect_args": {"check_same_thread": False},  # SQLite specific
                }
                # In-memory databases live as long as their single connection
                if _is_memory_sqlite(settings.DATABASE_URL):
                    engine_kwargs["poolclass"] = StaticPool
                _engine = create_engine(settings.DATABASE_URL, **engine_kwargs)
            else:
                _engine = create_engine(
                    settings.DATABASE_URL,
                    echo=False,
                    pool_size=5,
                    max_overflow=10,
                    pool_pre_ping=True,      # Validate connections before use
                    pool_recycle=3600,       # Recycle connections every hour
                    connect_args={
                        "connect_timeout": 10,
                        "application_name": "nutriplan-api",
                    },
                )
            logger.info("Database engine created successfully")
        except Exception as e:
            logger.error(f"Failed to create database engine: {e}")
            raise
    return _engine


def get_session_factory() -> sessionmaker:
    """
    Get or create the session factory (lazy initialization).

    Returns:
        sessionmaker: SQLAlchemy session factory.
    """
    global _SessionLocal
    if _SessionLocal is None:
        engine = get_engine()
        _SessionLocal = sessionmaker(
            bind=engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )
    return _SessionLocal


def init_db() -> None:
    """Create all tables registered on the declarative base."""
    # Import models so they register with Base.metadata
    import nutriplan.models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
    logger.info("Database tables ensured")


def ping_db() -> bool:
    """Test database connectivity."""
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning(f"Database ping failed: {e}")
        return False


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Yields a database session and ensures proper cleanup after request.

    Yields:
        Session: SQLAlchemy database session.

    Example:
        @router.get("/plans/active")
        def active_plan(db: Session = Depends(get_db)):
            ...
    """
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
