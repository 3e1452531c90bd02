"""
NutriPlan API - Authentication Service.

JWT token generation, password hashing and logout blacklisting.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import logging

import bcrypt
from jose import jwt, JWTError

from settings import settings
from nutriplan.services.cache import cache_service

logger = logging.getLogger(__name__)


# Maximum password length for bcrypt (72 bytes)
MAX_PASSWORD_BYTES = 72


def _prepare_password(password: str) -> bytes:
    """
    Prepare password for bcrypt hashing.

    Bcrypt only uses the first 72 bytes of any password, so the encoded
    password is truncated to keep hashing and verification consistent.
    """
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password to hash.

    Returns:
        str: Bcrypt hashed password.

    Example:
        >>> hashed = hash_password("Sup3rsecret")
        >>> verify_password("Sup3rsecret", hashed)
        True
    """
    salt = bcrypt.gensalt(rounds=12)
    hashed = bcrypt.hashpw(_prepare_password(password), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a bcrypt hash.

    Returns:
        bool: True if password matches, False otherwise (including malformed hashes).
    """
    try:
        return bcrypt.checkpw(
            _prepare_password(plain_password),
            hashed_password.encode("utf-8")
        )
    except Exception as e:
        logger.warning(f"Password verification failed: {e}")
        return False


def _encode(data: Dict[str, Any], expires_delta: timedelta, token_type: str) -> str:
    now = datetime.now(timezone.utc)
    to_encode = data.copy()
    to_encode.update({
        "exp": now + expires_delta,
        "iat": now,
        "type": token_type,
    })
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Token payload (must include 'sub' key).
        expires_delta: Optional custom expiration time.

    Returns:
        str: Encoded JWT access token.
    """
    return _encode(
        data,
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        "access",
    )


def create_refresh_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT refresh token with longer expiration.

    Args:
        data: Token payload (must include 'sub' key).
        expires_delta: Optional custom expiration time.

    Returns:
        str: Encoded JWT refresh token.
    """
    return _encode(
        data,
        expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        "refresh",
    )


def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verify and decode a JWT access token.

    Refresh tokens are rejected here so they cannot be used as bearer tokens.

    Returns:
        Optional[Dict[str, Any]]: Token payload if valid, None otherwise.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return None

    if payload.get("type") == "refresh":
        logger.warning("Refresh token presented as access token")
        return None
    return payload


def verify_refresh_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verify and decode a JWT refresh token.

    Returns:
        Optional[Dict[str, Any]]: Token payload if valid refresh token, None otherwise.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError as e:
        logger.warning(f"Refresh token verification failed: {e}")
        return None

    if payload.get("type") != "refresh":
        logger.warning("Token is not a refresh token")
        return None
    return payload


def remaining_lifetime(token: str) -> int:
    """Seconds until the token expires, or 0 when it cannot be decoded."""
    payload = verify_token(token)
    if not payload or "exp" not in payload:
        return 0
    return max(int(payload["exp"] - datetime.now(timezone.utc).timestamp()), 0)


async def blacklist_token(token: str, ttl_seconds: int) -> bool:
    """
    Add a token to the Redis blacklist for logout functionality.

    Args:
        token: JWT access token to blacklist.
        ttl_seconds: Time-to-live matching token expiry.

    Returns:
        bool: True if successfully blacklisted, False otherwise.
    """
    if ttl_seconds <= 0:
        return False
    stored = await cache_service.set(f"blacklist:{token}", {"blacklisted": True}, ttl_seconds)
    if stored:
        logger.info("Token blacklisted successfully")
    else:
        logger.warning("Token blacklist unavailable; token stays valid until expiry")
    return stored


async def is_token_blacklisted(token: str) -> bool:
    """
    Check if a token is blacklisted.

    Fails open: when Redis is down the token is treated as valid.
    """
    result = await cache_service.get(f"blacklist:{token}")
    return result is not None
