"""
NutriPlan API - Authentication Routes.

Register, login, refresh, logout and current-user endpoints.
"""

from fastapi import APIRouter, HTTPException, status, Depends, Request
from sqlalchemy import select
from sqlalchemy.orm import Session
import logging
import uuid

from nutriplan.database import get_db
from nutriplan.dependencies import get_current_user
from nutriplan.middleware.rate_limit import limiter, auth_limit
from nutriplan.models import User
from nutriplan.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    RefreshRequest,
    TokenResponse,
    MeResponse,
)
from nutriplan.services.auth import (
    hash_password,
    verify_password,
    create_access_token,
    create_refresh_token,
    verify_refresh_token,
    blacklist_token,
    remaining_lifetime,
)
from nutriplan.utils.errors import AuthenticationError
from nutriplan.utils.security import sanitize_string, validate_password_strength

logger = logging.getLogger(__name__)
router = APIRouter()


def _parse_uuid(value: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except ValueError:
        raise AuthenticationError("Invalid token payload")


def _token_response(user: User) -> TokenResponse:
    claims = {"sub": str(user.id)}
    return TokenResponse(
        user_id=str(user.id),
        email=user.email,
        access_token=create_access_token(data=claims),
        refresh_token=create_refresh_token(data=claims),
        token_type="bearer"
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(auth_limit())
async def register(
    request: Request,
    body: RegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user.

    Returns:
        TokenResponse with user_id, email, access_token, refresh_token

    Raises:
        HTTPException 400: Weak password or email already registered
    """
    is_valid, error = validate_password_strength(body.password)
    if not is_valid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)

    email = body.email.lower()
    if db.scalar(select(User).where(User.email == email)):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    user = User(
        email=email,
        password_hash=hash_password(body.password),
        name=sanitize_string(body.name),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"New user registered: {user.email}")

    return _token_response(user)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(auth_limit())
async def login(
    request: Request,
    body: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Login user and return JWT tokens.

    Raises:
        HTTPException 401: Invalid credentials
    """
    user = db.scalar(select(User).where(User.email == body.email.lower()))

    if not user or not verify_password(body.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.info(f"User logged in: {user.email}")
    return _token_response(user)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(body: RefreshRequest, db: Session = Depends(get_db)):
    """
    Exchange a refresh token for a new access/refresh pair.

    Raises:
        AuthenticationError: Invalid or expired refresh token, or unknown user
    """
    payload = verify_refresh_token(body.refresh_token)
    if not payload or not payload.get("sub"):
        raise AuthenticationError("Invalid or expired refresh token")

    user = db.scalar(select(User).where(User.id == _parse_uuid(payload["sub"])))
    if not user:
        raise AuthenticationError("User not found")

    return _token_response(user)


@router.post("/logout")
async def logout(
    request: Request,
    user: User = Depends(get_current_user)
):
    """
    Logout user by blacklisting their access token until it expires.
    """
    auth_header = request.headers.get("Authorization", "")
    if auth_header.lower().startswith("bearer "):
        token = auth_header[7:]
        await blacklist_token(token, ttl_seconds=remaining_lifetime(token))

    logger.info(f"User logged out: {user.id}")
    return {"message": "Successfully logged out"}


@router.get("/me", response_model=MeResponse)
async def get_me(user: User = Depends(get_current_user)):
    """Basic record of the authenticated user."""
    return MeResponse(
        user_id=str(user.id),
        email=user.email,
        name=user.name,
        profile_completed=user.profile_completed,
        created_at=user.created_at,
    )
