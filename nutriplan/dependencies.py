"""
NutriPlan API - FastAPI Dependencies.

Dependency injection helpers for routes.
"""

import uuid

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from nutriplan.database import get_db
from nutriplan.middleware.auth import jwt_bearer
from nutriplan.models import User


async def get_current_user_id(
    user_id: str = Depends(jwt_bearer)
) -> uuid.UUID:
    """
    Get current authenticated user ID from JWT token.

    Raises:
        HTTPException: 403 if the subject is not a valid user ID.
    """
    try:
        return uuid.UUID(str(user_id))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid token payload"
        )


def get_current_user(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
) -> User:
    """
    Get current authenticated user from database.

    Raises:
        HTTPException: 404 if user not found in database.
    """
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user
