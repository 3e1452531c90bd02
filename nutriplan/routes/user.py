"""
NutriPlan API - User Profile Routes.

Profile completeness check and nutrition profile storage.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from nutriplan.database import get_db
from nutriplan.dependencies import get_current_user
from nutriplan.models import User
from nutriplan.schemas.user import (
    CheckProfileResponse,
    ProfileResponse,
    ProfileSummary,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
)
from nutriplan.services.nutrition import is_profile_complete
from nutriplan.services.profile import update_profile

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/check-profile", response_model=CheckProfileResponse)
async def check_profile(user: User = Depends(get_current_user)):
    """
    Report whether onboarding is complete.

    ``profile_data`` is only filled in once every required field is set.
    """
    completed = is_profile_complete(user)
    return CheckProfileResponse(
        profile_completed=completed,
        user=ProfileSummary(
            name=user.name,
            email=user.email,
            profile_data=ProfileResponse.model_validate(user) if completed else None,
        ),
    )


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(user: User = Depends(get_current_user)):
    """Full profile of the authenticated user."""
    return ProfileResponse.model_validate(user)


@router.post("/profile", response_model=ProfileUpdateResponse)
@router.put("/profile", response_model=ProfileUpdateResponse)
async def save_profile(
    body: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Store profile fields.

    Missing macro targets are calculated from the profile (Mifflin-St Jeor).
    """
    user = update_profile(db, user, body.model_dump(exclude_unset=True))
    return ProfileUpdateResponse(
        message="Profile updated successfully",
        user=ProfileResponse.model_validate(user),
    )
