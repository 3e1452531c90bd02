"""
NutriPlan API - Profile Store Service.
"""

import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from nutriplan.models import User
from nutriplan.services.nutrition import calculate_targets, is_profile_complete
from nutriplan.utils.security import sanitize_string

logger = logging.getLogger(__name__)


TARGET_FIELDS = ("target_calories", "target_protein", "target_carbs", "target_fat")


def update_profile(db: Session, user: User, changes: Dict[str, Any]) -> User:
    """
    Apply profile changes and refresh the derived fields.

    If ``changes`` lacks any of the four macro targets, all of them are
    recalculated from the resulting profile. ``profile_completed`` always
    follows the completeness rule.
    """
    for field, value in changes.items():
        if field == "name":
            value = sanitize_string(value or "")
            if not value:
                continue
        setattr(user, field, value)

    if any(changes.get(field) is None for field in TARGET_FIELDS):
        targets = calculate_targets({
            "age": user.age,
            "sex": user.sex,
            "height_cm": user.height_cm,
            "weight_kg": user.weight_kg,
            "activity_level": user.activity_level,
            "goal": user.goal,
        })
        for field, value in targets.items():
            setattr(user, field, value)

    user.profile_completed = is_profile_complete(user)
    db.commit()
    db.refresh(user)

    logger.info(f"Profile updated for user {user.id} (completed={user.profile_completed})")
    return user
