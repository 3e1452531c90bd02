"""
NutriPlan API - Food Item Routes.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from nutriplan.database import get_db
from nutriplan.dependencies import get_current_user
from nutriplan.models import User
from nutriplan.schemas.plan import FoodItemResponse, ToggleFoodRequest, ToggleFoodResponse
from nutriplan.services.plans import toggle_food_item

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/{food_id}/toggle", response_model=ToggleFoodResponse)
async def toggle_food(
    food_id: int,
    body: Optional[ToggleFoodRequest] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Check a food item off as eaten, or un-check it with ``is_consumed: false``.

    Returns the item and the plan summary after the change.
    """
    is_consumed = body.is_consumed if body else True
    item, summary = toggle_food_item(db, food_id, user.id, is_consumed)
    return ToggleFoodResponse(
        food_item=FoodItemResponse.model_validate(item),
        summary=summary,
    )
