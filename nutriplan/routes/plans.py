"""
NutriPlan API - Meal Plan Routes.

Active plan dashboard, AI plan generation, plan history and chat history.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from nutriplan.database import get_db
from nutriplan.dependencies import get_current_user
from nutriplan.middleware.rate_limit import limiter, ai_limit
from nutriplan.models import User
from nutriplan.schemas.chatbot import ChatHistoryResponse, ChatMessageResponse
from nutriplan.schemas.plan import (
    ActivePlanResponse,
    CreatePlanRequest,
    CreatePlanResponse,
    PlanHistoryResponse,
)
from nutriplan.services.gemini import GeminiService, get_gemini_service
from nutriplan.services.meal_plan_generator import create_meal_plan
from nutriplan.services.plans import (
    get_active_plan,
    get_chat_messages,
    get_owned_plan,
    plan_history,
    plan_snapshot,
)
from nutriplan.utils.errors import NutriPlanException

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/active", response_model=ActivePlanResponse)
async def active_plan(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    The user's active plan with its summary and foods grouped by meal.

    Returns 404 with ``has_no_plan`` when the user has not generated one yet.
    """
    plan = get_active_plan(db, user.id)
    if plan is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "No active plan found", "has_no_plan": True}
        )
    return plan_snapshot(db, plan)


@router.post("/create", response_model=CreatePlanResponse)
@limiter.limit(ai_limit())
async def create_plan(
    request: Request,
    body: Optional[CreatePlanRequest] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    gemini: GeminiService = Depends(get_gemini_service)
):
    """
    Generate a new active meal plan from the user's profile.

    Any previously active plan is deactivated.
    """
    try:
        plan = await create_meal_plan(db, user, gemini, name=body.name if body else None)
        logger.info(f"Meal plan {plan.id} created for user {user.id}")
        return plan_snapshot(db, plan, grouped=False)
    except (HTTPException, NutriPlanException):
        raise
    except Exception as e:
        logger.error(f"Error creating meal plan: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "Error creating meal plan", "error": str(e)}
        )


@router.get("/history", response_model=PlanHistoryResponse)
async def history(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """The 20 most recent plans, newest first."""
    return {"plans": plan_history(db, user.id)}


@router.get("/{plan_id}/messages", response_model=ChatHistoryResponse)
async def plan_messages(
    plan_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Chat history of a plan, oldest first."""
    plan = get_owned_plan(db, plan_id, user.id)
    messages = get_chat_messages(db, plan.id)
    return {"messages": [ChatMessageResponse.model_validate(m) for m in messages]}
