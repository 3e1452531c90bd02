"""
NutriPlan API - Truth or Dare Quiz Routes.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from nutriplan.database import get_db
from nutriplan.dependencies import get_current_user
from nutriplan.models import User
from nutriplan.schemas.quiz import (
    CompleteCardRequest,
    CompleteCardResponse,
    QuizAttemptResponse,
    QuizCardResponse,
    QuizStatsResponse,
)
from nutriplan.services.quiz import draw_card, quiz_stats, record_attempt
from nutriplan.utils.errors import ValidationError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/card", response_model=QuizCardResponse)
async def get_card(
    type: Optional[str] = Query(None, description="truth or dare"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Random active card the user has not played recently."""
    return draw_card(db, user.id, type or None)


@router.post("/complete", response_model=CompleteCardResponse)
async def complete_card(
    body: CompleteCardRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Record an attempt. ``completed`` defaults to true."""
    card_id = body.card_id
    if isinstance(card_id, bool) or not isinstance(card_id, int) or not card_id:
        raise ValidationError("Invalid card_id")

    attempt = record_attempt(db, user.id, card_id, body.completed)
    return CompleteCardResponse(
        success=True,
        attempt=QuizAttemptResponse.model_validate(attempt),
    )


@router.get("/stats", response_model=QuizStatsResponse)
async def stats(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Completion totals, day streak and category breakdown."""
    return quiz_stats(db, user.id)
