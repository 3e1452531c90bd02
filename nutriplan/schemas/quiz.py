"""
NutriPlan API - Quiz Schemas.

Truth or dare cards, attempts and play statistics.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class QuizCardResponse(BaseModel):
    """A truth question or dare challenge."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    question: str
    difficulty: str
    category: str
    is_active: bool
    created_at: datetime


class CompleteCardRequest(BaseModel):
    """
    Schema for recording a card attempt.

    ``card_id`` is accepted as-is and checked by the route so that anything
    but a JSON integer gets a 400.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"card_id": 12, "completed": True}}
    )

    card_id: Any = Field(None, description="Quiz card ID")
    completed: Optional[bool] = Field(True, description="Whether the card was completed")


class QuizAttemptResponse(BaseModel):
    """A recorded attempt."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    card_id: int
    completed: bool
    completed_at: datetime


class CompleteCardResponse(BaseModel):
    success: bool = True
    attempt: QuizAttemptResponse


class RecentAttempt(BaseModel):
    id: int
    card_type: str
    category: str
    completed_at: datetime


class QuizStatsResponse(BaseModel):
    """
    Play statistics over completed attempts.

    Attributes:
        streak: Consecutive local days with a completion, ending today.
        category_stats: Completed attempts per card category.
        recent_attempts: Ten most recent completions.
    """

    total_completed: int
    truths_completed: int
    dares_completed: int
    streak: int
    last_played: Optional[datetime] = None
    category_stats: Dict[str, int] = Field(default_factory=dict)
    recent_attempts: List[RecentAttempt] = Field(default_factory=list)
