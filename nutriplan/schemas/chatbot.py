"""
NutriPlan API - Chatbot Schemas.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from nutriplan.schemas.plan import FoodItemResponse, PlanDetailResponse, PlanSummary


class ChatRequest(BaseModel):
    """
    Schema for a chatbot turn.

    Both fields are optional here so the route can answer a missing one
    with a 400 instead of a validation error.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "plan_id": 1,
                "message": "Swap the oatmeal for Greek yogurt"
            }
        }
    )

    plan_id: Optional[int] = Field(None, description="Plan to modify")
    message: Optional[str] = Field(None, max_length=2000, description="User message")


class ChatResponse(BaseModel):
    """Assistant reply plus the updated plan snapshot."""

    message: str
    plan: PlanDetailResponse
    summary: PlanSummary
    grouped_foods: Dict[str, List[FoodItemResponse]]


class ChatMessageResponse(BaseModel):
    """A persisted chat message. ``action`` is the JSON action log, if any."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    plan_id: int
    role: str
    content: str
    action: Optional[str] = None
    created_at: datetime


class ChatHistoryResponse(BaseModel):
    """Messages of a plan, oldest first."""

    messages: List[ChatMessageResponse]
