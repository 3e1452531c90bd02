"""
NutriPlan API - Plan Schemas.

Pydantic schemas for meal plans, food items and consumption tracking.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FoodItemResponse(BaseModel):
    """A food item as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    plan_id: int
    meal_type: str
    name: str
    portion: str
    calories: int
    protein: float
    carbs: float
    fat: float
    is_consumed: bool
    consumed_at: Optional[datetime] = None
    sort_order: int


class PlanResponse(BaseModel):
    """Plan metadata and targets."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    target_calories: int
    target_protein: float
    target_carbs: float
    target_fat: float
    is_active: bool
    created_at: datetime
    updated_at: datetime


class PlanDetailResponse(PlanResponse):
    """Plan with its food items ordered by meal type and position."""

    food_items: List[FoodItemResponse] = Field(default_factory=list)


class PlanSummary(BaseModel):
    """
    Targets vs. consumption for a plan.

    ``remaining_*`` is target minus consumed and can be negative.
    """

    total_calories: float
    consumed_calories: float
    remaining_calories: float
    total_protein: float
    consumed_protein: float
    remaining_protein: float
    total_carbs: float
    consumed_carbs: float
    remaining_carbs: float
    total_fat: float
    consumed_fat: float
    remaining_fat: float
    total_items: int
    consumed_items: int
    completion_percentage: int


class CreatePlanRequest(BaseModel):
    """
    Schema for meal plan generation request.

    Attributes:
        name: Optional plan name; defaults to "Meal Plan - <date>".
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"name": "Cutting week 1"}}
    )

    name: Optional[str] = Field(None, max_length=255, description="Plan name")


class CreatePlanResponse(BaseModel):
    """Newly generated plan with a fresh (all-zero consumption) summary."""

    plan: PlanDetailResponse
    summary: PlanSummary


class ActivePlanResponse(BaseModel):
    """Active plan snapshot used by the dashboard."""

    plan: PlanDetailResponse
    summary: PlanSummary
    grouped_foods: Dict[str, List[FoodItemResponse]]


class ToggleFoodRequest(BaseModel):
    """
    Schema for marking a food item consumed.

    Only an explicit ``false`` un-checks the item.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"is_consumed": True}}
    )

    is_consumed: Optional[bool] = Field(True, description="Consumed flag")


class ToggleFoodResponse(BaseModel):
    """Updated item plus the recalculated plan summary."""

    food_item: FoodItemResponse
    summary: PlanSummary


class PlanHistoryItem(BaseModel):
    """One row of the plan history list."""

    id: int
    name: str
    is_active: bool
    target_calories: int
    item_count: int
    created_at: datetime


class PlanHistoryResponse(BaseModel):
    """Most recent plans, newest first."""

    plans: List[PlanHistoryItem]
