"""
NutriPlan API - User Profile Schemas.

Pydantic schemas for the nutrition profile and its derived targets.
"""

from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


Sex = Literal["male", "female", "other"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]
Goal = Literal["lose_weight", "maintain_weight", "gain_weight", "gain_muscle"]
DietType = Literal["omnivore", "vegetarian", "vegan", "keto", "paleo", "mediterranean", "low_carb"]


class ProfileUpdateRequest(BaseModel):
    """
    Schema for saving the nutrition profile.

    All fields are optional for partial updates. When any macro target is
    left out, all four targets are recalculated from the stored profile.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "age": 30,
                "sex": "male",
                "height_cm": 180,
                "weight_kg": 80,
                "activity_level": "moderate",
                "goal": "maintain_weight",
                "diet_type": "omnivore",
                "allergies": ["peanuts"],
                "dislikes": ["olives"]
            }
        }
    )

    name: Optional[str] = Field(None, min_length=1, max_length=255, description="Display name")
    age: Optional[int] = Field(None, ge=1, le=120, description="Age in years")
    sex: Optional[Sex] = None
    height_cm: Optional[float] = Field(None, gt=0, le=300, description="Height in cm")
    weight_kg: Optional[float] = Field(None, gt=0, le=700, description="Weight in kg")
    activity_level: Optional[ActivityLevel] = None
    goal: Optional[Goal] = None
    diet_type: Optional[DietType] = None
    allergies: Optional[List[str]] = Field(None, description="Allergens to avoid")
    dislikes: Optional[List[str]] = Field(None, description="Foods the user dislikes")
    target_calories: Optional[int] = Field(None, gt=0, description="Daily calorie target")
    target_protein: Optional[float] = Field(None, ge=0, description="Daily protein target (g)")
    target_carbs: Optional[float] = Field(None, ge=0, description="Daily carbohydrate target (g)")
    target_fat: Optional[float] = Field(None, ge=0, description="Daily fat target (g)")


class ProfileResponse(BaseModel):
    """Full profile of the authenticated user."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str
    age: Optional[int] = None
    sex: Optional[str] = None
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    activity_level: Optional[str] = None
    goal: Optional[str] = None
    diet_type: Optional[str] = None
    allergies: List[str] = Field(default_factory=list)
    dislikes: List[str] = Field(default_factory=list)
    target_calories: Optional[int] = None
    target_protein: Optional[float] = None
    target_carbs: Optional[float] = None
    target_fat: Optional[float] = None
    profile_completed: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("allergies", "dislikes", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []


class ProfileUpdateResponse(BaseModel):
    """Saved profile with a confirmation message."""

    message: str
    user: ProfileResponse


class ProfileSummary(BaseModel):
    """Name, email and (only when complete) the profile data."""

    name: str
    email: str
    profile_data: Optional[ProfileResponse] = None


class CheckProfileResponse(BaseModel):
    """Whether onboarding is done, used to route new users to setup."""

    profile_completed: bool
    user: Optional[ProfileSummary] = None
