"""
NutriPlan API - Nutrition Calculations.

Daily targets (Mifflin-St Jeor BMR x activity multiplier, adjusted for goal),
profile completeness and the consumed/remaining summary of a plan.
"""

import math
import re
from typing import Any, Dict, Iterable, List, Optional

from nutriplan.models import FoodItem, MEAL_TYPES, Plan, User


DEFAULT_CALORIES = 2000

# Fallback plan targets when the user has none
DEFAULT_PLAN_TARGETS = {
    "target_calories": 2000,
    "target_protein": 150,
    "target_carbs": 250,
    "target_fat": 70,
}

ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}

GOAL_ADJUSTMENTS = {
    "lose_weight": -500,
    "gain_weight": 500,
}

# Share of calories per macro, and kcal per gram
MACRO_SPLIT = {
    "protein": (0.25, 4),
    "carbs": (0.45, 4),
    "fat": (0.30, 9),
}

REQUIRED_PROFILE_FIELDS = (
    "age",
    "sex",
    "height_cm",
    "weight_kg",
    "activity_level",
    "goal",
    "diet_type",
)


_INT_PREFIX = re.compile(r"^\s*[-+]?\d+")
_FLOAT_PREFIX = re.compile(r"^\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?")


def round_half_up(value: float) -> int:
    """Nearest integer with .5 going up (12.5 -> 13), unlike ``round``."""
    return math.floor(value + 0.5)


def parse_int(value: Any) -> int:
    """
    Leading integer of a model-supplied value, 0 when there is none.

    Units and decimals after the number are ignored: ``"300 kcal"`` -> 300,
    ``450.8`` -> 450. Booleans and non-finite numbers give 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    match = _INT_PREFIX.match(str(value))
    return int(match.group()) if match else 0


def parse_float(value: Any) -> float:
    """Leading decimal number of a model-supplied value (``"20.5g"`` -> 20.5), 0.0 when there is none."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        raw = value
    else:
        match = _FLOAT_PREFIX.match(str(value))
        if match is None:
            return 0.0
        raw = match.group()
    try:
        number = float(raw)
    except OverflowError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def calculate_bmr(weight_kg: float, height_cm: float, age: int, sex: str) -> float:
    """
    Basal metabolic rate using the Mifflin-St Jeor equation.

    Anything other than ``male`` uses the female constant.
    """
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    return base + 5 if sex == "male" else base - 161


def calculate_target_calories(
    age: Optional[int],
    sex: Optional[str],
    height_cm: Optional[float],
    weight_kg: Optional[float],
    activity_level: Optional[str],
    goal: Optional[str],
) -> int:
    """
    Daily calorie target.

    Returns ``DEFAULT_CALORIES`` when any body stat is missing.

    Example:
        >>> calculate_target_calories(30, "male", 180, 80, "moderate", "maintain_weight")
        2759
    """
    if not (age and sex and height_cm and weight_kg):
        return DEFAULT_CALORIES

    bmr = calculate_bmr(weight_kg, height_cm, age, sex)
    tdee = bmr * ACTIVITY_MULTIPLIERS.get(activity_level or "", 1.2)
    return round_half_up(tdee + GOAL_ADJUSTMENTS.get(goal or "", 0))


def calculate_macro_targets(target_calories: int) -> Dict[str, int]:
    """Split a calorie target into protein/carbs/fat grams (25/45/30)."""
    return {
        f"target_{macro}": round_half_up(target_calories * share / kcal_per_gram)
        for macro, (share, kcal_per_gram) in MACRO_SPLIT.items()
    }


def calculate_targets(profile: Dict[str, Any]) -> Dict[str, int]:
    """Calories plus macro targets for a profile dict using model field names."""
    calories = calculate_target_calories(
        profile.get("age"),
        profile.get("sex"),
        profile.get("height_cm"),
        profile.get("weight_kg"),
        profile.get("activity_level"),
        profile.get("goal"),
    )
    return {"target_calories": calories, **calculate_macro_targets(calories)}


def is_profile_complete(user: User) -> bool:
    """A profile is complete when every required field holds a truthy value."""
    return all(getattr(user, field) for field in REQUIRED_PROFILE_FIELDS)


def calculate_summary(plan: Plan, food_items: Iterable[FoodItem]) -> Dict[str, Any]:
    """
    Summarize targets against what has been consumed.

    Remaining values may go negative when the user eats past a target.
    """
    items = list(food_items)
    consumed = [item for item in items if item.is_consumed]

    summary: Dict[str, Any] = {}
    for macro in ("calories", "protein", "carbs", "fat"):
        total = getattr(plan, f"target_{macro}")
        eaten = sum(getattr(item, macro) for item in consumed)
        summary[f"total_{macro}"] = total
        summary[f"consumed_{macro}"] = eaten
        summary[f"remaining_{macro}"] = total - eaten

    summary["total_items"] = len(items)
    summary["consumed_items"] = len(consumed)
    summary["completion_percentage"] = (
        round_half_up(len(consumed) / len(items) * 100) if items else 0
    )
    return summary


def group_by_meal_type(food_items: Iterable[Any]) -> Dict[str, List[Any]]:
    """Bucket items (ORM rows or serialized dicts) under the four meal types."""
    grouped: Dict[str, List[Any]] = {meal_type: [] for meal_type in MEAL_TYPES}
    for item in food_items:
        meal_type = item["meal_type"] if isinstance(item, dict) else item.meal_type
        if meal_type in grouped:
            grouped[meal_type].append(item)
    return grouped
