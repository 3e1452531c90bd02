"""
NutriPlan API - Meal Plan Generator.

Builds a profile-derived prompt, asks the model for a JSON meal list and
persists the result as the user's new active plan.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from nutriplan.models import FoodItem, Plan, User
from nutriplan.services.gemini import GeminiService, extract_json
from nutriplan.services.nutrition import DEFAULT_PLAN_TARGETS, parse_float, parse_int
from nutriplan.services.plans import deactivate_plans
from nutriplan.utils.errors import NutriPlanException

logger = logging.getLogger(__name__)


PLAN_DESCRIPTION = "AI-generated personalized meal plan"
DEFAULT_PORTION = "1 serving"


class MealPlanGenerationError(NutriPlanException):
    """Raised when the model reply cannot be turned into a meal plan."""

    def __init__(self, message: str, hint: Optional[str] = None):
        detail: Dict[str, Any] = {"message": message}
        if hint:
            detail["hint"] = hint
        super().__init__(message=message, status_code=500, detail=detail)


def _format_list(values: Any) -> str:
    if not values:
        return ""
    if isinstance(values, (list, tuple)):
        return ", ".join(str(v) for v in values)
    return str(values)


def build_meal_plan_prompt(user: User) -> str:
    """Prompt asking for a single day of meals matching the user's targets."""
    lines = [
        f"Create a daily meal plan for a {user.age}-year-old {user.sex}, "
        f"{user.weight_kg}kg, {user.height_cm}cm tall, with {user.activity_level} lifestyle, "
        f"aiming to {user.goal} on a {user.diet_type} diet.",
        "",
        f"Target: {user.target_calories} calories, {user.target_protein}g protein, "
        f"{user.target_carbs}g carbs, {user.target_fat}g fat.",
    ]
    allergies = _format_list(user.allergies)
    if allergies:
        lines.append(f"Allergies: {allergies}")
    dislikes = _format_list(user.dislikes)
    if dislikes:
        lines.append(f"Dislikes: {dislikes}")

    lines.append("""
Return ONLY a valid JSON object with this exact structure (no markdown, no explanations):
{
  "meals": [
    {
      "meal_type": "breakfast",
      "name": "Food name",
      "portion": "Amount (e.g., 1 cup, 150g)",
      "calories": 300,
      "protein": 20,
      "carbs": 40,
      "fat": 10
    }
  ]
}

Include 3-4 breakfast items, 3-4 lunch items, 3-4 dinner items, and 2-3 snacks. Make it realistic and delicious!""")
    return "\n".join(lines)


def parse_meals(text: str) -> List[Dict[str, Any]]:
    """
    Turn a model reply into food item rows.

    Meal types are lower-cased, numbers coerced (invalid -> 0) and each item
    gets a 0-based position within its meal type.

    Raises:
        MealPlanGenerationError: Reply is not a JSON object.
    """
    parsed = extract_json(text)
    if parsed is None:
        raise MealPlanGenerationError("Failed to generate meal plan from AI")

    meals = parsed.get("meals")
    if not isinstance(meals, list):
        return []

    counters: Dict[str, int] = {}
    items: List[Dict[str, Any]] = []
    for meal in meals:
        if not isinstance(meal, dict):
            continue
        meal_type = str(meal.get("meal_type") or meal.get("mealType") or "").strip().lower()
        name = str(meal.get("name") or "").strip()
        if not meal_type or not name:
            continue

        position = counters.get(meal_type, 0)
        counters[meal_type] = position + 1
        items.append({
            "meal_type": meal_type,
            "name": name,
            "portion": meal.get("portion") or DEFAULT_PORTION,
            "calories": parse_int(meal.get("calories")),
            "protein": parse_float(meal.get("protein")),
            "carbs": parse_float(meal.get("carbs")),
            "fat": parse_float(meal.get("fat")),
            "sort_order": position,
        })
    return items


async def create_meal_plan(
    db: Session,
    user: User,
    gemini: GeminiService,
    name: Optional[str] = None
) -> Plan:
    """
    Generate and persist a new active plan for the user.

    Prior active plans are deactivated first and stay inactive even when
    generation fails afterwards.

    Raises:
        MealPlanGenerationError: Model error, unparseable reply or no meals.
    """
    deactivated = deactivate_plans(db, user.id)
    db.commit()
    if deactivated:
        logger.info(f"Deactivated {deactivated} plan(s) for user {user.id}")

    prompt = build_meal_plan_prompt(user)
    try:
        text = await gemini.generate_text(prompt)
    except NutriPlanException as e:
        logger.error(f"AI generation error: {e.message}")
        raise MealPlanGenerationError("Failed to generate meal plan from AI") from e

    logger.info(f"AI Response: {text[:500]}")
    rows = parse_meals(text)
    if not rows:
        raise MealPlanGenerationError(
            "Failed to generate meal plan. Please try again.",
            hint="The AI did not return valid meal data",
        )

    logger.info(f"Generated {len(rows)} food items")

    plan = Plan(
        user_id=user.id,
        name=name or f"Meal Plan - {date.today().isoformat()}",
        description=PLAN_DESCRIPTION,
        target_calories=user.target_calories or DEFAULT_PLAN_TARGETS["target_calories"],
        target_protein=user.target_protein or DEFAULT_PLAN_TARGETS["target_protein"],
        target_carbs=user.target_carbs or DEFAULT_PLAN_TARGETS["target_carbs"],
        target_fat=user.target_fat or DEFAULT_PLAN_TARGETS["target_fat"],
        is_active=True,
        food_items=[FoodItem(**row) for row in rows],
    )
    db.add(plan)
    db.commit()
    db.refresh(plan)
    return plan
