"""
NutriPlan API - Plan Chatbot Service.

Sends the plan context and a fixed function-calling schema to the model and
applies whatever add/update/remove calls come back as direct writes on the
plan's food items. Both sides of the conversation are persisted.
"""

import json
import logging
from typing import Any, Dict, List, Sequence, Tuple

from sqlalchemy.orm import Session

from settings import settings
from nutriplan.models import ChatMessage, FoodItem, Plan, User
from nutriplan.services.gemini import GeminiService, ToolCall
from nutriplan.services.nutrition import parse_float, parse_int
from nutriplan.services.plans import get_chat_messages, get_food_items, next_sort_order
from nutriplan.utils.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


DEFAULT_PORTION = "1 serving"
FALLBACK_REPLY = "I've processed your request."

_MACRO_PROPERTIES = {
    "calories": {"type": "NUMBER", "description": "Calories count"},
    "protein": {"type": "NUMBER", "description": "Protein in grams"},
    "carbs": {"type": "NUMBER", "description": "Carbs in grams"},
    "fat": {"type": "NUMBER", "description": "Fat in grams"},
}

TOOL_DECLARATIONS: List[Dict[str, Any]] = [
    {
        "name": "update_food_item",
        "description": "Update an existing food item in the meal plan",
        "parameters": {
            "type": "OBJECT",
            "properties": {
                "food_id": {"type": "NUMBER", "description": "The ID of the food item to update"},
                "name": {"type": "STRING", "description": "New name of the food"},
                "portion": {"type": "STRING", "description": "New portion size"},
                **_MACRO_PROPERTIES,
            },
            "required": ["food_id"],
        },
    },
    {
        "name": "add_food_item",
        "description": "Add a new food item to the meal plan",
        "parameters": {
            "type": "OBJECT",
            "properties": {
                "meal_type": {"type": "STRING", "description": "breakfast, lunch, dinner, or snack"},
                "name": {"type": "STRING", "description": "Name of the food"},
                "portion": {"type": "STRING", "description": "Portion size"},
                **_MACRO_PROPERTIES,
            },
            "required": ["meal_type", "name", "calories", "protein", "carbs", "fat"],
        },
    },
    {
        "name": "remove_food_item",
        "description": "Remove a food item from the meal plan",
        "parameters": {
            "type": "OBJECT",
            "properties": {
                "food_id": {"type": "NUMBER", "description": "The ID of the food item to remove"},
            },
            "required": ["food_id"],
        },
    },
]

UPDATABLE_FIELDS = ("name", "portion", "calories", "protein", "carbs", "fat")


def build_system_prompt(
    plan: Plan,
    user: User,
    food_items: Sequence[FoodItem],
    history: Sequence[ChatMessage] = ()
) -> str:
    """Plan context, the user's goal and the instructions for tool use."""
    food_context = "\n".join(
        f"ID: {item.id}, Type: {item.meal_type}, Name: {item.name}, "
        f"Portion: {item.portion}, Cals: {item.calories}"
        for item in food_items
    )

    prompt = f"""You are a nutrition assistant helping a user modify their meal plan.
Current Plan Context:
{food_context}

User Goal: {user.goal or 'healthy eating'}
Diet Type: {user.diet_type or 'balanced'}

When the user asks to change something, use the available tools to modify the plan.
Always reply with a confirmation of what you did or a clarifying question.
If you add or update foods, estimate the nutritional values (protein, carbs, fat) if not provided.
"""
    if history:
        turns = "\n".join(
            f"{'User' if message.role == 'user' else 'Assistant'}: {message.content}"
            for message in history
        )
        prompt += f"\nConversation so far:\n{turns}\n"
    return prompt


def _coerce(field: str, value: Any) -> Any:
    if field == "calories":
        return parse_int(value)
    if field in ("protein", "carbs", "fat"):
        return parse_float(value)
    return str(value)


def _food_id(args: Dict[str, Any]) -> int:
    raw = args.get("food_id", args.get("foodId"))
    try:
        return int(float(raw))
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"Invalid food_id: {raw!r}")


def _plan_item(db: Session, plan: Plan, food_id: int) -> FoodItem:
    item = db.get(FoodItem, food_id)
    if item is None or item.plan_id != plan.id:
        raise NotFoundError(f"Food item {food_id} not found in plan {plan.id}")
    return item


def _update_food_item(db: Session, plan: Plan, args: Dict[str, Any]) -> Dict[str, Any]:
    food_id = _food_id(args)
    item = _plan_item(db, plan, food_id)
    updates = {
        field: _coerce(field, args[field])
        for field in UPDATABLE_FIELDS
        if args.get(field) is not None
    }
    for field, value in updates.items():
        setattr(item, field, value)
    db.flush()
    return {"type": "update", "food_id": food_id, "details": updates}


def _add_food_item(db: Session, plan: Plan, args: Dict[str, Any]) -> Dict[str, Any]:
    meal_type = str(args.get("meal_type") or args.get("mealType") or "").strip().lower()
    name = str(args.get("name") or "").strip()
    if not meal_type or not name:
        raise ValidationError("add_food_item requires meal_type and name")

    item = FoodItem(
        plan_id=plan.id,
        meal_type=meal_type,
        name=name,
        portion=args.get("portion") or DEFAULT_PORTION,
        calories=_coerce("calories", args.get("calories") or 0),
        protein=_coerce("protein", args.get("protein") or 0),
        carbs=_coerce("carbs", args.get("carbs") or 0),
        fat=_coerce("fat", args.get("fat") or 0),
        sort_order=next_sort_order(db, plan.id, meal_type),
    )
    db.add(item)
    db.flush()
    return {"type": "add", "food_id": item.id, "details": args}


def _remove_food_item(db: Session, plan: Plan, args: Dict[str, Any]) -> Dict[str, Any]:
    food_id = _food_id(args)
    item = _plan_item(db, plan, food_id)
    db.delete(item)
    db.flush()
    return {"type": "remove", "food_id": food_id}


TOOL_HANDLERS = {
    "update_food_item": _update_food_item,
    "add_food_item": _add_food_item,
    "remove_food_item": _remove_food_item,
}


def apply_tool_calls(db: Session, plan: Plan, tool_calls: Sequence[ToolCall]) -> List[Dict[str, Any]]:
    """
    Execute tool calls in order as writes on the plan's food items.

    Unknown tool names are ignored. Each call is committed as soon as it
    succeeds, so a failing call leaves the earlier ones of the turn in place.

    Returns:
        List of executed actions for the assistant message's action log.
    """
    actions = []
    for call in tool_calls:
        handler = TOOL_HANDLERS.get(call.name)
        if handler is None:
            logger.warning(f"Ignoring unknown tool call: {call.name}")
            continue
        actions.append(handler(db, plan, call.args))
        db.commit()
    return actions


def confirmation_for(actions: Sequence[Dict[str, Any]]) -> str:
    """Canned confirmation used when the model ran tools but said nothing."""
    kinds = {action["type"] for action in actions}
    if "add" in kinds:
        return "I've added that to your plan."
    if "remove" in kinds:
        return "I've removed that from your plan."
    return "I've updated your plan."


async def handle_chat_message(
    db: Session,
    plan: Plan,
    user: User,
    message: str,
    gemini: GeminiService
) -> Tuple[str, List[Dict[str, Any]]]:
    """
    Run one chatbot turn against a plan.

    The user message is committed before the model is called and every
    plan edit is committed as it is applied. If an edit fails, only that
    edit is rolled back: earlier edits and the user message stay, no
    assistant message is stored and the error propagates.

    Returns:
        (reply text, executed actions)
    """
    history = get_chat_messages(db, plan.id, limit=settings.CHAT_HISTORY_LIMIT)

    db.add(ChatMessage(plan_id=plan.id, role="user", content=message))
    db.commit()

    prompt = build_system_prompt(plan, user, get_food_items(db, plan.id), history)
    reply = await gemini.generate_with_tools(f"{prompt}\n\nUser: {message}", TOOL_DECLARATIONS)

    try:
        actions = apply_tool_calls(db, plan, reply.tool_calls)

        text = reply.text
        if actions and not text:
            text = confirmation_for(actions)

        db.add(ChatMessage(
            plan_id=plan.id,
            role="assistant",
            content=text or FALLBACK_REPLY,
            action=json.dumps(actions) if actions else None,
        ))
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Chat turn on plan {plan.id}: {len(actions)} action(s)")
    return text, actions
