"""
NutriPlan API - Plan Store Service.

Active-plan lookup, ownership checks, food item consumption tracking and the
plan snapshot (plan + summary + grouped foods) shared by several routes.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from nutriplan.models import ChatMessage, FoodItem, Plan
from nutriplan.schemas.plan import FoodItemResponse, PlanDetailResponse, PlanResponse
from nutriplan.services.nutrition import calculate_summary, group_by_meal_type
from nutriplan.utils.errors import ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


def get_food_items(db: Session, plan_id: int) -> List[FoodItem]:
    """Food items of a plan ordered by meal type, then position."""
    return list(db.scalars(
        select(FoodItem)
        .where(FoodItem.plan_id == plan_id)
        .order_by(FoodItem.meal_type, FoodItem.sort_order, FoodItem.id)
    ))


def get_active_plan(db: Session, user_id: UUID) -> Optional[Plan]:
    """The user's active plan, newest first if the convention was ever broken."""
    return db.scalars(
        select(Plan)
        .where(Plan.user_id == user_id, Plan.is_active.is_(True))
        .order_by(Plan.created_at.desc(), Plan.id.desc())
        .limit(1)
    ).first()


def deactivate_plans(db: Session, user_id: UUID) -> int:
    """Mark every active plan of the user inactive. Returns the number touched."""
    result = db.execute(
        update(Plan)
        .where(Plan.user_id == user_id, Plan.is_active.is_(True))
        .values(is_active=False, updated_at=datetime.now(timezone.utc))
    )
    return result.rowcount or 0


def get_owned_plan(db: Session, plan_id: int, user_id: UUID) -> Plan:
    """
    Load a plan and verify the caller owns it.

    Raises:
        NotFoundError: Unknown plan.
        ForbiddenError: Plan belongs to another user.
    """
    plan = db.get(Plan, plan_id)
    if plan is None:
        raise NotFoundError("Plan not found")
    if plan.user_id != user_id:
        raise ForbiddenError()
    return plan


def next_sort_order(db: Session, plan_id: int, meal_type: str) -> int:
    """Position after the last item of this meal type, or 0 for an empty meal."""
    current = db.scalar(
        select(func.max(FoodItem.sort_order))
        .where(FoodItem.plan_id == plan_id, FoodItem.meal_type == meal_type)
    )
    return 0 if current is None else current + 1


def plan_snapshot(db: Session, plan: Plan, grouped: bool = True) -> Dict[str, Any]:
    """
    Serialize a plan with its ordered items, summary and (optionally) the
    items grouped by meal type.
    """
    items = get_food_items(db, plan.id)
    serialized = [FoodItemResponse.model_validate(item) for item in items]

    snapshot: Dict[str, Any] = {
        "plan": PlanDetailResponse(
            **PlanResponse.model_validate(plan).model_dump(),
            food_items=serialized,
        ),
        "summary": calculate_summary(plan, items),
    }
    if grouped:
        snapshot["grouped_foods"] = group_by_meal_type(serialized)
    return snapshot


def toggle_food_item(
    db: Session,
    food_id: int,
    user_id: UUID,
    is_consumed: Optional[bool] = True
) -> Tuple[FoodItem, Dict[str, Any]]:
    """
    Mark a food item consumed (default) or not consumed.

    Only an explicit ``False`` clears the flag.

    Raises:
        NotFoundError: Unknown food item.
        ForbiddenError: Item belongs to another user's plan.
    """
    item = db.get(FoodItem, food_id)
    if item is None:
        raise NotFoundError("Food item not found")
    if item.plan.user_id != user_id:
        raise ForbiddenError()

    consumed = is_consumed is not False
    item.is_consumed = consumed
    item.consumed_at = datetime.now(timezone.utc) if consumed else None
    db.commit()
    db.refresh(item)

    logger.info(f"Food item {food_id} consumed={consumed}")
    summary = calculate_summary(item.plan, get_food_items(db, item.plan_id))
    return item, summary


def plan_history(db: Session, user_id: UUID, limit: int = 20) -> List[Dict[str, Any]]:
    """Most recent plans with their item counts."""
    counts = (
        select(FoodItem.plan_id, func.count(FoodItem.id).label("item_count"))
        .group_by(FoodItem.plan_id)
        .subquery()
    )
    rows = db.execute(
        select(Plan, func.coalesce(counts.c.item_count, 0))
        .outerjoin(counts, counts.c.plan_id == Plan.id)
        .where(Plan.user_id == user_id)
        .order_by(Plan.created_at.desc(), Plan.id.desc())
        .limit(limit)
    ).all()

    return [
        {
            "id": plan.id,
            "name": plan.name,
            "is_active": plan.is_active,
            "target_calories": plan.target_calories,
            "item_count": item_count,
            "created_at": plan.created_at,
        }
        for plan, item_count in rows
    ]


def get_chat_messages(db: Session, plan_id: int, limit: Optional[int] = None) -> List[ChatMessage]:
    """
    Persisted chat messages of a plan, oldest first.

    With ``limit`` only the most recent ``limit`` messages are returned
    (still oldest first).
    """
    query = select(ChatMessage).where(ChatMessage.plan_id == plan_id)
    if limit is None:
        return list(db.scalars(query.order_by(ChatMessage.id)))

    recent = list(db.scalars(query.order_by(ChatMessage.id.desc()).limit(limit)))
    return list(reversed(recent))
