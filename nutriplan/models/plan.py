"""
NutriPlan API - Plan ORM Models.

Meal plans, their food items and the chatbot conversation attached to each plan.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship

from nutriplan.database import Base


MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")


class Plan(Base):
    """
    Plan model for a user's daily meal plan.

    At most one plan per user is active. That is a convention kept by
    deactivating older plans when a new one is created, not a constraint.

    Attributes:
        id: Plan identifier.
        user_id: Foreign key to User.
        name: Display name.
        description: Short description.
        target_calories: Daily calorie target copied from the user at creation.
        target_protein: Protein target (g).
        target_carbs: Carbohydrate target (g).
        target_fat: Fat target (g).
        is_active: Whether this is the user's current plan.
        created_at: Plan generation timestamp.
        updated_at: Last modification timestamp.
    """

    __tablename__ = "plans"
    __table_args__ = (
        Index("ix_plans_user_id_is_active", "user_id", "is_active"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )

    name = Column(String(255), nullable=False)
    description = Column(String(500), nullable=True)

    # Targets
    target_calories = Column(Integer, nullable=False, default=2000)
    target_protein = Column(Float, nullable=False, default=150)
    target_carbs = Column(Float, nullable=False, default=250)
    target_fat = Column(Float, nullable=False, default=70)

    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    user = relationship("User", back_populates="plans")
    food_items = relationship(
        "FoodItem",
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="[FoodItem.meal_type, FoodItem.sort_order]"
    )
    chat_messages = relationship(
        "ChatMessage",
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="ChatMessage.id"
    )

    def __repr__(self) -> str:
        """String representation of Plan."""
        return f"<Plan(id={self.id}, user_id={self.user_id}, active={self.is_active})>"


class FoodItem(Base):
    """
    A single food in a plan.

    Items are ordered within their meal type by ``sort_order`` (0-based).
    """

    __tablename__ = "food_items"
    __table_args__ = (
        Index("ix_food_items_plan_meal", "plan_id", "meal_type"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    plan_id = Column(
        Integer,
        ForeignKey("plans.id", ondelete="CASCADE"),
        nullable=False
    )

    meal_type = Column(String(20), nullable=False)  # breakfast, lunch, dinner, snack
    name = Column(String(255), nullable=False)
    portion = Column(String(100), nullable=False, default="1 serving")

    # Macros
    calories = Column(Integer, nullable=False, default=0)
    protein = Column(Float, nullable=False, default=0)
    carbs = Column(Float, nullable=False, default=0)
    fat = Column(Float, nullable=False, default=0)

    # Tracking
    is_consumed = Column(Boolean, nullable=False, default=False)
    consumed_at = Column(DateTime(timezone=True), nullable=True)

    sort_order = Column(Integer, nullable=False, default=0)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )

    plan = relationship("Plan", back_populates="food_items")

    def __repr__(self) -> str:
        """String representation of FoodItem."""
        return f"<FoodItem(id={self.id}, meal_type={self.meal_type}, name={self.name})>"


class ChatMessage(Base):
    """
    One turn of the plan chatbot conversation.

    Attributes:
        role: "user" or "assistant".
        content: Message text.
        action: JSON-serialized list of plan edits made for this turn, if any.
    """

    __tablename__ = "chat_messages"
    __table_args__ = (
        Index("ix_chat_messages_plan_id", "plan_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    plan_id = Column(
        Integer,
        ForeignKey("plans.id", ondelete="CASCADE"),
        nullable=False
    )

    role = Column(String(20), nullable=False)
    content = Column(Text, nullable=False)
    action = Column(Text, nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )

    plan = relationship("Plan", back_populates="chat_messages")

    def __repr__(self) -> str:
        """String representation of ChatMessage."""
        return f"<ChatMessage(id={self.id}, role={self.role})>"
