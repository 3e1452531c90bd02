"""
NutriPlan API - ORM Models Package.

Export all SQLAlchemy models so they register with the declarative base.
"""

from nutriplan.models.user import User
from nutriplan.models.plan import Plan, FoodItem, ChatMessage, MEAL_TYPES
from nutriplan.models.quiz import QuizCard, QuizAttempt, CARD_TYPES

__all__ = [
    "User",
    "Plan",
    "FoodItem",
    "ChatMessage",
    "QuizCard",
    "QuizAttempt",
    "MEAL_TYPES",
    "CARD_TYPES",
]
