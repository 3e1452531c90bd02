"""NutriPlan API - Routes Package."""

from nutriplan.routes import auth, user, plans, foods, chatbot, quiz

__all__ = ["auth", "user", "plans", "foods", "chatbot", "quiz"]
