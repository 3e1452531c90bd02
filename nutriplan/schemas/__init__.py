"""NutriPlan API - Pydantic Schemas Package."""

from nutriplan.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    TokenResponse,
    RefreshRequest,
    MeResponse,
)
from nutriplan.schemas.user import (
    ProfileUpdateRequest,
    ProfileResponse,
    ProfileUpdateResponse,
    CheckProfileResponse,
)
from nutriplan.schemas.plan import (
    FoodItemResponse,
    PlanResponse,
    PlanDetailResponse,
    PlanSummary,
    CreatePlanRequest,
    CreatePlanResponse,
    ActivePlanResponse,
    ToggleFoodRequest,
    ToggleFoodResponse,
    PlanHistoryResponse,
)
from nutriplan.schemas.chatbot import (
    ChatRequest,
    ChatResponse,
    ChatHistoryResponse,
)
from nutriplan.schemas.quiz import (
    QuizCardResponse,
    CompleteCardRequest,
    CompleteCardResponse,
    QuizStatsResponse,
)

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "TokenResponse",
    "RefreshRequest",
    "MeResponse",
    "ProfileUpdateRequest",
    "ProfileResponse",
    "ProfileUpdateResponse",
    "CheckProfileResponse",
    "FoodItemResponse",
    "PlanResponse",
    "PlanDetailResponse",
    "PlanSummary",
    "CreatePlanRequest",
    "CreatePlanResponse",
    "ActivePlanResponse",
    "ToggleFoodRequest",
    "ToggleFoodResponse",
    "PlanHistoryResponse",
    "ChatRequest",
    "ChatResponse",
    "ChatHistoryResponse",
    "QuizCardResponse",
    "CompleteCardRequest",
    "CompleteCardResponse",
    "QuizStatsResponse",
]
