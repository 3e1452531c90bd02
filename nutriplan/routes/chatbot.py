"""
NutriPlan API - Plan Chatbot Routes.

Natural-language edits to a meal plan through model function calling.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from nutriplan.database import get_db
from nutriplan.dependencies import get_current_user
from nutriplan.middleware.rate_limit import limiter, ai_limit
from nutriplan.models import User
from nutriplan.schemas.chatbot import ChatRequest, ChatResponse
from nutriplan.services.chatbot import handle_chat_message
from nutriplan.services.gemini import GeminiService, get_gemini_service
from nutriplan.services.plans import get_owned_plan, plan_snapshot
from nutriplan.utils.errors import ValidationError

logger = logging.getLogger(__name__)
router = APIRouter()


DEFAULT_REPLY = "Done!"


@router.post("/message", response_model=ChatResponse)
@limiter.limit(ai_limit())
async def send_message(
    request: Request,
    body: ChatRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    gemini: GeminiService = Depends(get_gemini_service)
):
    """
    Run one chat turn against a plan the user owns.

    Returns the assistant reply with the refreshed plan, summary and
    grouped foods.
    """
    if body.plan_id is None or not (body.message or "").strip():
        raise ValidationError("Missing plan_id or message")

    plan = get_owned_plan(db, body.plan_id, user.id)

    try:
        text, _actions = await handle_chat_message(db, plan, user, body.message.strip(), gemini)
        snapshot = plan_snapshot(db, plan)
        return ChatResponse(message=text or DEFAULT_REPLY, **snapshot)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Chatbot error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "Error processing message", "error": str(e)}
        )
