"""
NutriPlan API - Gemini AI Service.

Thin client around google-genai used for meal plan generation and the
plan chatbot's function calling.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from google import genai
from google.genai import types

from settings import settings
from nutriplan.utils.errors import AIServiceError


logger = logging.getLogger(__name__)


@dataclass
class ToolCall:
    """A function call emitted by the model."""

    name: str
    args: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ModelReply:
    """Text and function calls from one model turn, in the order they arrived."""

    text: str = ""
    tool_calls: List[ToolCall] = field(default_factory=list)


def extract_json(text: str) -> Optional[Dict[str, Any]]:
    """
    Extract and parse a JSON object from a model response.

    Handles replies wrapped in markdown code fences and leading/trailing prose.

    Example:
        >>> extract_json('```json\\n{"meals": []}\\n```')
        {'meals': []}
    """
    if not text:
        return None

    if "```json" in text:
        start = text.find("```json") + 7
        end = text.find("```", start)
        text = text[start:end if end != -1 else None].strip()
    elif "```" in text:
        start = text.find("```") + 3
        end = text.find("```", start)
        text = text[start:end if end != -1 else None].strip()

    json_start = text.find("{")
    json_end = text.rfind("}") + 1
    if json_start == -1 or json_end <= json_start:
        return None

    try:
        return json.loads(text[json_start:json_end])
    except json.JSONDecodeError as e:
        logger.error(f"JSON parsing error: {str(e)}")
        return None


class GeminiService:
    """
    Gemini API service for AI-powered features.
    """

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        """
        Initialize Gemini client. Without an API key every call raises AIServiceError.
        """
        self.api_key = api_key or settings.GEMINI_API_KEY
        self.model_name = model_name or settings.GEMINI_MODEL
        self.client = genai.Client(api_key=self.api_key) if self.api_key else None

    def _require_client(self) -> genai.Client:
        if self.client is None:
            logger.error("Gemini API key not configured")
            raise AIServiceError("AI service is not configured")
        return self.client

    async def generate_text(self, prompt: str) -> str:
        """
        Single-turn text generation.

        Raises:
            AIServiceError: Missing key or upstream failure.
        """
        client = self._require_client()
        try:
            response = await client.aio.models.generate_content(
                model=self.model_name,
                contents=prompt,
            )
        except Exception as e:
            logger.error(f"Gemini generation error: {str(e)}")
            raise AIServiceError("AI generation failed", detail=str(e)) from e

        return response.text or ""

    async def generate_with_tools(
        self,
        prompt: str,
        function_declarations: List[Dict[str, Any]]
    ) -> ModelReply:
        """
        Single-turn generation with function calling enabled.

        The model decides which declared functions to call; nothing is
        executed here. Calls and text parts are returned in response order.
        """
        client = self._require_client()
        config = types.GenerateContentConfig(
            tools=[types.Tool(function_declarations=function_declarations)],
        )
        try:
            response = await client.aio.models.generate_content(
                model=self.model_name,
                contents=[types.Content(role="user", parts=[types.Part(text=prompt)])],
                config=config,
            )
        except Exception as e:
            logger.error(f"Gemini tool call error: {str(e)}")
            raise AIServiceError("AI generation failed", detail=str(e)) from e

        reply = ModelReply()
        candidates = response.candidates or []
        if not candidates or candidates[0].content is None:
            return reply

        for part in candidates[0].content.parts or []:
            if part.function_call is not None:
                reply.tool_calls.append(ToolCall(
                    name=part.function_call.name,
                    args=dict(part.function_call.args or {}),
                ))
            if part.text:
                reply.text += part.text

        return reply


_gemini_service: Optional[GeminiService] = None


def get_gemini_service() -> GeminiService:
    """FastAPI dependency returning the process-wide Gemini service."""
    global _gemini_service
    if _gemini_service is None:
        _gemini_service = GeminiService()
    return _gemini_service
