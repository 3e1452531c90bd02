import asyncio
from types import SimpleNamespace

import pytest

from nutriplan.services.gemini import GeminiService, extract_json
from nutriplan.utils.errors import AIServiceError


def test_extract_json_from_fenced_reply():
    assert extract_json('```json\n{"meals": []}\n```') == {"meals": []}


def test_extract_json_from_plain_fence():
    assert extract_json('```\n{"a": 1}\n```') == {"a": 1}


def test_extract_json_ignores_surrounding_prose():
    text = 'Here is your plan: {"meals": [{"name": "Eggs"}]} Enjoy!'
    assert extract_json(text) == {"meals": [{"name": "Eggs"}]}


@pytest.mark.parametrize("text", ["", "no json here", "{not: valid}", "} backwards {"])
def test_extract_json_returns_none_for_garbage(text):
    assert extract_json(text) is None


def test_missing_api_key_raises_ai_service_error():
    service = GeminiService(api_key=None)
    service.client = None
    with pytest.raises(AIServiceError):
        asyncio.run(service.generate_text("hello"))


class _Models:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return self.response


def _service_with(models):
    service = GeminiService(api_key=None)
    service.client = SimpleNamespace(aio=SimpleNamespace(models=models))
    return service


def _part(text=None, call=None):
    function_call = SimpleNamespace(name=call[0], args=call[1]) if call else None
    return SimpleNamespace(text=text, function_call=function_call)


def test_generate_with_tools_collects_calls_and_text_in_order():
    response = SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[
        _part(call=("remove_food_item", {"food_id": 3})),
        _part(text="Removed the toast. "),
        _part(call=("add_food_item", {"meal_type": "breakfast", "name": "Eggs"})),
        _part(text="Added eggs."),
    ]))])
    models = _Models(response)

    reply = asyncio.run(_service_with(models).generate_with_tools("prompt", []))

    assert [call.name for call in reply.tool_calls] == ["remove_food_item", "add_food_item"]
    assert reply.tool_calls[0].args == {"food_id": 3}
    assert reply.text == "Removed the toast. Added eggs."
    assert "config" in models.calls[0]


def test_generate_with_tools_handles_empty_candidates():
    reply = asyncio.run(
        _service_with(_Models(SimpleNamespace(candidates=None))).generate_with_tools("p", [])
    )
    assert reply.text == ""
    assert reply.tool_calls == []


def test_upstream_failure_becomes_ai_service_error():
    service = _service_with(_Models(error=RuntimeError("quota exceeded")))
    with pytest.raises(AIServiceError) as exc:
        asyncio.run(service.generate_text("hello"))
    assert exc.value.status_code == 502
    assert "quota exceeded" in exc.value.detail
