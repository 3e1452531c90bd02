"""Shared fixtures: in-memory database, fake model, authenticated users."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["ENV"] = "testing"
os.environ["DEBUG"] = "false"
os.environ.pop("GEMINI_API_KEY", None)
os.environ.pop("SENTRY_DSN", None)

import json
import uuid

import pytest
from fastapi.testclient import TestClient

from main import app
from nutriplan.database import Base, get_engine, get_session_factory, init_db
from nutriplan.models import FoodItem, Plan, QuizCard, User
from nutriplan.services.cache import cache_service
from nutriplan.services.gemini import ModelReply, ToolCall, get_gemini_service

init_db()
cache_service.disable()


STRONG_PASSWORD = "Sup3rsecret"

COMPLETE_PROFILE = {
    "age": 30,
    "sex": "male",
    "height_cm": 180,
    "weight_kg": 80,
    "activity_level": "moderate",
    "goal": "maintain_weight",
    "diet_type": "omnivore",
    "allergies": ["peanuts"],
    "dislikes": ["olives"],
}


class FakeGemini:
    """Scripted stand-in for GeminiService."""

    def __init__(self):
        self.text = ""
        self.replies = []
        self.prompts = []
        self.declarations = []
        self.error = None

    def reply_with(self, text="", *calls):
        self.replies.append(ModelReply(
            text=text,
            tool_calls=[ToolCall(name=name, args=args) for name, args in calls],
        ))

    def meals(self, meals, fenced=True):
        body = json.dumps({"meals": meals})
        self.text = f"```json\n{body}\n```" if fenced else body

    async def generate_text(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.text

    async def generate_with_tools(self, prompt, function_declarations):
        self.prompts.append(prompt)
        self.declarations.append(function_declarations)
        if self.error:
            raise self.error
        return self.replies.pop(0) if self.replies else ModelReply()


@pytest.fixture(autouse=True)
def reset_database():
    engine = get_engine()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = get_session_factory()()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_gemini():
    return FakeGemini()


@pytest.fixture
def client(fake_gemini):
    app.dependency_overrides[get_gemini_service] = lambda: fake_gemini
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def memory_cache(monkeypatch):
    """Dict-backed cache so blacklisting can be observed."""
    store = {}

    async def get(key):
        return store.get(key)

    async def set(key, value, ttl_seconds=3600):
        store[key] = value
        return True

    monkeypatch.setattr(cache_service, "get", get)
    monkeypatch.setattr(cache_service, "set", set)
    return store


def register(client, email="jane@example.com", name="Jane", password=STRONG_PASSWORD):
    response = client.post("/auth/register", json={
        "email": email,
        "password": password,
        "name": name,
    })
    assert response.status_code == 201, response.text
    return response.json()


def auth_headers(tokens):
    return {"Authorization": f"Bearer {tokens['access_token']}"}


@pytest.fixture
def tokens(client):
    return register(client)


@pytest.fixture
def headers(tokens):
    return auth_headers(tokens)


@pytest.fixture
def user_id(tokens):
    return uuid.UUID(tokens["user_id"])


@pytest.fixture
def other_headers(client):
    return auth_headers(register(client, email="bob@example.com", name="Bob"))


@pytest.fixture
def profiled_headers(client, headers):
    response = client.post("/user/profile", json=COMPLETE_PROFILE, headers=headers)
    assert response.status_code == 200, response.text
    return headers


def make_plan(db, owner_id, items=None, **fields):
    """Insert a plan with food items given as (meal_type, name, calories, protein, carbs, fat)."""
    plan = Plan(
        user_id=owner_id,
        name=fields.pop("name", "Test plan"),
        target_calories=fields.pop("target_calories", 2000),
        target_protein=fields.pop("target_protein", 150),
        target_carbs=fields.pop("target_carbs", 250),
        target_fat=fields.pop("target_fat", 70),
        is_active=fields.pop("is_active", True),
        **fields,
    )
    counters = {}
    for meal_type, name, calories, protein, carbs, fat in items or []:
        position = counters.get(meal_type, 0)
        counters[meal_type] = position + 1
        plan.food_items.append(FoodItem(
            meal_type=meal_type,
            name=name,
            calories=calories,
            protein=protein,
            carbs=carbs,
            fat=fat,
            sort_order=position,
        ))
    db.add(plan)
    db.commit()
    db.refresh(plan)
    return plan


def make_card(db, card_type="truth", category="nutrition_basics", question=None, is_active=True):
    card = QuizCard(
        type=card_type,
        question=question or f"{card_type} question {uuid.uuid4().hex[:6]}",
        difficulty="easy",
        category=category,
        is_active=is_active,
    )
    db.add(card)
    db.commit()
    db.refresh(card)
    return card


SAMPLE_MEALS = [
    {"meal_type": "breakfast", "name": "Oatmeal", "portion": "1 cup", "calories": 300, "protein": 10, "carbs": 54, "fat": 5},
    {"meal_type": "breakfast", "name": "Blueberries", "portion": "1/2 cup", "calories": 42, "protein": 0.5, "carbs": 11, "fat": 0.2},
    {"mealType": "Lunch", "name": "Chicken salad", "calories": "450", "protein": "40", "carbs": 20, "fat": 22},
    {"meal_type": "dinner", "name": "Salmon", "portion": "150g", "calories": 350, "protein": 34, "carbs": 0, "fat": 22},
    {"meal_type": "snack", "name": "Almonds", "portion": "1/4 cup", "calories": 170, "protein": 6, "carbs": 6, "fat": 15},
]
