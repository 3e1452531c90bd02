import json
from types import SimpleNamespace

from conftest import make_plan

from nutriplan.models import ChatMessage, FoodItem
from nutriplan.services.chatbot import TOOL_DECLARATIONS, build_system_prompt, confirmation_for
from nutriplan.utils.errors import AIServiceError


ITEMS = [
    ("breakfast", "Oatmeal", 300, 10, 54, 5),
    ("breakfast", "Toast", 120, 4, 22, 1.5),
    ("dinner", "Pasta", 600, 20, 90, 12),
]


def _send(client, headers, plan_id, message="Make breakfast lighter"):
    return client.post("/chatbot/message", json={"plan_id": plan_id, "message": message}, headers=headers)


def _messages(db, plan_id):
    db.expire_all()
    return db.query(ChatMessage).filter_by(plan_id=plan_id).order_by(ChatMessage.id).all()


def test_add_food_item(client, headers, fake_gemini, db, user_id):
    plan = make_plan(db, user_id, ITEMS)
    fake_gemini.reply_with("", ("add_food_item", {
        "meal_type": "breakfast", "name": "Boiled egg", "calories": 78, "protein": 6.3, "carbs": 0.6, "fat": 5.3,
    }))

    response = _send(client, headers, plan.id, "Add an egg to breakfast")
    assert response.status_code == 200, response.text
    body = response.json()

    assert body["message"] == "I've added that to your plan."
    breakfast = body["grouped_foods"]["breakfast"]
    assert [item["name"] for item in breakfast] == ["Oatmeal", "Toast", "Boiled egg"]
    egg = breakfast[-1]
    assert egg["sort_order"] == 2
    assert egg["portion"] == "1 serving"
    assert egg["calories"] == 78
    assert body["summary"]["total_items"] == 4

    user_msg, assistant_msg = _messages(db, plan.id)
    assert (user_msg.role, user_msg.content) == ("user", "Add an egg to breakfast")
    assert assistant_msg.role == "assistant"
    assert assistant_msg.content == "I've added that to your plan."
    action = json.loads(assistant_msg.action)
    assert action[0]["type"] == "add"
    assert action[0]["details"]["name"] == "Boiled egg"


def test_add_to_empty_meal_starts_at_zero(client, headers, fake_gemini, db, user_id):
    plan = make_plan(db, user_id, ITEMS)
    fake_gemini.reply_with("Added!", ("add_food_item", {
        "meal_type": "snack", "name": "Apple", "portion": "1 medium", "calories": 95, "protein": 0, "carbs": 25, "fat": 0,
    }))

    body = _send(client, headers, plan.id).json()
    assert body["message"] == "Added!"
    assert body["grouped_foods"]["snack"][0]["sort_order"] == 0
    assert body["grouped_foods"]["snack"][0]["portion"] == "1 medium"


def test_update_food_item(client, headers, fake_gemini, db, user_id):
    plan = make_plan(db, user_id, ITEMS)
    toast = next(item for item in plan.food_items if item.name == "Toast")
    fake_gemini.reply_with("", ("update_food_item", {"food_id": float(toast.id), "name": "Rye toast", "calories": 110}))

    body = _send(client, headers, plan.id).json()
    assert body["message"] == "I've updated your plan."

    db.expire_all()
    updated = db.get(FoodItem, toast.id)
    assert updated.name == "Rye toast"
    assert updated.calories == 110
    assert updated.portion == "1 serving"

    action = json.loads(_messages(db, plan.id)[-1].action)
    assert action == [{"type": "update", "food_id": toast.id, "details": {"name": "Rye toast", "calories": 110}}]


def test_remove_food_item(client, headers, fake_gemini, db, user_id):
    plan = make_plan(db, user_id, ITEMS)
    pasta_id = next(item.id for item in plan.food_items if item.name == "Pasta")
    fake_gemini.reply_with("", ("remove_food_item", {"food_id": pasta_id}))

    body = _send(client, headers, plan.id, "Drop the pasta").json()
    assert body["message"] == "I've removed that from your plan."
    assert body["grouped_foods"]["dinner"] == []

    db.expire_all()
    assert db.get(FoodItem, pasta_id) is None


def test_add_wins_confirmation_over_remove():
    assert confirmation_for([{"type": "remove"}, {"type": "add"}]) == "I've added that to your plan."
    assert confirmation_for([{"type": "update"}, {"type": "remove"}]) == "I've removed that from your plan."
    assert confirmation_for([{"type": "update"}]) == "I've updated your plan."


def test_text_only_reply(client, headers, fake_gemini, db, user_id):
    plan = make_plan(db, user_id, ITEMS)
    fake_gemini.reply_with("Do you want a vegetarian option?")

    body = _send(client, headers, plan.id).json()
    assert body["message"] == "Do you want a vegetarian option?"

    assistant_msg = _messages(db, plan.id)[-1]
    assert assistant_msg.action is None


def test_empty_reply_falls_back(client, headers, fake_gemini, db, user_id):
    plan = make_plan(db, user_id, ITEMS)
    fake_gemini.reply_with("")

    body = _send(client, headers, plan.id).json()
    assert body["message"] == "Done!"
    assert _messages(db, plan.id)[-1].content == "I've processed your request."


def test_unknown_tool_is_ignored(client, headers, fake_gemini, db, user_id):
    plan = make_plan(db, user_id, ITEMS)
    fake_gemini.reply_with("", ("delete_everything", {}))

    body = _send(client, headers, plan.id).json()
    assert body["message"] == "Done!"
    assert body["summary"]["total_items"] == 3


def test_tool_call_for_item_outside_plan_fails(client, headers, fake_gemini, db, user_id):
    plan = make_plan(db, user_id, ITEMS)
    other_plan = make_plan(db, user_id, [("lunch", "Soup", 200, 8, 20, 6)], is_active=False)
    soup_id = other_plan.food_items[0].id
    fake_gemini.reply_with("", ("remove_food_item", {"food_id": soup_id}))

    response = _send(client, headers, plan.id)
    assert response.status_code == 500
    assert response.json()["detail"]["message"] == "Error processing message"

    db.expire_all()
    assert db.get(FoodItem, soup_id) is not None
    assert [m.role for m in _messages(db, plan.id)] == ["user"]


def test_failing_call_keeps_earlier_edits(client, headers, fake_gemini, db, user_id):
    plan = make_plan(db, user_id, ITEMS)
    fake_gemini.reply_with(
        "",
        ("add_food_item", {"meal_type": "snack", "name": "Apple", "calories": "95 kcal", "protein": 0, "carbs": "25g", "fat": 0}),
        ("remove_food_item", {"food_id": 9999}),
    )

    response = _send(client, headers, plan.id)
    assert response.status_code == 500

    db.expire_all()
    apple = db.query(FoodItem).filter_by(plan_id=plan.id, name="Apple").one()
    assert apple.calories == 95
    assert apple.carbs == 25.0
    assert [m.role for m in _messages(db, plan.id)] == ["user"]


def test_model_failure(client, headers, fake_gemini, db, user_id):
    plan = make_plan(db, user_id, ITEMS)
    fake_gemini.error = AIServiceError("AI generation failed")

    response = _send(client, headers, plan.id)
    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["message"] == "Error processing message"
    assert detail["error"] == "AI generation failed"


def test_missing_fields(client, headers):
    assert client.post("/chatbot/message", json={"message": "hi"}, headers=headers).status_code == 400
    assert client.post("/chatbot/message", json={"plan_id": 1}, headers=headers).status_code == 400
    assert client.post("/chatbot/message", json={"plan_id": 1, "message": "  "}, headers=headers).status_code == 400


def test_unknown_plan(client, headers):
    assert _send(client, headers, 9999).status_code == 404


def test_foreign_plan(client, other_headers, db, user_id):
    plan = make_plan(db, user_id, ITEMS)
    assert _send(client, other_headers, plan.id).status_code == 403


def test_prompt_and_tools_sent_to_model(client, headers, fake_gemini, db, user_id):
    plan = make_plan(db, user_id, ITEMS)
    fake_gemini.reply_with("First answer")
    fake_gemini.reply_with("Second answer")

    _send(client, headers, plan.id, "first question")
    _send(client, headers, plan.id, "second question")

    oatmeal = plan.food_items[0]
    first, second = fake_gemini.prompts
    assert f"ID: {oatmeal.id}, Type: breakfast, Name: Oatmeal, Portion: 1 serving, Cals: 300" in first
    assert "User Goal: healthy eating" in first
    assert "Diet Type: balanced" in first
    assert first.endswith("User: first question")
    assert "Conversation so far" not in first

    assert "User: first question" in second
    assert "Assistant: First answer" in second
    assert fake_gemini.declarations[0] == TOOL_DECLARATIONS


def test_chat_history_endpoint(client, headers, fake_gemini, db, user_id):
    plan = make_plan(db, user_id, ITEMS)
    fake_gemini.reply_with("Sure")
    _send(client, headers, plan.id, "hello")

    messages = client.get(f"/plans/{plan.id}/messages", headers=headers).json()["messages"]
    assert [(m["role"], m["content"]) for m in messages] == [("user", "hello"), ("assistant", "Sure")]


def test_system_prompt_uses_profile_goal():
    user = SimpleNamespace(goal="gain_muscle", diet_type="keto")
    prompt = build_system_prompt(SimpleNamespace(id=1), user, [])
    assert "User Goal: gain_muscle" in prompt
    assert "Diet Type: keto" in prompt
