from conftest import COMPLETE_PROFILE


def test_check_profile_for_new_user(client, headers):
    response = client.get("/user/check-profile", headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["profile_completed"] is False
    assert body["user"]["name"] == "Jane"
    assert body["user"]["email"] == "jane@example.com"
    assert body["user"]["profile_data"] is None


def test_save_profile_computes_targets(client, headers):
    response = client.post("/user/profile", json=COMPLETE_PROFILE, headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Profile updated successfully"

    user = body["user"]
    assert user["profile_completed"] is True
    assert user["target_calories"] == 2759
    assert user["target_protein"] == 172
    assert user["target_carbs"] == 310
    assert user["target_fat"] == 92
    assert user["allergies"] == ["peanuts"]


def test_check_profile_after_completion(client, profiled_headers):
    body = client.get("/user/check-profile", headers=profiled_headers).json()
    assert body["profile_completed"] is True
    assert body["user"]["profile_data"]["diet_type"] == "omnivore"
    assert body["user"]["profile_data"]["height_cm"] == 180


def test_explicit_targets_are_kept(client, headers):
    payload = dict(
        COMPLETE_PROFILE,
        target_calories=1800, target_protein=140, target_carbs=180, target_fat=60,
    )
    user = client.put("/user/profile", json=payload, headers=headers).json()["user"]
    assert user["target_calories"] == 1800
    assert user["target_protein"] == 140


def test_partial_targets_are_recalculated(client, headers):
    payload = dict(COMPLETE_PROFILE, target_calories=1800)
    user = client.post("/user/profile", json=payload, headers=headers).json()["user"]
    assert user["target_calories"] == 2759


def test_incomplete_profile_gets_default_targets(client, headers):
    user = client.post("/user/profile", json={"goal": "lose_weight"}, headers=headers).json()["user"]
    assert user["profile_completed"] is False
    assert user["target_calories"] == 2000
    assert user["target_protein"] == 125


def test_partial_update_keeps_existing_fields(client, profiled_headers):
    user = client.post("/user/profile", json={"goal": "lose_weight"}, headers=profiled_headers).json()["user"]
    assert user["age"] == 30
    assert user["profile_completed"] is True
    assert user["target_calories"] == 2259


def test_invalid_enum_is_rejected(client, headers):
    response = client.post("/user/profile", json=dict(COMPLETE_PROFILE, diet_type="carnivore"), headers=headers)
    assert response.status_code == 422


def test_get_profile(client, profiled_headers):
    response = client.get("/user/profile", headers=profiled_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "jane@example.com"
    assert body["dislikes"] == ["olives"]
    assert body["activity_level"] == "moderate"


def test_profile_requires_auth(client):
    assert client.get("/user/profile").status_code == 403
