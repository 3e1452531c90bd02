from conftest import STRONG_PASSWORD, auth_headers, register

from nutriplan.services.auth import (
    create_access_token,
    create_refresh_token,
    hash_password,
    verify_password,
    verify_refresh_token,
    verify_token,
)
from nutriplan.utils.security import validate_password_strength


def test_register_returns_tokens(client):
    body = register(client, email="New.User@Example.com")

    assert body["email"] == "new.user@example.com"
    assert body["token_type"] == "bearer"
    assert verify_token(body["access_token"])["sub"] == body["user_id"]
    assert verify_refresh_token(body["refresh_token"])["sub"] == body["user_id"]


def test_register_duplicate_email(client):
    register(client)
    response = client.post("/auth/register", json={
        "email": "jane@example.com", "password": STRONG_PASSWORD, "name": "Jane again",
    })
    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"


def test_register_weak_password(client):
    response = client.post("/auth/register", json={
        "email": "weak@example.com", "password": "password", "name": "Weak",
    })
    assert response.status_code == 400
    assert "uppercase" in response.json()["detail"]


def test_password_policy_reports_first_failing_rule():
    assert validate_password_strength("Ab1") == (False, "Password needs at least 8 characters")
    assert validate_password_strength("ALLUPPER1") == (False, "Password needs a lowercase letter")
    assert validate_password_strength("NoDigitsHere") == (False, "Password needs a digit")
    assert validate_password_strength(STRONG_PASSWORD) == (True, "")


def test_login(client):
    register(client)
    response = client.post("/auth/login", json={"email": "jane@example.com", "password": STRONG_PASSWORD})
    assert response.status_code == 200
    assert response.json()["access_token"]


def test_login_wrong_password(client):
    register(client)
    response = client.post("/auth/login", json={"email": "jane@example.com", "password": "Wr0ngpassword"})
    assert response.status_code == 401


def test_login_unknown_email(client):
    response = client.post("/auth/login", json={"email": "ghost@example.com", "password": STRONG_PASSWORD})
    assert response.status_code == 401


def test_refresh_rotates_tokens(client, tokens):
    response = client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert response.status_code == 200
    body = response.json()
    assert body["user_id"] == tokens["user_id"]
    assert verify_refresh_token(body["refresh_token"]) is not None


def test_refresh_rejects_access_token(client, tokens):
    response = client.post("/auth/refresh", json={"refresh_token": tokens["access_token"]})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or expired refresh token"


def test_refresh_for_unknown_user(client):
    token = create_refresh_token({"sub": "00000000-0000-0000-0000-000000000002"})
    response = client.post("/auth/refresh", json={"refresh_token": token})
    assert response.status_code == 401
    assert response.json()["detail"] == "User not found"


def test_refresh_token_is_not_a_bearer_token(client, tokens):
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {tokens['refresh_token']}"})
    assert response.status_code == 403


def test_me(client, tokens):
    response = client.get("/auth/me", headers=auth_headers(tokens))
    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "jane@example.com"
    assert body["name"] == "Jane"
    assert body["profile_completed"] is False


def test_missing_token_is_forbidden(client):
    response = client.get("/auth/me")
    assert response.status_code == 403
    assert response.json()["detail"] == "Not authenticated"


def test_non_bearer_scheme_is_forbidden(client):
    response = client.get("/plans/active", headers={"Authorization": "Basic amFuZTpzZWNyZXQ="})
    assert response.status_code == 403


def test_garbage_token_is_forbidden(client):
    response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 403


def test_token_for_deleted_user_is_not_found(client):
    token = create_access_token({"sub": "00000000-0000-0000-0000-000000000001"})
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 404


def test_logout_blacklists_token(client, tokens, memory_cache):
    headers = auth_headers(tokens)

    response = client.post("/auth/logout", headers=headers)
    assert response.status_code == 200
    assert f"blacklist:{tokens['access_token']}" in memory_cache

    assert client.get("/auth/me", headers=headers).status_code == 401


def test_logout_without_redis_fails_open(client, tokens):
    headers = auth_headers(tokens)
    assert client.post("/auth/logout", headers=headers).status_code == 200
    assert client.get("/auth/me", headers=headers).status_code == 200


def test_password_hash_truncates_at_72_bytes():
    long_password = "A1" + "x" * 100
    hashed = hash_password(long_password)
    assert verify_password(long_password, hashed)
    assert verify_password(long_password[:72] + "different tail", hashed)
    assert not verify_password("Other1password", hashed)


def test_verify_password_with_malformed_hash():
    assert verify_password(STRONG_PASSWORD, "not-a-bcrypt-hash") is False
