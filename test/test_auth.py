from fastapi.testclient import TestClient

from app import app
from factories import PASSWORD, auth_headers, create_test_user
from auth import create_access_token, ensure_admin_account, verify_token
from models import Role, UserDB


# =========================================================
# TEST: Token
# =========================================================
def test_token_roundtrip():
    token = create_access_token({"sub": "anna@mail.com"})
    assert verify_token(token) == "anna@mail.com"


def test_verify_invalid_token():
    assert verify_token("not-a-token") is None


# =========================================================
# TEST: POST /auth/token
# =========================================================
def test_login(client, db):
    create_test_user(db, name="Anna")

    response = client.post("/auth/token", data={"username": "anna@mail.com", "password": PASSWORD})
    assert response.status_code == 200

    data = response.json()
    assert data["token_type"] == "bearer"
    assert verify_token(data["access_token"]) == "anna@mail.com"


def test_login_wrong_password(client, db):
    create_test_user(db, name="Anna")

    response = client.post("/auth/token", data={"username": "anna@mail.com", "password": "wrong"})
    assert response.status_code == 401


def test_login_unknown_user(client):
    response = client.post("/auth/token", data={"username": "nobody@mail.com", "password": PASSWORD})
    assert response.status_code == 401


# =========================================================
# TEST: GET /auth/profile
# =========================================================
def test_profile(client, db):
    user = create_test_user(db, name="Anna", role=Role.WAITER)

    response = client.get("/auth/profile", headers=auth_headers(user))
    assert response.status_code == 200

    data = response.json()
    assert data["email"] == "anna@mail.com"
    assert data["role"] == "waiter"
    assert "hashed_password" not in data


def test_profile_invalid_token(client):
    response = client.get("/auth/profile", headers={"Authorization": "Bearer invalid"})
    assert response.status_code == 401


def test_profile_deleted_user(client, db):
    user = create_test_user(db, name="Anna")
    headers = auth_headers(user)
    db.delete(user)
    db.commit()

    response = client.get("/auth/profile", headers=headers)
    assert response.status_code == 401


# =========================================================
# TEST: POST /auth/register
# =========================================================
def test_register_by_admin(client, db):
    admin = create_test_user(db, name="Ada", role=Role.ADMIN)
    payload = {"name": "Ben", "email": "ben@mail.com", "password": "pass123", "role": "chef"}

    response = client.post("/auth/register", json=payload, headers=auth_headers(admin))
    assert response.status_code == 201

    data = response.json()
    assert data["name"] == "Ben"
    assert data["role"] == "chef"

    login = client.post("/auth/token", data={"username": "ben@mail.com", "password": "pass123"})
    assert login.status_code == 200


def test_register_duplicate_email(client, db):
    admin = create_test_user(db, name="Ada", role=Role.ADMIN)
    payload = {"name": "Ada", "email": "ada@mail.com", "password": "pass123", "role": "waiter"}

    response = client.post("/auth/register", json=payload, headers=auth_headers(admin))
    assert response.status_code == 400
    assert response.json()["detail"] == "User already exists"


def test_register_forbidden_for_waiter(client, db):
    waiter = create_test_user(db, name="Anna", role=Role.WAITER)
    payload = {"name": "Ben", "email": "ben@mail.com", "password": "pass123", "role": "admin"}

    response = client.post("/auth/register", json=payload, headers=auth_headers(waiter))
    assert response.status_code == 403


def test_register_password_too_long(client, db):
    admin = create_test_user(db, name="Ada", role=Role.ADMIN)
    payload = {"name": "Ben", "email": "ben@mail.com", "password": "x" * 73, "role": "waiter"}

    response = client.post("/auth/register", json=payload, headers=auth_headers(admin))
    assert response.status_code == 400


# =========================================================
# TEST: POST /auth/change-password
# =========================================================
def test_change_password(client, db):
    user = create_test_user(db, name="Anna")

    response = client.post(
        "/auth/change-password",
        params={"old_password": PASSWORD, "new_password": "newsecret"},
        headers=auth_headers(user),
    )
    assert response.status_code == 200

    login = client.post("/auth/token", data={"username": "anna@mail.com", "password": "newsecret"})
    assert login.status_code == 200


def test_change_password_wrong_old(client, db):
    user = create_test_user(db, name="Anna")

    response = client.post(
        "/auth/change-password",
        params={"old_password": "wrong", "new_password": "newsecret"},
        headers=auth_headers(user),
    )
    assert response.status_code == 400


# =========================================================
# TEST: Admin bootstrap
# =========================================================
def test_ensure_admin_account(db, monkeypatch):
    monkeypatch.setattr("auth.ADMIN_EMAIL", "boss@mail.com")
    monkeypatch.setattr("auth.ADMIN_PASSWORD", "boss")

    admin = ensure_admin_account(db)
    assert admin.role == "admin"
    assert ensure_admin_account(db) is None
    assert db.query(UserDB).count() == 1


def test_startup_seeds_admin(db, monkeypatch):
    monkeypatch.setattr("auth.ADMIN_EMAIL", "boss@mail.com")
    monkeypatch.setattr("auth.ADMIN_PASSWORD", "boss")

    with TestClient(app) as client:
        response = client.post("/auth/token", data={"username": "boss@mail.com", "password": "boss"})
        assert response.status_code == 200

        profile = client.get("/auth/profile", headers={"Authorization": f"Bearer {response.json()['access_token']}"})
        assert profile.json()["role"] == "admin"
