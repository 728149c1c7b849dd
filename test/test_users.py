from factories import auth_headers, create_test_user
from models import Role


# =========================================================
# TEST: GET /users
# =========================================================
def test_get_users(client, db):
    admin = create_test_user(db, name="Ada", role=Role.ADMIN)
    create_test_user(db, name="Ben", role=Role.CHEF)

    response = client.get("/users", headers=auth_headers(admin))
    assert response.status_code == 200
    assert [u["name"] for u in response.json()] == ["Ada", "Ben"]


def test_get_users_forbidden_for_receptionist(client, db):
    receptionist = create_test_user(db, name="Rita", role=Role.RECEPTIONIST)
    response = client.get("/users", headers=auth_headers(receptionist))
    assert response.status_code == 403


def test_get_user_not_found(client, db):
    admin = create_test_user(db, name="Ada", role=Role.ADMIN)
    response = client.get("/users/999", headers=auth_headers(admin))
    assert response.status_code == 404


# =========================================================
# TEST: PUT /users/{id}
# =========================================================
def test_update_user_role(client, db):
    admin = create_test_user(db, name="Ada", role=Role.ADMIN)
    user = create_test_user(db, name="Ben", role=Role.WAITER)

    response = client.put(f"/users/{user.id}", json={"role": "chef"}, headers=auth_headers(admin))
    assert response.status_code == 200

    data = response.json()["user"]
    assert data["role"] == "chef"
    assert data["email"] == "ben@mail.com"


def test_update_user_password(client, db):
    admin = create_test_user(db, name="Ada", role=Role.ADMIN)
    user = create_test_user(db, name="Ben", role=Role.WAITER)

    response = client.put(f"/users/{user.id}", json={"password": "fresh"}, headers=auth_headers(admin))
    assert response.status_code == 200

    login = client.post("/auth/token", data={"username": "ben@mail.com", "password": "fresh"})
    assert login.status_code == 200


def test_update_user_duplicate_email(client, db):
    admin = create_test_user(db, name="Ada", role=Role.ADMIN)
    user = create_test_user(db, name="Ben", role=Role.WAITER)

    response = client.put(f"/users/{user.id}", json={"email": "ada@mail.com"}, headers=auth_headers(admin))
    assert response.status_code == 400


# =========================================================
# TEST: DELETE /users/{id}
# =========================================================
def test_delete_user(client, db):
    admin = create_test_user(db, name="Ada", role=Role.ADMIN)
    user = create_test_user(db, name="Ben", role=Role.WAITER)
    user_id = user.id

    response = client.delete(f"/users/{user_id}", headers=auth_headers(admin))
    assert response.status_code == 200

    response = client.get(f"/users/{user_id}", headers=auth_headers(admin))
    assert response.status_code == 404


def test_delete_own_account(client, db):
    admin = create_test_user(db, name="Ada", role=Role.ADMIN)
    response = client.delete(f"/users/{admin.id}", headers=auth_headers(admin))
    assert response.status_code == 400
