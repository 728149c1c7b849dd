from factories import auth_headers, create_test_user
from models import GroceryDB, Role


def create_test_grocery(db, name="Flour", category="Dry goods", quantity=10, min_quantity=5):
    grocery = GroceryDB(name=name, category=category, quantity=quantity, unit="kg", min_quantity=min_quantity)
    db.add(grocery)
    db.commit()
    db.refresh(grocery)
    return grocery


# =========================================================
# TEST: GET /groceries
# =========================================================
def test_get_groceries(client, db):
    waiter = create_test_user(db, role=Role.WAITER)
    create_test_grocery(db, "Tomatoes", "Vegetables")
    create_test_grocery(db, "Sugar", "Dry goods")
    create_test_grocery(db, "Flour", "Dry goods")

    response = client.get("/groceries", headers=auth_headers(waiter))
    assert response.status_code == 200
    assert [g["name"] for g in response.json()] == ["Flour", "Sugar", "Tomatoes"]


def test_get_grocery_not_found(client, db):
    chef = create_test_user(db, name="Chris", role=Role.CHEF)
    response = client.get("/groceries/999", headers=auth_headers(chef))
    assert response.status_code == 404
    assert response.json()["detail"] == "Item not found"


# =========================================================
# TEST: POST /groceries
# =========================================================
def test_create_grocery_defaults(client, db):
    chef = create_test_user(db, name="Chris", role=Role.CHEF)

    response = client.post(
        "/groceries",
        json={"name": "Rice", "category": "Dry goods", "quantity": 12},
        headers=auth_headers(chef),
    )
    assert response.status_code == 201

    data = response.json()["grocery"]
    assert data["unit"] == "kg"
    assert data["min_quantity"] == 5
    assert data["quantity"] == 12
    assert data["updated_by"] == chef.id
    assert data["last_updated"] is not None


def test_create_grocery_duplicate(client, db):
    chef = create_test_user(db, name="Chris", role=Role.CHEF)
    create_test_grocery(db, "Rice")

    response = client.post("/groceries", json={"name": "Rice", "category": "Dry goods"}, headers=auth_headers(chef))
    assert response.status_code == 400
    assert response.json()["detail"] == "Item already exists"


def test_create_grocery_missing_category(client, db):
    chef = create_test_user(db, name="Chris", role=Role.CHEF)
    response = client.post("/groceries", json={"name": "Rice"}, headers=auth_headers(chef))
    assert response.status_code == 400


def test_create_grocery_forbidden_for_waiter(client, db):
    waiter = create_test_user(db, role=Role.WAITER)
    response = client.post("/groceries", json={"name": "Rice", "category": "Dry goods"}, headers=auth_headers(waiter))
    assert response.status_code == 403


# =========================================================
# TEST: PUT /groceries/{id}
# =========================================================
def test_update_grocery(client, db):
    admin = create_test_user(db, name="Ada", role=Role.ADMIN)
    grocery = create_test_grocery(db, "Flour", quantity=10)

    response = client.put(
        f"/groceries/{grocery.id}",
        json={"quantity": 2.5, "unit": ""},
        headers=auth_headers(admin),
    )
    assert response.status_code == 200

    data = response.json()["grocery"]
    assert data["quantity"] == 2.5
    assert data["unit"] == "kg"
    assert data["name"] == "Flour"
    assert data["updated_by"] == admin.id


def test_update_grocery_not_found(client, db):
    admin = create_test_user(db, name="Ada", role=Role.ADMIN)
    response = client.put("/groceries/999", json={"quantity": 1}, headers=auth_headers(admin))
    assert response.status_code == 404


# =========================================================
# TEST: DELETE /groceries/{id}
# =========================================================
def test_delete_grocery(client, db):
    admin = create_test_user(db, name="Ada", role=Role.ADMIN)
    grocery = create_test_grocery(db)
    grocery_id = grocery.id

    response = client.delete(f"/groceries/{grocery_id}", headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.json()["success"] is True

    response = client.get(f"/groceries/{grocery_id}", headers=auth_headers(admin))
    assert response.status_code == 404


def test_delete_grocery_forbidden_for_chef(client, db):
    chef = create_test_user(db, name="Chris", role=Role.CHEF)
    grocery = create_test_grocery(db)
    grocery_id = grocery.id

    response = client.delete(f"/groceries/{grocery_id}", headers=auth_headers(chef))
    assert response.status_code == 403

    response = client.get(f"/groceries/{grocery_id}", headers=auth_headers(chef))
    assert response.status_code == 200


# =========================================================
# TEST: GET /groceries/low-stock
# =========================================================
def test_low_stock(client, db):
    chef = create_test_user(db, name="Chris", role=Role.CHEF)
    create_test_grocery(db, "Flour", quantity=10, min_quantity=5)
    create_test_grocery(db, "Salt", quantity=5, min_quantity=5)
    create_test_grocery(db, "Eggs", "Dairy", quantity=1, min_quantity=12)

    response = client.get("/groceries/low-stock", headers=auth_headers(chef))
    assert response.status_code == 200
    assert [g["name"] for g in response.json()] == ["Eggs", "Salt"]


def test_low_stock_forbidden_for_receptionist(client, db):
    receptionist = create_test_user(db, name="Rita", role=Role.RECEPTIONIST)
    response = client.get("/groceries/low-stock", headers=auth_headers(receptionist))
    assert response.status_code == 403
