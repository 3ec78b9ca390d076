from models import db
from models.expense_model import Expense


def test_create_expense_owned_by_caller(client, alice, bob):
    user, headers = alice
    resp = client.post(
        "/api/expenses",
        json={
            "amount": 50,
            "category": "Food & Dining",
            "description": "  Lunch  ",
            "paymentMethod": "Cash",
            "userId": 12345,
        },
        headers=headers,
    )
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["userId"] == user["id"]
    assert body["amount"] == 50
    assert body["description"] == "Lunch"
    assert body["paymentMethod"] == "Cash"
    assert body["date"]


def test_create_expense_with_explicit_date(client, alice):
    _, headers = alice
    resp = client.post(
        "/api/expenses",
        json={
            "amount": 12.5,
            "category": "Travel",
            "description": "Bus",
            "paymentMethod": "UPI",
            "date": "2024-03-05T10:30:00Z",
        },
        headers=headers,
    )
    assert resp.status_code == 201
    assert resp.get_json()["date"] == "2024-03-05T10:30:00"


def test_create_expense_validation(client, alice):
    _, headers = alice
    resp = client.post(
        "/api/expenses",
        json={
            "amount": -1,
            "category": "Groceries",
            "description": "   ",
            "date": "yesterday",
        },
        headers=headers,
    )
    assert resp.status_code == 400
    fields = {e["field"] for e in resp.get_json()["errors"]}
    assert {"amount", "category", "description", "date", "paymentMethod"} <= fields



def test_create_rejects_boolean_amount(client, alice):
    _, headers = alice
    resp = client.post(
        "/api/expenses",
        json={"amount": True, "category": "Other", "description": "x", "paymentMethod": "Cash"},
        headers=headers,
    )
    assert resp.status_code == 400
    assert [e["field"] for e in resp.get_json()["errors"]] == ["amount"]
    assert client.get("/api/expenses", headers=headers).get_json() == []


def test_create_accepts_numeric_string_amount(client, alice):
    _, headers = alice
    resp = client.post(
        "/api/expenses",
        json={"amount": "50", "category": "Other", "description": "x", "paymentMethod": "Cash"},
        headers=headers,
    )
    assert resp.status_code == 201
    assert resp.get_json()["amount"] == 50

def test_create_requires_token(client):
    resp = client.post("/api/expenses", json={"amount": 1})
    assert resp.status_code == 401


def test_list_is_scoped_and_sorted(client, alice, bob, make_expense):
    _, a_headers = alice
    _, b_headers = bob
    make_expense(a_headers, description="Old", date="2024-01-01T00:00:00")
    newest = make_expense(a_headers, description="New", date="2024-02-01T00:00:00")
    make_expense(b_headers, description="Bob's")

    resp = client.get("/api/expenses", headers=a_headers)
    assert resp.status_code == 200
    items = resp.get_json()
    assert [e["description"] for e in items] == ["New", "Old"]
    assert items[0]["id"] == newest["id"]

    resp = client.get("/api/expenses", headers=b_headers)
    assert [e["description"] for e in resp.get_json()] == ["Bob's"]


def test_list_filters(client, alice, make_expense):
    _, headers = alice
    make_expense(headers, description="Coffee beans", amount=10, category="Shopping",
                 date="2024-01-10T09:00:00")
    make_expense(headers, description="Dinner", amount=80, date="2024-01-20T20:00:00")
    make_expense(headers, description="Iced COFFEE", amount=5, date="2024-01-31T18:00:00")

    def descriptions(**params):
        resp = client.get("/api/expenses", query_string=params, headers=headers)
        assert resp.status_code == 200
        return sorted(e["description"] for e in resp.get_json())

    assert descriptions(search="coffee") == ["Coffee beans", "Iced COFFEE"]
    assert descriptions(category="Shopping") == ["Coffee beans"]
    assert descriptions(startDate="2024-01-20") == ["Dinner", "Iced COFFEE"]
    assert descriptions(endDate="2024-01-31") == ["Coffee beans", "Dinner", "Iced COFFEE"]
    assert descriptions(startDate="2024-01-11", endDate="2024-01-30") == ["Dinner"]
    assert descriptions(minAmount="10") == ["Coffee beans", "Dinner"]
    assert descriptions(maxAmount="10") == ["Coffee beans", "Iced COFFEE"]
    assert descriptions(minAmount="6", maxAmount="79") == ["Coffee beans"]
    assert descriptions(search="", category="") == ["Coffee beans", "Dinner", "Iced COFFEE"]


def test_list_search_treats_wildcards_literally(client, alice, make_expense):
    _, headers = alice
    make_expense(headers, description="100% cotton")
    make_expense(headers, description="Bread")

    resp = client.get("/api/expenses", query_string={"search": "%"}, headers=headers)
    assert [e["description"] for e in resp.get_json()] == ["100% cotton"]


def test_list_rejects_bad_filters(client, alice):
    _, headers = alice
    resp = client.get(
        "/api/expenses",
        query_string={"startDate": "not-a-date", "minAmount": "lots"},
        headers=headers,
    )
    assert resp.status_code == 400
    fields = {e["field"] for e in resp.get_json()["errors"]}
    assert {"startDate", "minAmount"} <= fields


def test_get_single_expense(client, alice, make_expense):
    _, headers = alice
    created = make_expense(headers)
    resp = client.get(f"/api/expenses/{created['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.get_json() == created


def test_get_missing_expense(client, alice):
    _, headers = alice
    resp = client.get("/api/expenses/999", headers=headers)
    assert resp.status_code == 404
    assert resp.get_json()["message"] == "Expense not found"


def test_other_user_cannot_read_update_or_delete(app, client, alice, bob, make_expense):
    _, a_headers = alice
    _, b_headers = bob
    created = make_expense(a_headers)
    url = f"/api/expenses/{created['id']}"

    assert client.get(url, headers=b_headers).status_code == 401

    resp = client.put(url, json={"amount": 1, "description": "hijacked"}, headers=b_headers)
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Not authorized"

    assert client.delete(url, headers=b_headers).status_code == 401

    with app.app_context():
        expense = db.session.get(Expense, created["id"])
        assert expense is not None
        assert expense.amount == 50
        assert expense.description == "Lunch"


def test_partial_update_preserves_omitted_fields(client, alice, make_expense):
    _, headers = alice
    created = make_expense(
        headers,
        amount=20,
        category="Healthcare",
        description="Pharmacy",
        paymentMethod="Debit Card",
        date="2024-05-01T12:00:00",
    )

    resp = client.put(f"/api/expenses/{created['id']}", json={"amount": 35.75}, headers=headers)
    assert resp.status_code == 200
    updated = resp.get_json()
    assert updated["amount"] == 35.75
    for field in ("category", "description", "date", "paymentMethod", "userId", "createdAt"):
        assert updated[field] == created[field]


def test_update_amount_to_zero_and_other_fields(client, alice, make_expense):
    _, headers = alice
    created = make_expense(headers)
    resp = client.put(
        f"/api/expenses/{created['id']}",
        json={
            "amount": 0,
            "category": "Other",
            "description": "Refunded lunch",
            "paymentMethod": "UPI",
            "date": "2024-06-15T08:00:00",
        },
        headers=headers,
    )
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["amount"] == 0
    assert body["category"] == "Other"
    assert body["description"] == "Refunded lunch"
    assert body["paymentMethod"] == "UPI"
    assert body["date"] == "2024-06-15T08:00:00"


def test_update_validation(client, alice, make_expense):
    _, headers = alice
    created = make_expense(headers)
    resp = client.put(
        f"/api/expenses/{created['id']}",
        json={"amount": -5, "description": "  ", "category": "Nope"},
        headers=headers,
    )
    assert resp.status_code == 400
    fields = {e["field"] for e in resp.get_json()["errors"]}
    assert fields == {"amount", "description", "category"}


def test_update_missing_expense(client, alice):
    _, headers = alice
    resp = client.put("/api/expenses/999", json={"amount": 1}, headers=headers)
    assert resp.status_code == 404


def test_delete_expense(client, alice, make_expense):
    _, headers = alice
    created = make_expense(headers)
    resp = client.delete(f"/api/expenses/{created['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Expense removed"
    assert client.get(f"/api/expenses/{created['id']}", headers=headers).status_code == 404


def test_delete_missing_expense(client, alice):
    _, headers = alice
    assert client.delete("/api/expenses/424242", headers=headers).status_code == 404


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert "message" in resp.get_json()


def test_unexpected_error_is_generic_500(client, alice, monkeypatch):
    _, headers = alice

    def boom(user_id):
        raise RuntimeError("database went away")

    monkeypatch.setattr("expenses.routes.compute_stats", boom)
    resp = client.get("/api/expenses/stats", headers=headers)
    assert resp.status_code == 500
    assert resp.get_json() == {"message": "Server error"}


def test_update_rejects_boolean_amount(client, alice, make_expense):
    _, headers = alice
    created = make_expense(headers)
    resp = client.put(f"/api/expenses/{created['id']}", json={"amount": False}, headers=headers)
    assert resp.status_code == 400
    assert [e["field"] for e in resp.get_json()["errors"]] == ["amount"]


def test_update_blank_choices_keep_stored_values(client, alice, make_expense):
    _, headers = alice
    created = make_expense(headers, category="Travel", paymentMethod="UPI")
    resp = client.put(
        f"/api/expenses/{created['id']}",
        json={"category": "", "paymentMethod": "  ", "amount": 75},
        headers=headers,
    )
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["category"] == "Travel"
    assert body["paymentMethod"] == "UPI"
    assert body["amount"] == 75


def test_timestamps_are_set_on_create(client, alice, make_expense):
    _, headers = alice
    created = make_expense(headers)
    assert created["createdAt"]
    assert created["updatedAt"]
