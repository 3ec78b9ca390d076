import pytest

from app import create_app
from config import TestConfig
from models import db


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register(client):
    """Register a user and return (user_json, auth_headers)."""

    def _register(name="Alice", email="alice@example.com", password="secret123"):
        resp = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert resp.status_code == 201, resp.get_json()
        body = resp.get_json()
        return body["user"], {"Authorization": f"Bearer {body['token']}"}

    return _register


@pytest.fixture
def alice(register):
    return register()


@pytest.fixture
def bob(register):
    return register(name="Bob", email="bob@example.com")


@pytest.fixture
def make_expense(client):
    def _make(headers, **overrides):
        payload = {
            "amount": 50,
            "category": "Food & Dining",
            "description": "Lunch",
            "paymentMethod": "Cash",
        }
        payload.update(overrides)
        resp = client.post("/api/expenses", json=payload, headers=headers)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()

    return _make
