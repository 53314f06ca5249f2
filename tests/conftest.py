import pytest

from expensebook import create_app
from expensebook.config import TestConfig
from expensebook.extensions import db

PASSWORD = "secret123"


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


def register(client, email, password=PASSWORD):
    return client.post("/api/register", json={"email": email, "password": password})


def login(client, email, password=PASSWORD):
    return client.post("/login", json={"email": email, "password": password})


def logged_in_client(app, email):
    client = app.test_client()
    assert register(client, email).status_code == 201
    assert login(client, email).status_code == 200
    return client


@pytest.fixture
def alice(app):
    return logged_in_client(app, "alice@example.com")


@pytest.fixture
def bob(app):
    return logged_in_client(app, "bob@example.com")


def create_expense(client, **overrides):
    payload = {"label": "Lunch", "amount": 12.5, "date": "2024-01-15", "category": "Food"}
    payload.update(overrides)
    resp = client.post("/api/expense", json=payload)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["id"]
