import os

# must be set before speed_equity.database is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from speed_equity.main import app  # noqa: E402
from speed_equity.database import Base, SessionLocal, engine  # noqa: E402

PASSWORD = "Sweat123!"


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def register(client, email):
    resp = client.post(
        "/auth/register",
        json={"email": email, "password": PASSWORD, "confirm_password": PASSWORD},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


def login(client, email):
    resp = client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def make_user(client):
    """Registers and signs in a user; returns ``(user_id, auth_headers)``."""

    def _make(email):
        user_id = register(client, email)
        return user_id, login(client, email)

    return _make


@pytest.fixture
def owner(make_user):
    return make_user("owner@example.com")


@pytest.fixture
def project(client, owner):
    _, headers = owner
    resp = client.post(
        "/projects/",
        json={"name": "Rocket", "initial_valuation": 100000, "work_hours_remaining": 500},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()
