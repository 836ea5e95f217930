from datetime import datetime, timedelta, timezone

from speed_equity.models.user import RevokedToken

from conftest import PASSWORD, login, register


def test_register_and_me(client):
    user_id = register(client, "ana@example.com")
    headers = login(client, "ana@example.com")

    resp = client.get("/auth/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"id": user_id, "email": "ana@example.com"}


def test_register_rejects_duplicates_and_weak_passwords(client):
    register(client, "ana@example.com")
    dup = client.post(
        "/auth/register",
        json={"email": "ana@example.com", "password": PASSWORD, "confirm_password": PASSWORD},
    )
    assert dup.status_code == 400

    weak = client.post(
        "/auth/register",
        json={"email": "bob@example.com", "password": "weak", "confirm_password": "weak"},
    )
    assert weak.status_code == 422


def test_login_with_wrong_password(client):
    register(client, "ana@example.com")
    resp = client.post("/auth/login", json={"email": "ana@example.com", "password": "Wrong123!"})
    assert resp.status_code == 401


def test_requests_without_token_are_rejected(client):
    assert client.get("/auth/me").status_code == 401
    assert client.get("/projects/").status_code == 401


def test_logout_tears_down_the_context(client):
    register(client, "ana@example.com")
    headers = login(client, "ana@example.com")

    assert client.post("/auth/logout", headers=headers).status_code == 200
    assert client.get("/auth/me", headers=headers).status_code == 401

    # a fresh sign-in builds a new context
    fresh = login(client, "ana@example.com")
    assert client.get("/auth/me", headers=fresh).status_code == 200


def test_logout_purges_expired_revocations(client, db):
    user_id = register(client, "ana@example.com")
    now = datetime.now(timezone.utc)
    db.add(RevokedToken(jti="stale", user_id=user_id, expires_at=now - timedelta(hours=1)))
    db.add(RevokedToken(jti="still-valid", user_id=user_id, expires_at=now + timedelta(hours=1)))
    db.commit()

    headers = login(client, "ana@example.com")
    assert client.post("/auth/logout", headers=headers).status_code == 200

    db.expire_all()
    jtis = {row.jti for row in db.query(RevokedToken).all()}
    assert "stale" not in jtis
    assert "still-valid" in jtis
    assert len(jtis) == 2
