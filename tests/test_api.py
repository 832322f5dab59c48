from datetime import timedelta
from unittest.mock import patch

from chat_backend import auth


def register(client, username="alice", email="a@x.com", password="pw1"):
    return client.post("/auth/register", json={"username": username, "email": email, "password": password})


def test_root_and_health(client):
    assert client.get("/").text == "Backend is running"
    assert client.get("/health").json() == {"ok": True}


def test_register_login_scenario(client):
    r = register(client)
    assert r.status_code == 201
    body = r.json()
    assert set(body) == {"id", "username", "email"}
    assert body["username"] == "alice"

    r = client.post("/auth/login", json={"email": "a@x.com", "password": "pw1"})
    assert r.status_code == 200
    data = r.json()
    assert data["token"]
    assert data["user"] == body

    r = client.post("/auth/login", json={"email": "a@x.com", "password": "wrong"})
    assert r.status_code == 401
    assert r.json()["error"] == "auth"


def test_duplicate_email_is_409(client):
    register(client)
    r = register(client, username="bob")
    assert r.status_code == 409
    assert r.json()["error"] == "conflict"


def test_wrong_password_and_unknown_email_look_identical(client):
    register(client)
    wrong = client.post("/auth/login", json={"email": "a@x.com", "password": "nope"})
    unknown = client.post("/auth/login", json={"email": "z@x.com", "password": "pw1"})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json()


def test_missing_field_is_400(client):
    r = client.post("/auth/register", json={"username": "alice", "email": "a@x.com"})
    assert r.status_code == 400
    assert r.json()["error"] == "validation"
    assert "password" in r.json()["message"]


def test_blank_field_is_400(client):
    r = register(client, username="  ")
    assert r.status_code == 400
    assert r.json()["error"] == "validation"


def test_unknown_field_is_400(client):
    r = client.post("/auth/login", json={"email": "a@x.com", "password": "pw1", "admin": True})
    assert r.status_code == 400
    assert r.json()["error"] == "validation"


def test_malformed_json_is_400(client):
    r = client.post("/auth/login", content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json()["error"] == "malformed_request"


def test_unsupported_method(client):
    r = client.put("/auth/login", json={})
    assert r.status_code == 405


def test_unexpected_error_is_500_without_detail(client):
    with patch("chat_backend.main.login", side_effect=RuntimeError("db password is hunter2")):
        r = client.post("/auth/login", json={"email": "a@x.com", "password": "pw1"})
    assert r.status_code == 500
    assert r.json() == {"error": "internal", "message": "Internal server error"}
    assert "hunter2" not in r.text


def test_me_with_token(client):
    created = register(client).json()
    token = client.post("/auth/login", json={"email": "a@x.com", "password": "pw1"}).json()["token"]

    r = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    assert r.json() == created


def test_me_without_token(client):
    r = client.get("/auth/me")
    assert r.status_code == 401
    assert r.json()["error"] == "auth"


def test_me_with_expired_token(client):
    created = register(client).json()
    token = auth.create_session_token(created["id"], expires_delta=timedelta(seconds=-1))
    r = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert "expired" in r.json()["message"]


def test_cors_allows_configured_origin_only(client):
    from chat_backend import config

    preflight = {"Access-Control-Request-Method": "POST"}
    ok = client.options("/auth/login", headers={"Origin": config.CLIENT_ORIGIN, **preflight})
    assert ok.status_code == 200
    assert ok.headers["access-control-allow-origin"] == config.CLIENT_ORIGIN

    bad = client.options("/auth/login", headers={"Origin": "http://evil.example", **preflight})
    assert bad.status_code == 400
    assert "access-control-allow-origin" not in bad.headers


def test_non_object_body_is_400(client):
    r = client.post("/auth/login", json=["a@x.com", "pw1"])
    assert r.status_code == 400
    assert r.json() == {"error": "validation", "message": "Request body must be a JSON object"}
