from jose import jwt

from clubdir.api.deps import session_id_from_token
from clubdir.core.config import settings
from clubdir.core.security import ALGO, create_access_token_for_session


def test_register_login_me_logout(client):
    resp = client.post(
        "/auth/register",
        json={"email": " Sammy@UCSC.edu ", "password": "banana-slug-1", "full_name": "Sammy Slug"},
    )
    assert resp.status_code == 200
    token = resp.json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    me = client.get("/auth/me", headers=headers).json()
    assert me["email"] == "sammy@ucsc.edu"
    assert me["role"] == "user"
    assert me["is_club_leader"] is False

    login = client.post("/auth/login", json={"email": "sammy@ucsc.edu", "password": "banana-slug-1"})
    assert login.status_code == 200

    assert client.post("/auth/logout", headers=headers).json() == {"ok": True}
    assert client.get("/auth/me", headers=headers).status_code == 401
    # The other session is unaffected.
    other = {"Authorization": f"Bearer {login.json()['access_token']}"}
    assert client.get("/auth/me", headers=other).status_code == 200


def test_duplicate_registration_conflicts(client):
    body = {"email": "dup@ucsc.edu", "password": "banana-slug-1"}
    assert client.post("/auth/register", json=body).status_code == 200
    assert client.post("/auth/register", json=body).status_code == 409


def test_bad_credentials(client):
    client.post("/auth/register", json={"email": "a@ucsc.edu", "password": "banana-slug-1"})
    assert client.post("/auth/login", json={"email": "a@ucsc.edu", "password": "wrong-pass"}).status_code == 401
    assert client.post("/auth/login", json={"email": "b@ucsc.edu", "password": "banana-slug-1"}).status_code == 401


def test_bootstrap_admin_email_registers_as_admin(client):
    token = client.post("/auth/register", json={"email": "root@ucsc.edu", "password": "banana-slug-1"}).json()
    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token['access_token']}"}).json()
    assert me["role"] == "admin"


def test_session_state_for_anonymous_and_admin(client):
    anon = client.get("/auth/session").json()
    assert anon["is_authenticated"] is False
    assert anon["user"] is None
    assert anon["login_url"] == "/login"
    assert anon["capabilities"] == {"can_use_portal": False, "can_view_admin": False, "can_manage_users": False}

    token = client.post("/auth/register", json={"email": "root@ucsc.edu", "password": "banana-slug-1"}).json()
    state = client.get("/auth/session", headers={"Authorization": f"Bearer {token['access_token']}"}).json()
    assert state["is_authenticated"] is True
    assert state["capabilities"]["can_view_admin"] is True


def test_garbage_token(client):
    headers = {"Authorization": "Bearer not-a-jwt"}
    assert client.get("/auth/me", headers=headers).status_code == 401
    assert client.get("/auth/session", headers=headers).json()["is_authenticated"] is False


def test_health_and_security_headers(client):
    resp = client.get("/health")
    assert resp.json() == {"ok": True}
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "DENY"


def test_register_rejects_passwords_bcrypt_cannot_hash(client):
    resp = client.post("/auth/register", json={"email": "long@ucsc.edu", "password": "a" * 100})
    assert resp.status_code == 422
    # 40 characters, 80 bytes.
    resp = client.post("/auth/register", json={"email": "accent@ucsc.edu", "password": "é" * 40})
    assert resp.status_code == 422

    resp = client.post("/auth/register", json={"email": "edge@ucsc.edu", "password": "a" * 72})
    assert resp.status_code == 200
    resp = client.post("/auth/login", json={"email": "edge@ucsc.edu", "password": "a" * 100})
    assert resp.status_code == 401


def test_session_id_only_comes_from_access_tokens():
    assert session_id_from_token(create_access_token_for_session("user-1", sid="sid-1")) == "sid-1"
    assert session_id_from_token("not-a-jwt") is None
    refresh = jwt.encode({"sub": "user-1", "sid": "sid-1", "type": "refresh"}, settings.JWT_SECRET, algorithm=ALGO)
    assert session_id_from_token(refresh) is None
    no_sid = jwt.encode({"sub": "user-1", "type": "access"}, settings.JWT_SECRET, algorithm=ALGO)
    assert session_id_from_token(no_sid) is None


def test_non_access_token_is_rejected_by_me_and_anonymous_for_session(client):
    token = jwt.encode({"sub": "user-1", "sid": "sid-1", "type": "refresh"}, settings.JWT_SECRET, algorithm=ALGO)
    headers = {"Authorization": f"Bearer {token}"}
    assert client.get("/auth/me", headers=headers).status_code == 401
    assert client.get("/auth/session", headers=headers).json()["is_authenticated"] is False
