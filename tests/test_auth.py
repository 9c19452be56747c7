from datetime import timedelta

from auth.utils import create_access_token, decode_access_token, get_password_hash, verify_password


def test_password_hashing():
    hashed = get_password_hash("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "u1", "email": "a@example.com"}, expires_delta=timedelta(minutes=-1))
    assert decode_access_token(token) is None


def test_register_returns_token(client):
    response = client.post("/register", json={"email": "Ana@Example.com", "password": "secret123"})

    assert response.status_code == 201
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["email"] == "ana@example.com"
    assert data["display_name"] == "ana"


def test_register_duplicate_email(client):
    payload = {"email": "ana@example.com", "password": "secret123"}
    assert client.post("/register", json=payload).status_code == 201
    assert client.post("/register", json=payload).status_code == 409


def test_register_short_password(client):
    assert client.post("/register", json={"email": "ana@example.com", "password": "123"}).status_code == 422


def test_login(client, auth_headers):
    auth_headers("ana@example.com", "secret123", "Ana")

    ok = client.post("/login", json={"email": "ana@example.com", "password": "secret123"})
    assert ok.status_code == 200
    assert ok.json()["display_name"] == "Ana"

    bad = client.post("/login", json={"email": "ana@example.com", "password": "nope-nope"})
    assert bad.status_code == 401

    unknown = client.post("/login", json={"email": "bob@example.com", "password": "secret123"})
    assert unknown.status_code == 401


def test_me(client, auth_headers):
    headers = auth_headers("ana@example.com", display_name="Ana")
    data = client.get("/me", headers=headers).json()
    assert data["email"] == "ana@example.com"
    assert data["display_name"] == "Ana"
    assert data["uid"]


def test_me_with_bad_token(client):
    response = client.get("/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
