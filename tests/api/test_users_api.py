# tests/api/test_users_api.py


def test_register_and_me(client):
    response = client.post(
        "/api/v1/users/register",
        json={"email": " Erin@Example.com ", "role": "provider", "first_name": "Erin"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["user"]["email"] == "erin@example.com"
    assert body["user"]["role"] == "provider"
    assert body["api_key"].startswith("mkt_")

    me = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {body['api_key']}"})
    assert me.status_code == 200
    assert me.json()["id"] == body["user"]["id"]
    assert "api_key_hash" not in me.json()


def test_register_duplicate_email(client, customer):
    response = client.post("/api/v1/users/register", json={"email": "alice@example.com"})

    assert response.status_code == 409


def test_register_as_admin_is_rejected(client):
    response = client.post(
        "/api/v1/users/register", json={"email": "mallory@example.com", "role": "admin"}
    )

    assert response.status_code == 400


def test_me_requires_key(client):
    response = client.get("/api/v1/users/me")

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"
