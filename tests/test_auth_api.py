BASE = "/api/v1"


def register_and_login(client, email="jo@example.com", password="correct-horse"):
    response = client.post(f"{BASE}/auth/register", json={"email": email, "password": password, "name": "Jo"})
    assert response.status_code == 201, response.text
    response = client.post(f"{BASE}/auth/jwt/login", data={"username": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["access_token"]


def test_register_login_and_read_profile(anonymous_client):
    token = register_and_login(anonymous_client)

    response = anonymous_client.get(f"{BASE}/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["email"] == "jo@example.com"
    assert response.json()["name"] == "Jo"


def test_token_from_query_and_cookie(anonymous_client):
    token = register_and_login(anonymous_client)

    assert anonymous_client.get(f"{BASE}/goals", params={"access_token": token}).status_code == 200

    anonymous_client.cookies.set("access_token", token)
    assert anonymous_client.get(f"{BASE}/goals").status_code == 200


def test_invalid_tokens_are_rejected(anonymous_client):
    assert anonymous_client.get(f"{BASE}/users/me").status_code == 401

    response = anonymous_client.get(f"{BASE}/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


def test_wrong_password(anonymous_client):
    register_and_login(anonymous_client)
    response = anonymous_client.post(f"{BASE}/auth/jwt/login", data={"username": "jo@example.com", "password": "wrong"})
    assert response.status_code == 400


def test_changed_password_is_hashed(anonymous_client):
    token = register_and_login(anonymous_client)
    headers = {"Authorization": f"Bearer {token}"}

    response = anonymous_client.patch(f"{BASE}/users/me", json={"password": "new-password-1"}, headers=headers)
    assert response.status_code == 200

    login = anonymous_client.post(
        f"{BASE}/auth/jwt/login",
        data={"username": "jo@example.com", "password": "new-password-1"},
    )
    assert login.status_code == 200


def test_logout(anonymous_client):
    response = anonymous_client.post(f"{BASE}/auth/jwt/logout")
    assert response.status_code == 200
    assert response.json()["detail"] == "Successfully logged out"
