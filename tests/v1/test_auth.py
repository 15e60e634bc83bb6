# tests/v1/test_auth.py
"""Tests for registration, login and the bearer-token dependency."""

from fastapi import status

from tests.factories import TEST_PASSWORD


def test_register_and_login(client) -> None:
    response = client.post(
        "/api/auth/register",
        json={"email": "New@Example.com", "password": "s3cret-pass", "name": "New User"},
    )
    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["email"] == "new@example.com"
    assert body["role"] == "USER"
    assert "password_hash" not in body

    login = client.post(
        "/api/auth/login",
        json={"email": "new@example.com", "password": "s3cret-pass"},
    )
    assert login.status_code == status.HTTP_200_OK
    token = login.json()["access_token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == status.HTTP_200_OK
    assert me.json()["email"] == "new@example.com"


def test_register_duplicate_email(client, test_user) -> None:
    response = client.post(
        "/api/auth/register",
        json={"email": test_user.email, "password": "s3cret-pass", "name": "Dup"},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "already exists" in response.json()["error"]


def test_register_rejects_short_password(client) -> None:
    response = client.post(
        "/api/auth/register",
        json={"email": "short@example.com", "password": "123", "name": "Short"},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "Invalid data"
    assert response.json()["details"]


def test_login_wrong_password(client, test_user) -> None:
    response = client.post(
        "/api/auth/login",
        json={"email": test_user.email, "password": TEST_PASSWORD + "x"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "Invalid email or password"}


def test_me_requires_token(client) -> None:
    response = client.get("/api/auth/me")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "Unauthorized"}


def test_me_rejects_garbage_token(client) -> None:
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_admin_route_forbidden_for_regular_user(client, auth_token) -> None:
    response = client.get("/api/admin/flags", headers=auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {"error": "Forbidden"}
