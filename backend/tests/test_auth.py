"""
Tests for authentication endpoints: registration, login and session.
"""

import pytest
from httpx import AsyncClient

REGISTER_PAYLOAD = {
    "email": "new@example.com",
    "username": "newuser",
    "firstName": "Demo",
    "lastName": "Lition",
    "password": "securepassword123",
}


@pytest.mark.asyncio
async def test_register_user(client: AsyncClient):
    """Successful registration returns user data."""
    response = await client.post("/api/auth/register", json=REGISTER_PAYLOAD)
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "new@example.com"
    assert data["firstName"] == "Demo"
    assert data["lastName"] == "Lition"
    assert "hashedPassword" not in data  # Never expose password hash


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, test_user):
    """Duplicate email returns 409."""
    response = await client.post("/api/auth/register", json={
        **REGISTER_PAYLOAD,
        "email": "testuser@example.com",
    })
    assert response.status_code == 409
    assert response.json()["detail"] == "Email already registered"


@pytest.mark.asyncio
async def test_register_duplicate_username(client: AsyncClient, test_user):
    """Duplicate username returns 409."""
    response = await client.post("/api/auth/register", json={
        **REGISTER_PAYLOAD,
        "username": "testuser",
    })
    assert response.status_code == 409
    assert response.json()["detail"] == "Username already taken"


@pytest.mark.asyncio
async def test_register_weak_password(client: AsyncClient):
    """Password under 8 chars returns 422."""
    response = await client.post("/api/auth/register", json={**REGISTER_PAYLOAD, "password": "short"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_register_requires_names(client: AsyncClient):
    payload = {k: v for k, v in REGISTER_PAYLOAD.items() if k != "firstName"}
    response = await client.post("/api/auth/register", json=payload)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, test_user):
    """Valid credentials return JWT token."""
    response = await client.post("/api/auth/login", json={
        "email": "testuser@example.com",
        "password": "testpassword123",
    })
    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert data["token_type"] == "bearer"


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, test_user):
    """Wrong password returns 401."""
    response = await client.post("/api/auth/login", json={
        "email": "testuser@example.com",
        "password": "wrongpassword",
    })
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_nonexistent_email(client: AsyncClient):
    """Non-existent email returns 401."""
    response = await client.post("/api/auth/login", json={
        "email": "nobody@example.com",
        "password": "anypassword123",
    })
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_token_opens_session(client: AsyncClient, test_user):
    login = await client.post("/api/auth/login", json={
        "email": "testuser@example.com",
        "password": "testpassword123",
    })
    token = login.json()["access_token"]

    response = await client.get("/api/auth/session", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["id"] == test_user.id


@pytest.mark.asyncio
async def test_session_requires_token(client: AsyncClient):
    response = await client.get("/api/auth/session")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_session_rejects_garbage_token(client: AsyncClient):
    response = await client.get("/api/auth/session", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
