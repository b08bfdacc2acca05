"""
Tests for user profile registration.
"""

import pytest


@pytest.mark.asyncio
async def test_register_user(client):
    response = await client.post("/users", json={
        "email": "new@test.com",
        "displayName": "New User",
        "photoUrl": "https://img.test/a.png",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "new@test.com"
    assert data["displayName"] == "New User"
    assert data["role"] == "user"


@pytest.mark.asyncio
async def test_register_user_cannot_pick_role(client):
    response = await client.post("/users", json={"email": "sneaky@test.com", "role": "admin"})

    assert response.json()["role"] == "user"


@pytest.mark.asyncio
async def test_register_existing_user(client):
    await client.post("/users", json={"email": "twice@test.com"})

    response = await client.post("/users", json={"email": "twice@test.com"})

    assert response.status_code == 200
    assert response.json() == {"message": "User already exists"}


@pytest.mark.asyncio
async def test_root_and_health(client):
    root = await client.get("/")
    assert root.status_code == 200
    assert root.text == "Zap Shift running ....!"

    health = await client.get("/health")
    assert health.json()["status"] == "healthy"
    assert health.json()["redis"] == "connected"
    assert "X-Correlation-ID" in health.headers
