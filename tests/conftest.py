"""Pytest configuration and fixtures."""
import os
from uuid import uuid4

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

# Settings are read at import time and have no default signing key
os.environ.setdefault("JWT_SECRET", "test-secret")

from workhours.main import app  # noqa: E402


@pytest_asyncio.fixture
async def test_db():
    """
    In-memory MongoDB database swapped in for the application's database.

    Each test gets its own database name so no state leaks between tests.
    """
    from workhours.database import database, ensure_indexes

    mock_client = AsyncMongoMockClient()
    db = mock_client[f"workhours_test_{uuid4().hex}"]
    await ensure_indexes(db)

    original_db = database.db
    database.db = db

    yield db

    database.db = original_db


@pytest_asyncio.fixture
async def app_client(test_db):
    """Async HTTP client talking to the application in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


async def register_and_login(client, email="marie@example.com", password="password123"):
    """Register a user and return (auth headers, login response body)."""
    await client.post(
        "/auth/register",
        json={
            "email": email,
            "password": password,
            "first_name": "Marie",
            "last_name": "Dupont",
        },
    )
    response = await client.post("/auth/login", json={"email": email, "password": password})
    body = response.json()
    return {"Authorization": f"Bearer {body['access_token']}"}, body


@pytest_asyncio.fixture
async def auth_headers(app_client):
    """Bearer headers for a freshly registered user."""
    headers, _ = await register_and_login(app_client)
    return headers


@pytest_asyncio.fixture
async def login_as(app_client):
    """Factory logging in extra users: ``headers, body = await login_as(email)``."""

    async def _login(email: str):
        return await register_and_login(app_client, email=email)

    return _login
