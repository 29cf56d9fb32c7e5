"""Pytest configuration and fixtures for API integration tests.

Every API test runs twice: once against the in-memory backend and once
against a throwaway SQLite database, so both storage implementations are
held to the same behavior.
"""

from collections.abc import AsyncGenerator, Iterator
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from sportsync.api.main import create_app
from sportsync.core.config import Settings
from sportsync.core.security import hash_password
from sportsync.schemas import UserCreate
from sportsync.storage import MemoryStorage, SqlStorage, Storage

SESSION_COOKIE = "sportsync_session"
TEST_PASSWORD = "secret123"


def make_settings(tmp_path: Path, **overrides: Any) -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    values: dict[str, Any] = {
        "app_env": "test",
        "log_level": "WARNING",
        "storage_backend": "memory",
        "database_url": f"sqlite:///{tmp_path / 'sportsync_test.db'}",
        "seed_sample_data": False,
        "bcrypt_rounds": 4,
        "rate_limit_enabled": False,
        "reminder_sweep_enabled": False,
        "news_api_key": "",
        "sentry_dsn": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(params=["memory", "database"])
def backend(request: pytest.FixtureRequest) -> str:
    """Storage backend under test."""
    return request.param


@pytest.fixture
def app_settings(tmp_path: Path, backend: str) -> Settings:
    return make_settings(tmp_path, storage_backend=backend)


@pytest.fixture
def app(app_settings: Settings) -> FastAPI:
    return create_app(app_settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Anonymous client; entering it runs the app lifespan (connect, seed)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def other_client(app: FastAPI, client: TestClient) -> TestClient:
    """Second browser against the same running app, with its own cookie jar."""
    return TestClient(app)


@pytest.fixture
def storage(app: FastAPI, client: TestClient) -> Storage:
    """The running app's storage backend."""
    return app.state.context.storage


@pytest.fixture
def admin_client(app: FastAPI, client: TestClient, storage: Storage) -> TestClient:
    """Client logged in as an administrator."""
    client.portal.call(
        storage.create_user,
        UserCreate(
            username="boss",
            email="boss@example.com",
            password=hash_password(TEST_PASSWORD, rounds=4),
            role="admin",
        ),
    )
    admin = TestClient(app)
    login(admin, "boss@example.com")
    return admin


@pytest.fixture
def user_client(client: TestClient) -> TestClient:
    """The default client, registered and logged in as a regular user."""
    register(client, "alice")
    return client


@pytest.fixture
async def memory_storage() -> AsyncGenerator[MemoryStorage, None]:
    storage = MemoryStorage()
    await storage.connect()
    yield storage
    await storage.close()


@pytest.fixture(params=["memory", "database"])
async def any_storage(
    request: pytest.FixtureRequest, tmp_path: Path
) -> AsyncGenerator[Storage, None]:
    """Each storage backend, freshly connected and empty."""
    storage: Storage
    if request.param == "memory":
        storage = MemoryStorage()
    else:
        storage = SqlStorage(f"sqlite:///{tmp_path / 'storage_test.db'}")
    await storage.connect()
    yield storage
    await storage.close()


# ============================================================================
# Helpers
# ============================================================================


def register(
    client: TestClient,
    username: str,
    email: str | None = None,
    password: str = TEST_PASSWORD,
) -> dict[str, Any]:
    """Register through the API (which also logs the client in)."""
    response = client.post(
        "/api/auth/register",
        json={
            "username": username,
            "email": email or f"{username}@example.com",
            "password": password,
            "confirmPassword": password,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["user"]


def login(client: TestClient, email: str, password: str = TEST_PASSWORD) -> dict[str, Any]:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["user"]


def match_payload(**overrides: Any) -> dict[str, Any]:
    """Valid admin match-creation body."""
    payload: dict[str, Any] = {
        "sportType": "football",
        "team1": "Arsenal",
        "team2": "Chelsea",
        "venue": "Emirates Stadium",
        "matchTime": "2026-11-01T15:00:00Z",
        "status": "upcoming",
    }
    payload.update(overrides)
    return payload


def create_match(admin_client: TestClient, **overrides: Any) -> dict[str, Any]:
    response = admin_client.post("/api/admin/matches", json=match_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()["match"]
