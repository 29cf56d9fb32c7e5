"""Tests for rate limiting on the credential endpoints."""

import secrets
from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.requests import Request

from conftest import SESSION_COOKIE, make_settings
from sportsync.api.main import create_app
from sportsync.core.rate_limit import RATE_LIMITS, configure_limiter, get_rate_limit_key, limiter


def make_request(app: FastAPI, cookie: str | None = None) -> Request:
    headers = [(b"cookie", cookie.encode())] if cookie else []
    return Request(
        {
            "type": "http",
            "headers": headers,
            "client": ("203.0.113.9", 5000),
            "app": app,
        }
    )


class TestRateLimitKey:
    """Tests for get_rate_limit_key."""

    def test_anonymous_uses_address(self, app: FastAPI):
        """Requests without a session are keyed by client address."""
        assert get_rate_limit_key(make_request(app)) == "203.0.113.9"

    def test_live_session_uses_user_id(self, app: FastAPI):
        """Requests with a live session are keyed by the session's user."""
        token = app.state.context.sessions.create(7)

        key = get_rate_limit_key(make_request(app, f"{SESSION_COOKIE}={token}"))

        assert key == "user:7"

    def test_unknown_cookie_uses_address(self, app: FastAPI):
        """A cookie the session store does not know falls back to the address."""
        key = get_rate_limit_key(make_request(app, f"{SESSION_COOKIE}={'a' * 40}"))

        assert key == "203.0.113.9"


class TestLoginRateLimit:
    """Tests for the limit on POST /api/auth/login."""

    @pytest.fixture
    def limited_client(self, tmp_path) -> Iterator[TestClient]:
        limiter.reset()
        settings = make_settings(tmp_path, rate_limit_enabled=True, rate_limit_auth="5/minute")
        app = create_app(settings)
        with TestClient(app) as client:
            yield client
        configure_limiter(make_settings(tmp_path))
        limiter.reset()

    def test_limit_comes_from_app_settings(self, limited_client: TestClient):
        """The configured auth limit is the one in force."""
        assert RATE_LIMITS["auth"] == "5/minute"

    def test_too_many_attempts(self, limited_client: TestClient):
        """Attempts beyond the limit get 429."""
        body = {"email": "nobody@example.com", "password": "wrongpass"}

        for _ in range(5):
            assert limited_client.post("/api/auth/login", json=body).status_code == 401

        response = limited_client.post("/api/auth/login", json=body)

        assert response.status_code == 429
        assert response.json() == {"message": "Too many requests, try again later"}

    def test_fresh_cookies_do_not_reset_the_limit(self, limited_client: TestClient):
        """Sending a new random session cookie each attempt is still limited."""
        body = {"email": "nobody@example.com", "password": "wrongpass"}

        statuses = []
        for _ in range(8):
            limited_client.cookies.clear()
            limited_client.cookies.set(SESSION_COOKIE, secrets.token_urlsafe(32))
            statuses.append(limited_client.post("/api/auth/login", json=body).status_code)

        assert statuses[:5] == [401] * 5
        assert statuses[5:] == [429] * 3

    def test_other_endpoints_unlimited(self, limited_client: TestClient):
        """Read endpoints are not rate limited."""
        for _ in range(7):
            assert limited_client.get("/api/matches").status_code == 200
