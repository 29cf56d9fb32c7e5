"""Integration tests for health checks, middleware and error rendering."""

from fastapi.testclient import TestClient

from conftest import make_settings
from sportsync.api.main import create_app
from sportsync.schemas import Match


class TestHealthEndpoints:
    """Test suite for health check endpoints."""

    def test_health_check(self, client: TestClient):
        """Test basic health check endpoint returns 200 with correct structure."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert set(data.keys()) == {"status", "version"}
        assert data["status"] == "healthy"

    def test_readiness_check(self, client: TestClient, backend: str):
        """Test readiness reports the storage backend and optional services."""
        response = client.get("/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["storage"]["backend"] == backend
        assert data["storage"]["connected"] is True
        assert data["news_api"] is False
        assert data["scheduler"] == {"running": False, "jobs": []}

    def test_readiness_counts_sessions(self, user_client: TestClient):
        """Live sessions are counted."""
        data = user_client.get("/health/ready").json()

        assert data["sessions"] == 1

    def test_root_endpoint(self, client: TestClient):
        """Test root endpoint returns app info."""
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "SportSync API"
        assert data["docs"] == "/docs"


class TestSecurityHeaders:
    """Test suite for security headers middleware."""

    def test_security_headers_present(self, client: TestClient):
        """Test that security headers are present in response."""
        response = client.get("/health")

        assert response.headers.get("X-Content-Type-Options") == "nosniff"
        assert response.headers.get("X-Frame-Options") == "DENY"
        assert "Referrer-Policy" in response.headers
        assert "Permissions-Policy" in response.headers
        assert "Strict-Transport-Security" not in response.headers

    def test_request_id_echoed(self, client: TestClient):
        """A caller-supplied X-Request-ID is returned unchanged."""
        response = client.get("/health", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    def test_request_id_generated(self, client: TestClient):
        """Requests without an id get one."""
        response = client.get("/health")

        assert len(response.headers["X-Request-ID"]) == 12

    def test_cors_headers_for_allowed_origin(self, client: TestClient):
        """Credentialed CORS is allowed for configured origins."""
        response = client.options(
            "/api/matches",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_cors_rejects_unknown_origin(self, client: TestClient):
        """Unknown origins get no CORS allowance."""
        response = client.options(
            "/api/matches",
            headers={
                "Origin": "https://evil.example.com",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert "access-control-allow-origin" not in response.headers


class TestErrorRendering:
    """Errors share the {message, errors?} shape."""

    def test_unknown_route(self, client: TestClient):
        """Unknown routes are 404 with a message."""
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert set(response.json().keys()) == {"message"}

    def test_validation_error_shape(self, client: TestClient):
        """Validation errors list path, message and type per field."""
        response = client.post("/api/auth/login", json={"email": "alice@example.com"})

        assert response.status_code == 400
        data = response.json()
        assert data["message"] == "Validation error"
        assert data["errors"][0]["path"] == "password"
        assert set(data["errors"][0].keys()) == {"path", "message", "type"}

    def test_unhandled_error_is_generic(self, tmp_path):
        """Unexpected exceptions become a 500 without internals."""
        app = create_app(make_settings(tmp_path))

        async def explode() -> None:
            raise RuntimeError("database password is hunter2")

        app.add_api_route("/explode", explode)

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/explode")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}
        assert "hunter2" not in response.text

    def test_server_side_model_error_is_generic(self, tmp_path):
        """Model validation failing inside a handler is a 500, not a 400 with field paths."""
        app = create_app(make_settings(tmp_path))

        async def bad_record() -> None:
            Match.model_validate({"id": 1, "teamOne": "Arsenal"})

        app.add_api_route("/bad-record", bad_record)

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/bad-record")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}

    def test_docs_hidden_in_production(self, tmp_path):
        """Interactive docs are only served outside production."""
        settings = make_settings(
            tmp_path,
            app_env="production",
            storage_backend="database",
            admin_password="a-real-password",
        )

        app = create_app(settings)

        assert app.docs_url is None
        assert app.redoc_url is None
