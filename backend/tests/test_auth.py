"""Tests for registration, login and session endpoints."""

from conftest import SESSION_COOKIE, TEST_PASSWORD, login, register


class TestRegister:
    """Tests for POST /api/auth/register."""

    def test_register_creates_user_and_session(self, client):
        """Registering returns the public user and logs the client in."""
        user = register(client, "alice")

        assert user["username"] == "alice"
        assert user["email"] == "alice@example.com"
        assert user["role"] == "user"
        assert "createdAt" in user
        assert "password" not in user
        assert client.cookies.get(SESSION_COOKIE)

        me = client.get("/api/auth/user")
        assert me.status_code == 200
        assert me.json()["user"]["id"] == user["id"]

    def test_register_duplicate_email(self, client, other_client):
        """Emails are unique regardless of case."""
        register(client, "alice")

        response = other_client.post(
            "/api/auth/register",
            json={
                "username": "someone",
                "email": "ALICE@example.com",
                "password": TEST_PASSWORD,
                "confirmPassword": TEST_PASSWORD,
            },
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Email already in use"

    def test_register_duplicate_username(self, client, other_client):
        """Usernames are unique regardless of case."""
        register(client, "alice")

        response = other_client.post(
            "/api/auth/register",
            json={
                "username": "Alice",
                "email": "new@example.com",
                "password": TEST_PASSWORD,
                "confirmPassword": TEST_PASSWORD,
            },
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Username already taken"

    def test_register_password_mismatch(self, client):
        """Mismatched confirmation is a validation error and creates nothing."""
        response = client.post(
            "/api/auth/register",
            json={
                "username": "alice",
                "email": "alice@example.com",
                "password": TEST_PASSWORD,
                "confirmPassword": "different",
            },
        )

        assert response.status_code == 400
        data = response.json()
        assert data["message"] == "Validation error"
        assert any("Passwords do not match" in e["message"] for e in data["errors"])
        assert client.get("/api/auth/user").status_code == 401

    def test_register_invalid_fields(self, client):
        """Short usernames, bad emails and short passwords are rejected."""
        response = client.post(
            "/api/auth/register",
            json={
                "username": "al",
                "email": "not-an-email",
                "password": "123",
                "confirmPassword": "123",
            },
        )

        assert response.status_code == 400
        paths = {e["path"] for e in response.json()["errors"]}
        assert {"username", "email", "password"} <= paths

    def test_register_ignores_role(self, client):
        """Self-registration always creates a regular user."""
        response = client.post(
            "/api/auth/register",
            json={
                "username": "sneaky",
                "email": "sneaky@example.com",
                "password": TEST_PASSWORD,
                "confirmPassword": TEST_PASSWORD,
                "role": "admin",
            },
        )

        assert response.status_code == 201
        assert response.json()["user"]["role"] == "user"


class TestLogin:
    """Tests for POST /api/auth/login."""

    def test_login_success(self, client, other_client):
        """Valid credentials return the user and set a session cookie."""
        register(client, "alice")

        user = login(other_client, "alice@example.com")

        assert user["username"] == "alice"
        assert "password" not in user
        assert other_client.get("/api/auth/user").status_code == 200

    def test_login_email_is_case_insensitive(self, client, other_client):
        """Login finds the account whatever the email case."""
        register(client, "alice")

        user = login(other_client, "ALICE@Example.COM")

        assert user["username"] == "alice"

    def test_login_failures_share_a_message(self, client, other_client):
        """Unknown email and wrong password are indistinguishable."""
        register(client, "alice")

        wrong_password = other_client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "wrongpass"},
        )
        unknown_email = other_client.post(
            "/api/auth/login",
            json={"email": "nobody@example.com", "password": TEST_PASSWORD},
        )

        assert wrong_password.status_code == 401
        assert unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json()
        assert wrong_password.json()["message"] == "Invalid email or password"

    def test_login_rotates_session(self, client):
        """Logging in again replaces the previous token."""
        register(client, "alice")
        old_token = client.cookies.get(SESSION_COOKIE)

        login(client, "alice@example.com")
        new_token = client.cookies.get(SESSION_COOKIE)

        assert new_token != old_token
        client.cookies.clear()
        client.cookies.set(SESSION_COOKIE, old_token)
        assert client.get("/api/auth/user").status_code == 401

    def test_login_accepts_remember_me(self, client, other_client):
        """rememberMe is accepted and optional."""
        register(client, "alice")

        response = other_client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": TEST_PASSWORD, "rememberMe": True},
        )

        assert response.status_code == 200


class TestLogoutAndCurrentUser:
    """Tests for POST /api/auth/logout and GET /api/auth/user."""

    def test_current_user_anonymous(self, client):
        """Anonymous callers get 401."""
        response = client.get("/api/auth/user")

        assert response.status_code == 401
        assert response.json()["message"] == "Not authenticated"

    def test_logout_ends_session(self, client):
        """After logout the old token no longer authenticates."""
        register(client, "alice")
        token = client.cookies.get(SESSION_COOKIE)

        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json()["message"] == "Successfully logged out"
        client.cookies.clear()
        client.cookies.set(SESSION_COOKIE, token)
        assert client.get("/api/auth/user").status_code == 401

    def test_logout_without_session(self, client):
        """Logging out while anonymous still succeeds."""
        response = client.post("/api/auth/logout")

        assert response.status_code == 200

    def test_unknown_token(self, client):
        """A forged cookie is treated as anonymous."""
        client.cookies.set(SESSION_COOKIE, "not-a-real-token")

        assert client.get("/api/auth/user").status_code == 401
