"""
API tests for user endpoints.

Tests cover:
- Registration returns user and bearer token
- Validation errors and username/email conflicts
- Token reissue via /login and revocation via /logout
- Authenticated /users/me
- Health and root endpoints
"""

from decimal import Decimal

from fastapi.testclient import TestClient

from tests.conftest import profile_for


def _signup(username: str, **overrides) -> dict:
    return {"username": username, **profile_for(username), **overrides}


class TestRegisterAPI:
    """Tests for POST /users."""

    def test_register_success(self, client: TestClient):
        """
        GIVEN no users exist
        WHEN I POST /users with a valid username
        THEN response is 201 with the funded user and a token
        """
        response = client.post("/users", json=_signup("alice", first_name="Alice", last_name="Smith"))

        assert response.status_code == 201
        data = response.json()
        assert data["user"]["username"] == "alice"
        assert data["user"]["first_name"] == "Alice"
        assert data["user"]["last_name"] == "Smith"
        assert data["user"]["email"] == "alice@example.com"
        assert Decimal(data["user"]["cash_balance"]) == Decimal("10000")
        assert data["user"]["user_id"]
        assert data["token"]

    def test_duplicate_username_is_409(self, client: TestClient):
        client.post("/users", json=_signup("alice"))

        response = client.post("/users", json=_signup("alice", email="second@example.com"))

        assert response.status_code == 409
        assert response.json() == {"error": "STORAGE_CONFLICT", "message": "Username already exists"}

    def test_duplicate_email_is_409(self, client: TestClient):
        client.post("/users", json=_signup("alice"))

        response = client.post("/users", json=_signup("alicia", email="alice@example.com"))

        assert response.status_code == 409
        assert response.json()["message"] == "Email already exists"

    def test_invalid_email(self, client: TestClient):
        response = client.post("/users", json=_signup("alice", email="not-an-email"))

        assert response.status_code == 400
        assert response.json() == {"error": "VALIDATION_ERROR", "message": "A valid email is required"}

    def test_invalid_username(self, client: TestClient):
        response = client.post("/users", json=_signup("a b", email="ab@example.com"))

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_missing_username_is_422(self, client: TestClient):
        response = client.post("/users", json={})

        assert response.status_code == 422

    def test_missing_profile_fields_is_422(self, client: TestClient):
        response = client.post("/users", json={"username": "alice"})

        assert response.status_code == 422


class TestMeAPI:
    """Tests for GET /users/me."""

    def test_me_with_token(self, client: TestClient, register):
        user_id, headers = register("alice")

        response = client.get("/users/me", headers=headers)

        assert response.status_code == 200
        assert response.json()["user_id"] == user_id

    def test_me_without_token(self, client: TestClient):
        response = client.get("/users/me")

        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHENTICATED"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_me_with_bad_scheme(self, client: TestClient, register):
        register("alice")

        response = client.get("/users/me", headers={"Authorization": "Basic abc"})

        assert response.status_code == 401

    def test_me_with_unknown_token(self, client: TestClient):
        response = client.get("/users/me", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid or expired token"


class TestMetaEndpoints:
    """Tests for /health and /."""

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_root(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"


class TestLoginAPI:
    """Tests for POST /login."""

    def test_login_issues_a_new_working_token(self, client: TestClient, register):
        """
        GIVEN a registered user
        WHEN they POST /login with their username and email
        THEN a new token is issued and authenticates as them, alongside the old one
        """
        user_id, old_headers = register("alice")

        response = client.post("/login", json={"username": "alice", "email": "ALICE@example.com"})

        assert response.status_code == 200
        data = response.json()
        assert data["user_id"] == user_id
        new_headers = {"Authorization": f"Bearer {data['token']}"}
        assert new_headers != old_headers
        assert client.get("/users/me", headers=new_headers).json()["user_id"] == user_id
        assert client.get("/users/me", headers=old_headers).status_code == 200

    def test_login_recovers_access_after_token_revoked(self, client: TestClient, register, app_context):
        """
        GIVEN a registered user whose only token was revoked
        WHEN they POST /login
        THEN they can act as their account again
        """
        user_id, old_headers = register("alice")
        app_context.auth.revoke_token(old_headers["Authorization"].split(" ", 1)[1])
        assert client.get("/users/me", headers=old_headers).status_code == 401

        response = client.post("/login", json={"username": "alice", "email": "alice@example.com"})

        headers = {"Authorization": f"Bearer {response.json()['token']}"}
        assert client.get("/users/me", headers=headers).json()["user_id"] == user_id

    def test_login_with_wrong_email(self, client: TestClient, register):
        register("alice")

        response = client.post("/login", json={"username": "alice", "email": "bob@example.com"})

        assert response.status_code == 401
        assert response.json() == {"error": "UNAUTHENTICATED", "message": "Invalid username or email"}

    def test_login_unknown_user(self, client: TestClient):
        response = client.post("/login", json={"username": "ghost", "email": "ghost@example.com"})

        assert response.status_code == 401


class TestLogoutAPI:
    """Tests for POST /logout."""

    def test_logout_revokes_only_the_presented_token(self, client: TestClient, register):
        """
        GIVEN a user holding two tokens
        WHEN they POST /logout with one of them
        THEN that token stops working and the other still does
        """
        user_id, first_headers = register("alice")
        login = client.post("/login", json={"username": "alice", "email": "alice@example.com"})
        second_headers = {"Authorization": f"Bearer {login.json()['token']}"}

        response = client.post("/logout", headers=first_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Logged out successfully"}
        assert client.get("/users/me", headers=first_headers).status_code == 401
        assert client.get("/users/me", headers=second_headers).json()["user_id"] == user_id

    def test_logout_twice_is_unauthenticated(self, client: TestClient, register):
        _, headers = register("alice")
        client.post("/logout", headers=headers)

        response = client.post("/logout", headers=headers)

        assert response.status_code == 401

    def test_logout_without_token(self, client: TestClient):
        response = client.post("/logout")

        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHENTICATED"
