"""
Authentication endpoint tests
Signup, signin, logout and the session cookie
"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from services.auth_service import AuthService


class TestSignup:
    """Test account registration"""

    def test_signup_success(self, client: TestClient):
        """Signup returns 201 with the new user id"""
        response = client.post(
            "/api/auth/signup",
            json={"username": "alice", "email": "alice@example.com", "password": "password123"},
        )
        assert response.status_code == 201

        data = response.json()
        assert data["success"] is True
        assert data["message"] == "User created successfully"
        assert data["userId"]

    @pytest.mark.parametrize("password", ["", "a", "short", "1234567"])
    def test_signup_short_password_rejected(self, client: TestClient, password):
        """Passwords under 8 characters are rejected and nothing is persisted"""
        response = client.post(
            "/api/auth/signup",
            json={"username": "bob", "email": "bob@example.com", "password": password},
        )
        assert response.status_code == 400
        assert response.json()["success"] is False

        signin = client.post("/api/auth/signin", json={"email": "bob@example.com", "password": password or "x"})
        assert signin.status_code == 404

    @pytest.mark.parametrize("payload", [
        {"email": "carol@example.com", "password": "password123"},
        {"username": "carol", "password": "password123"},
        {"username": "carol", "email": "carol@example.com"},
        {"username": "", "email": "carol@example.com", "password": "password123"},
    ])
    def test_signup_missing_fields(self, client: TestClient, payload):
        """All of username, email and password are required"""
        response = client.post("/api/auth/signup", json=payload)
        assert response.status_code == 400

        data = response.json()
        assert data == {"success": False, "statusCode": 400, "message": "All fields are required"}

    def test_signup_invalid_email(self, client: TestClient):
        """A malformed email address is a validation error"""
        response = client.post(
            "/api/auth/signup",
            json={"username": "dave", "email": "not-an-email", "password": "password123"},
        )
        assert response.status_code == 400
        assert response.json()["statusCode"] == 400

    def test_signup_duplicate_email(self, client: TestClient):
        """A second account with the same email is rejected with a friendly message"""
        payload = {"username": "erin", "email": "erin@example.com", "password": "password123"}
        assert client.post("/api/auth/signup", json=payload).status_code == 201

        response = client.post(
            "/api/auth/signup",
            json={"username": "erin2", "email": "ERIN@example.com", "password": "password123"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Email already in use"

    def test_signup_duplicate_username(self, client: TestClient):
        """A second account with the same username is rejected"""
        assert client.post(
            "/api/auth/signup",
            json={"username": "frank", "email": "frank@example.com", "password": "password123"},
        ).status_code == 201

        response = client.post(
            "/api/auth/signup",
            json={"username": "frank", "email": "frank2@example.com", "password": "password123"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Username already taken"


class TestSignin:
    """Test signin and the session cookie"""

    def test_signin_success_sets_cookie(self, client: TestClient):
        """Signin returns the user without password and sets the httpOnly cookie"""
        client.post(
            "/api/auth/signup",
            json={"username": "grace", "email": "grace@example.com", "password": "password123"},
        )

        response = client.post("/api/auth/signin", json={"email": "grace@example.com", "password": "password123"})
        assert response.status_code == 200

        data = response.json()
        assert data["username"] == "grace"
        assert data["email"] == "grace@example.com"
        assert data["savedRecipes"] == []
        assert data["profilePic"] is None
        assert "password" not in data
        assert "passwordHash" not in data

        assert "access_token" in response.cookies
        set_cookie = response.headers["set-cookie"].lower()
        assert "httponly" in set_cookie

    def test_signin_wrong_password(self, client: TestClient):
        """Correct email with the wrong password is 400 and issues no cookie"""
        client.post(
            "/api/auth/signup",
            json={"username": "heidi", "email": "heidi@example.com", "password": "password123"},
        )
        client.cookies.clear()

        response = client.post("/api/auth/signin", json={"email": "heidi@example.com", "password": "wrong-password"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid password"
        assert "access_token" not in response.cookies
        assert "set-cookie" not in response.headers

    def test_signin_unknown_email(self, client: TestClient):
        """Unknown email is 404"""
        response = client.post("/api/auth/signin", json={"email": "nobody@example.com", "password": "password123"})
        assert response.status_code == 404
        assert response.json() == {"success": False, "statusCode": 404, "message": "User not found"}

    def test_signin_missing_fields(self, client: TestClient):
        response = client.post("/api/auth/signin", json={"email": "ivan@example.com"})
        assert response.status_code == 400
        assert response.json()["message"] == "All fields are required"

    def test_logout_clears_cookie(self, client: TestClient, signup_and_login):
        """Logout always succeeds and ends the session"""
        signup_and_login()
        assert client.get("/api/user/").status_code == 200

        response = client.post("/api/auth/logout")
        assert response.status_code == 200
        assert response.json()["message"] == "Logged out successfully"

        assert client.get("/api/user/").status_code == 401

    def test_logout_without_session(self, client: TestClient):
        assert client.post("/api/auth/logout").status_code == 200


class TestSessionToken:
    """Test the cookie authentication dependency"""

    def test_missing_cookie(self, client: TestClient):
        response = client.get("/api/user/")
        assert response.status_code == 401
        assert response.json() == {"success": False, "statusCode": 401, "message": "Unauthorized"}

    def test_tampered_token(self, client: TestClient):
        client.cookies.set("access_token", "not-a-jwt")
        response = client.get("/api/user/")
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_token_signed_with_other_secret(self, client: TestClient, test_settings):
        other = AuthService(test_settings.model_copy(update={"JWT_SECRET_KEY": "someone-else"}))
        client.cookies.set("access_token", other.create_access_token({"sub": "user-id"}))

        response = client.get("/api/user/")
        assert response.status_code == 401

    def test_expired_token(self, client: TestClient, test_settings, signup_and_login):
        user = signup_and_login()
        expired = AuthService(test_settings).create_access_token(
            {"sub": user["id"]}, expires_delta=timedelta(minutes=-5)
        )
        client.cookies.clear()
        client.cookies.set("access_token", expired)

        response = client.get("/api/user/")
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"
