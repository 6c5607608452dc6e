"""Integration tests for the staff authentication flow

Tests cover:
- Login with valid/invalid credentials
- Disabled accounts
- GET /auth/me
- Logout revokes the token
"""

import pytest
from fastapi.testclient import TestClient

from auth.jwt import decode_token


pytestmark = pytest.mark.integration

# Password the conftest fixtures give every staff account
STAFF_PASSWORD = "FrontDesk2024"


class TestLoginEndpoint:
    """Test POST /auth/login endpoint"""

    def test_login_with_valid_credentials(self, client: TestClient, staff_user):
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "frontdesk@grandhotel.com", "password": STAFF_PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["expires_in"] > 0
        assert decode_token(data["access_token"])["sub"] == str(staff_user.id)

    def test_login_email_is_case_insensitive(self, client: TestClient, staff_user):
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "FrontDesk@GrandHotel.com", "password": STAFF_PASSWORD},
        )
        assert response.status_code == 200

    def test_wrong_password(self, client: TestClient, staff_user):
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "frontdesk@grandhotel.com", "password": "WrongPass2024"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_unknown_email_gets_same_message(self, client: TestClient, staff_user):
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@grandhotel.com", "password": STAFF_PASSWORD},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_disabled_account_rejected(self, client: TestClient, disabled_staff_user):
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "nightshift@grandhotel.com", "password": STAFF_PASSWORD},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Account is disabled"

    def test_malformed_email_rejected(self, client: TestClient):
        response = client.post("/api/v1/auth/login", json={"email": "frontdesk", "password": "x"})
        assert response.status_code == 422


class TestSession:
    """Test /auth/me and /auth/logout"""

    def test_me_returns_profile(self, staff_client: TestClient, staff_user):
        response = staff_client.get("/api/v1/auth/me")

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["email"] == "frontdesk@grandhotel.com"
        assert user["status"] == "ACTIVE"
        assert "password_hash" not in user

    def test_me_requires_token(self, client: TestClient):
        assert client.get("/api/v1/auth/me").status_code == 401

    def test_logout_revokes_token(self, staff_client: TestClient):
        response = staff_client.post("/api/v1/auth/logout")
        assert response.status_code == 204

        assert staff_client.get("/api/v1/auth/me").status_code == 401
        assert staff_client.get("/api/v1/mail").status_code == 401
        assert staff_client.post("/api/v1/auth/logout").status_code == 401

    def test_login_then_use_token(self, client: TestClient, staff_user):
        token = client.post(
            "/api/v1/auth/login",
            json={"email": "frontdesk@grandhotel.com", "password": STAFF_PASSWORD},
        ).json()["access_token"]

        response = client.get("/api/v1/mail", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["items"] == []
