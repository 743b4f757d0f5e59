"""
Tests pour l'authentification JWT, l'inscription et le compte courant.
"""
from datetime import datetime, timedelta

import pytest
from fastapi import HTTPException

from healthpoints.auth.jwt import jwt_manager
from healthpoints.domain.entities import User
from healthpoints.auth.security import (
    AuthoritiesConstants,
    CurrentUser,
    get_current_user_login,
    is_current_user_in_role,
)


class TestJWTManager:
    def test_token_round_trip(self):
        token = jwt_manager.create_token("user", [AuthoritiesConstants.USER, AuthoritiesConstants.ADMIN])
        data = jwt_manager.verify_token(token)

        assert data.login == "user"
        assert data.authorities == [AuthoritiesConstants.USER, AuthoritiesConstants.ADMIN]

    def test_tampered_token(self):
        token = jwt_manager.create_token("user", [AuthoritiesConstants.USER])

        with pytest.raises(HTTPException) as exc_info:
            jwt_manager.verify_token(token + "x")
        assert exc_info.value.status_code == 401


class TestSecurityHelpers:
    def test_role_check(self):
        admin = CurrentUser(login="admin", authorities=[AuthoritiesConstants.ADMIN])
        user = CurrentUser(login="user", authorities=[AuthoritiesConstants.USER])

        assert is_current_user_in_role(admin, AuthoritiesConstants.ADMIN)
        assert not is_current_user_in_role(user, AuthoritiesConstants.ADMIN)
        assert not is_current_user_in_role(None, AuthoritiesConstants.ADMIN)

    def test_current_login(self):
        assert get_current_user_login(CurrentUser(login="user")) == "user"
        assert get_current_user_login(None) is None


class TestAuthenticate:
    def test_valid_credentials(self, client, user_id):
        response = client.post("/api/authenticate", json={"username": "user", "password": "password"})

        assert response.status_code == 200
        token = response.json()["id_token"]
        assert response.headers["Authorization"] == f"Bearer {token}"
        assert jwt_manager.verify_token(token).login == "user"

    def test_login_is_case_insensitive(self, client, user_id):
        response = client.post("/api/authenticate", json={"username": "USER", "password": "password"})
        assert response.status_code == 200

    def test_wrong_password(self, client, user_id):
        response = client.post("/api/authenticate", json={"username": "user", "password": "wrong"})
        assert response.status_code == 401

    def test_unknown_user(self, client):
        response = client.post("/api/authenticate", json={"username": "nobody", "password": "password"})
        assert response.status_code == 401

    def test_token_gives_access(self, client, admin_id):
        token = client.post(
            "/api/authenticate", json={"username": "admin", "password": "password", "rememberMe": True}
        ).json()["id_token"]

        response = client.get("/api/account", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["authorities"] == [AuthoritiesConstants.ADMIN, AuthoritiesConstants.USER]


class TestAccount:
    def test_requires_token(self, client):
        assert client.get("/api/account").status_code == 401

    def test_invalid_token(self, client):
        response = client.get("/api/account", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_current_account(self, client, user_headers):
        response = client.get("/api/account", headers=user_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["login"] == "user"
        assert body["email"] == "user@example.com"
        assert body["authorities"] == [AuthoritiesConstants.USER]
        assert "hashed_password" not in body


class TestRegister:
    def test_register_new_user(self, client):
        response = client.post(
            "/api/register",
            json={"login": "NewUser", "email": "new@example.com", "password": "secret"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["login"] == "newuser"
        assert body["activated"] is True
        assert body["authorities"] == [AuthoritiesConstants.USER]

        login = client.post("/api/authenticate", json={"username": "newuser", "password": "secret"})
        assert login.status_code == 200

    def test_creation_timestamp_is_recorded(self, client):
        response = client.post(
            "/api/register",
            json={"login": "stamped", "email": "stamped@example.com", "password": "secret"},
        )

        assert response.status_code == 201
        created_at = datetime.fromisoformat(response.json()["created_at"])
        assert created_at.year >= 2024

    def test_new_user_timestamp_is_timezone_aware(self):
        user = User(login="aware", hashed_password="x")

        assert user.created_at.tzinfo is not None
        assert user.created_at.utcoffset() == timedelta(0)

    def test_register_cannot_self_deactivate(self, client):
        response = client.post(
            "/api/register",
            json={"login": "sleepy", "password": "secret", "activated": False},
        )
        assert response.json()["activated"] is True

    def test_duplicate_login(self, client, user_id):
        response = client.post("/api/register", json={"login": "user", "password": "secret"})

        assert response.status_code == 400
        assert response.json()["errorKey"] == "userexists"

    def test_duplicate_email(self, client, user_id):
        response = client.post(
            "/api/register", json={"login": "someone", "email": "user@example.com", "password": "secret"}
        )

        assert response.status_code == 400
        assert response.json()["errorKey"] == "emailexists"

    def test_invalid_login(self, client):
        response = client.post("/api/register", json={"login": "bad login!", "password": "secret"})
        assert response.status_code == 422
