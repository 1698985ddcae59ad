"""Integration tests for teacher registration, login and the auth gate."""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from school_admin.api.deps import get_token_service

REGISTER = {
    "name": "Grace Hopper",
    "department": "Computer Science",
    "email": "grace@example.com",
    "password": "cobol",
}


def _register(client: TestClient, **overrides):
    return client.post("/api/v1/teachers/register", json={**REGISTER, **overrides})


@pytest.mark.integration
class TestRegister:
    """Tests for POST /teachers/register."""

    def test_register_success(self, client: TestClient) -> None:
        response = _register(client)

        assert response.status_code == 201
        data = response.json()
        assert set(data) == {"id", "name", "department", "email"}
        assert data["name"] == "Grace Hopper"
        assert data["email"] == "grace@example.com"

    def test_register_twice_conflicts(self, client: TestClient) -> None:
        assert _register(client).status_code == 201

        response = _register(client)

        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "CONFLICT"

    @pytest.mark.parametrize("missing", ["name", "department", "email", "password"])
    def test_register_missing_field(self, client: TestClient, missing: str) -> None:
        payload = {k: v for k, v in REGISTER.items() if k != missing}

        response = client.post("/api/v1/teachers/register", json=payload)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        assert missing in response.json()["error"]["details"]

    def test_register_empty_password(self, client: TestClient) -> None:
        assert _register(client, password="").status_code == 400


@pytest.mark.integration
class TestLogin:
    """Tests for POST /teachers/login."""

    def test_login_success(self, client: TestClient) -> None:
        _register(client)

        response = client.post("/api/v1/teachers/login", json={"email": "grace@example.com", "password": "cobol"})

        assert response.status_code == 200
        data = response.json()
        assert data["tokenType"] == "bearer"
        claims = get_token_service().verify(data["accessToken"])
        assert claims["email"] == "grace@example.com"
        assert claims["name"] == "Grace Hopper"

    def test_wrong_password_and_unknown_email_look_identical(self, client: TestClient) -> None:
        _register(client)

        wrong_password = client.post(
            "/api/v1/teachers/login", json={"email": "grace@example.com", "password": "fortran"}
        )
        unknown_email = client.post(
            "/api/v1/teachers/login", json={"email": "nobody@example.com", "password": "cobol"}
        )

        assert wrong_password.status_code == 401
        assert unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json()
        assert "$2b$" not in wrong_password.text
        assert "accessToken" not in wrong_password.text

    def test_login_missing_fields(self, client: TestClient) -> None:
        response = client.post("/api/v1/teachers/login", json={"email": "grace@example.com"})

        assert response.status_code == 400


@pytest.mark.integration
class TestCheckTeacherAuth:
    """Tests for GET /teachers/checkTeacherAuth and the bearer gate."""

    def test_returns_claims(self, client: TestClient, teacher, auth_headers: dict) -> None:
        response = client.get("/api/v1/teachers/checkTeacherAuth", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["user"]["id"] == teacher.id
        assert data["user"]["email"] == teacher.email

    def test_token_from_login_is_accepted(self, client: TestClient) -> None:
        _register(client)
        token = client.post(
            "/api/v1/teachers/login", json={"email": "grace@example.com", "password": "cobol"}
        ).json()["accessToken"]

        response = client.get("/api/v1/teachers/checkTeacherAuth", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200

    def test_missing_token(self, client: TestClient) -> None:
        response = client.get("/api/v1/teachers/checkTeacherAuth")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_expired_token(self, client: TestClient, teacher) -> None:
        token = get_token_service().issue(
            {"id": teacher.id, "name": teacher.name, "email": teacher.email}, ttl=timedelta(seconds=-1)
        )

        response = client.get("/api/v1/teachers/checkTeacherAuth", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid or expired token"

    def test_garbage_token(self, client: TestClient) -> None:
        response = client.get("/api/v1/teachers/checkTeacherAuth", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401

    @pytest.mark.parametrize("path", ["/api/v1/teachers", "/api/v1/students", "/api/v1/courses"])
    def test_every_resource_requires_token(self, client: TestClient, path: str) -> None:
        assert client.get(path).status_code == 401
        assert client.post(path, json={}).status_code == 401
        assert client.delete(f"{path}/1").status_code == 401
