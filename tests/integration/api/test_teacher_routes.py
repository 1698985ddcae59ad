"""Integration tests for teacher CRUD routes."""

import pytest
from fastapi.testclient import TestClient

URL = "/api/v1/teachers"


@pytest.mark.integration
class TestTeacherCrud:
    """Tests for /teachers CRUD."""

    def test_create_without_password(self, client: TestClient, auth_headers: dict) -> None:
        response = client.post(URL, json={"name": "Alan Turing", "department": "Logic"}, headers=auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Alan Turing"
        assert data["email"] is None
        assert "password_hash" not in data

    def test_create_rejects_password_hash_field(self, client: TestClient, auth_headers: dict) -> None:
        response = client.post(
            URL,
            json={"name": "Alan Turing", "department": "Logic", "password_hash": "x"},
            headers=auth_headers,
        )

        assert response.status_code == 400

    def test_list_never_exposes_password_hash(
        self, client: TestClient, auth_headers: dict, make_teacher
    ) -> None:
        make_teacher(name="Grace", email="grace@example.com", password="cobol")

        body = client.get(URL, headers=auth_headers).json()

        assert body["meta"]["total"] == 2
        assert all("password_hash" not in t for t in body["data"])
        assert "$2b$" not in str(body)

    def test_list_sorted_desc(self, client: TestClient, auth_headers: dict, make_teacher, timeline) -> None:
        make_teacher(name="late", email="late@example.com", created_at=timeline(10))
        make_teacher(name="early", email="early@example.com", created_at=timeline(1))

        names = [t["name"] for t in client.get(URL, params={"sort": "DESC"}, headers=auth_headers).json()["data"]]

        # the auth fixture teacher was created now, after both
        assert names == ["Ada Lovelace", "late", "early"]

    def test_populate_courses(
        self, client: TestClient, auth_headers: dict, teacher, make_course
    ) -> None:
        make_course(title="Algebra", teacher=teacher)
        make_course(title="Geometry", teacher=teacher)

        response = client.get(f"{URL}/{teacher.id}", params={"populate": "courseId"}, headers=auth_headers)

        assert response.status_code == 200
        assert sorted(c["title"] for c in response.json()["courses"]) == ["Algebra", "Geometry"]

    def test_invalid_populate_on_list(self, client: TestClient, auth_headers: dict) -> None:
        response = client.get(URL, params={"populate": "students,grades"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid populate values: students, grades"

    def test_update(self, client: TestClient, auth_headers: dict, make_teacher) -> None:
        other = make_teacher(name="Alan", department="Logic", email="alan@example.com")

        response = client.put(f"{URL}/{other.id}", json={"department": "Computing"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["department"] == "Computing"
        assert response.json()["name"] == "Alan"

    def test_update_invalid_email(self, client: TestClient, auth_headers: dict, teacher) -> None:
        response = client.put(f"{URL}/{teacher.id}", json={"email": "not-an-email"}, headers=auth_headers)

        assert response.status_code == 400

    def test_get_not_found(self, client: TestClient, auth_headers: dict) -> None:
        assert client.get(f"{URL}/999", headers=auth_headers).status_code == 404

    def test_delete_cascades_to_students(
        self, client: TestClient, auth_headers: dict, make_teacher, make_student
    ) -> None:
        other = make_teacher(name="Alan", email="alan@example.com")
        student = make_student(other)

        response = client.delete(f"{URL}/{other.id}", headers=auth_headers)

        assert response.status_code == 200
        assert client.get(f"/api/v1/students/{student.id}", headers=auth_headers).status_code == 404

    def test_delete_not_found(self, client: TestClient, auth_headers: dict) -> None:
        assert client.delete(f"{URL}/999", headers=auth_headers).status_code == 404
