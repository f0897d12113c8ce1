# /tests/test_api.py

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from eduguide.core import security
from eduguide.core.config import get_settings
from eduguide.db.database import get_db
from eduguide.main import app
from eduguide.models.suggestion_model import GatewayStatus
from eduguide.services.gemini_service import SuggestionQuotaError, get_gemini_gateway

HEADER = "name,age,class,teacherEmail,empathy,regulation,cooperation\n"


@pytest.fixture
def gateway():
    gateway = MagicMock()
    gateway.generate_text = AsyncMock(return_value="1. Pair Maya with a reading buddy.")
    gateway.check_status = AsyncMock(
        return_value=GatewayStatus(available=True, message="Gemini API is available and configured correctly")
    )
    return gateway


@pytest.fixture
def client(db_session, test_settings, gateway):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_gemini_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_header(test_settings):
    def _auth_header(user):
        token = security.create_access_token(user.id, test_settings, role=user.role)
        return {"Authorization": f"Bearer {token}"}
    return _auth_header


# --- Auth ---

def test_register_login_and_me(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "New Teacher", "email": "New@School.org", "password": "secret123"},
    )
    assert response.status_code == 201
    assert response.json()["email"] == "new@school.org"
    assert "hashed_password" not in response.json()

    duplicate = client.post(
        "/api/auth/register",
        json={"name": "Again", "email": "new@school.org", "password": "secret123"},
    )
    assert duplicate.status_code == 400

    token = client.post("/api/auth/token", data={"username": "new@school.org", "password": "secret123"})
    assert token.status_code == 200

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token.json()['access_token']}"})
    assert me.status_code == 200
    assert me.json()["role"] == "teacher"


def test_open_registration_cannot_create_admins(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "Sneaky", "email": "sneaky@school.org", "password": "secret123", "role": "admin"},
    )

    assert response.status_code == 403
    login = client.post("/api/auth/token", data={"username": "sneaky@school.org", "password": "secret123"})
    assert login.status_code == 401


def test_admin_can_create_users_with_any_role(client, admin, teacher, auth_header):
    payload = {"name": "Second Admin", "email": "admin2@school.org", "password": "secret123", "role": "admin"}

    assert client.post("/api/auth/users", json=payload, headers=auth_header(teacher)).status_code == 403

    response = client.post("/api/auth/users", json=payload, headers=auth_header(admin))
    assert response.status_code == 201
    assert response.json()["role"] == "admin"


def test_login_with_wrong_password(client, teacher):
    response = client.post("/api/auth/token", data={"username": "teacher@example.com", "password": "nope"})
    assert response.status_code == 401


def test_protected_routes_require_a_token(client):
    assert client.get("/api/students").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401


# --- Admin upload ---

def test_admin_upload_reports_row_errors(client, admin, teacher, auth_header):
    content = HEADER + "John Doe,8,3A,teacher@example.com,4,3,5\nGhost,9,3B,ghost@example.com,,,\n"

    response = client.post(
        "/api/admin/upload",
        files={"file": ("roster.csv", content, "text/csv")},
        headers=auth_header(admin),
    )

    assert response.status_code == 200
    assert response.json() == {
        "count": 1,
        "processed": 2,
        "errors": ["No teacher found with email: ghost@example.com"],
    }

    history = client.get("/api/admin/uploads", headers=auth_header(admin))
    assert history.status_code == 200
    record = history.json()[0]
    assert record["fileName"] == "roster.csv"
    assert record["status"] == "completed_with_errors"
    assert record["hasErrors"] is True


def test_admin_upload_without_errors_omits_the_errors_key(client, admin, teacher, auth_header):
    content = HEADER + "John Doe,8,3A,teacher@example.com,4,3,5\n"

    response = client.post(
        "/api/admin/upload",
        files={"file": ("roster.csv", content, "text/csv")},
        headers=auth_header(admin),
    )

    assert response.json() == {"count": 1, "processed": 1}


def test_upload_rejects_non_csv_and_unreadable_files(client, admin, auth_header):
    wrong_type = client.post(
        "/api/admin/upload",
        files={"file": ("roster.xlsx", b"binary", "application/octet-stream")},
        headers=auth_header(admin),
    )
    assert wrong_type.status_code == 422

    empty = client.post(
        "/api/admin/upload",
        files={"file": ("empty.csv", b"", "text/csv")},
        headers=auth_header(admin),
    )
    assert empty.status_code == 422
    assert empty.json()["detail"]["uploadId"].startswith("upl_")


def test_teachers_cannot_upload(client, teacher, auth_header):
    response = client.post(
        "/api/admin/upload",
        files={"file": ("roster.csv", HEADER, "text/csv")},
        headers=auth_header(teacher),
    )
    assert response.status_code == 403


# --- Students ---

def test_student_lifecycle(client, teacher, other_teacher, auth_header):
    headers = auth_header(teacher)

    created = client.post(
        "/api/students",
        json={"name": "Maya Patel", "age": 9, "class": "4B", "selScores": {"empathy": 3}},
        headers=headers,
    )
    assert created.status_code == 201
    student = created.json()
    assert student["class"] == "4B"
    student_id = student["id"]

    reflection = client.post(f"/api/students/{student_id}/reflection", json={"note": "Led the group"}, headers=headers)
    assert reflection.status_code == 200
    assert reflection.json()["reflections"][0]["note"] == "Led the group"

    score = client.post(f"/api/students/{student_id}/literacy-scores", json={"score": 88}, headers=headers)
    assert score.json()["literacyScores"][0]["score"] == 88

    sel = client.put(f"/api/students/{student_id}/sel-scores", json={"cooperation": 5}, headers=headers)
    assert sel.json()["selScores"] == {"empathy": 3, "regulation": None, "cooperation": 5}

    roster = client.get("/api/students", headers=headers).json()
    assert [s["name"] for s in roster] == ["Maya Patel"]
    assert roster[0]["literacyAverage"] == 88
    assert roster[0]["needsAttention"] is False

    # Another teacher cannot see the student.
    assert client.get(f"/api/students/{student_id}", headers=auth_header(other_teacher)).status_code == 404


def test_student_validation_errors(client, teacher, auth_header):
    headers = auth_header(teacher)
    assert client.post("/api/students", json={"name": "Kid", "age": 30}, headers=headers).status_code == 422

    created = client.post("/api/students", json={"name": "Kid"}, headers=headers).json()
    empty_update = client.put(f"/api/students/{created['id']}/sel-scores", json={}, headers=headers)
    assert empty_update.status_code == 400


def test_unknown_student_is_404(client, teacher, auth_header):
    response = client.post("/api/students/stu_missing/reflection", json={"note": "x"}, headers=auth_header(teacher))
    assert response.status_code == 404


# --- Suggestions ---

def test_suggest_returns_gateway_text(client, teacher, auth_header, gateway):
    payload = {
        "name": "Maya",
        "literacyScores": [{"score": 62, "date": "2025-02-01T10:00:00Z"}],
        "selScores": {"empathy": 4},
    }

    response = client.post("/api/suggestions/suggest", json=payload, headers=auth_header(teacher))

    assert response.status_code == 200
    assert response.json() == {"suggestion": "1. Pair Maya with a reading buddy."}
    assert "student named Maya." in gateway.generate_text.await_args.args[0]


def test_suggest_requires_dated_entries(client, teacher, auth_header):
    payload = {"name": "Maya", "literacyScores": [{"score": 62}]}
    response = client.post("/api/suggestions/suggest", json=payload, headers=auth_header(teacher))
    assert response.status_code == 422


def test_suggest_maps_gateway_errors_to_status_codes(client, teacher, auth_header, gateway):
    gateway.generate_text.side_effect = SuggestionQuotaError()

    response = client.post("/api/suggestions/suggest", json={"name": "Maya"}, headers=auth_header(teacher))

    assert response.status_code == 429


def test_suggestion_for_stored_student(client, teacher, auth_header, gateway):
    headers = auth_header(teacher)
    created = client.post("/api/students", json={"name": "Leo"}, headers=headers).json()

    response = client.post(f"/api/students/{created['id']}/suggestion", headers=headers)

    assert response.status_code == 200
    assert "student named Leo." in gateway.generate_text.await_args.args[0]


def test_status_endpoint(client, gateway):
    assert client.get("/api/suggestions/status").status_code == 200

    gateway.check_status.return_value = GatewayStatus(available=False, message="Gemini API key not configured")
    response = client.get("/api/suggestions/status")
    assert response.status_code == 503
    assert response.json()["available"] is False


# --- Dashboard ---

def test_dashboard_summary_endpoint(client, teacher, auth_header):
    headers = auth_header(teacher)
    client.post("/api/students", json={"name": "Ana", "class": "2C"}, headers=headers)

    response = client.get("/api/dashboard/summary", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["totalStudents"] == 1
    assert body["averageLiteracy"] is None
    assert body["classDistribution"] == {"2C": 1}
    assert body["studentsNeedingAttention"][0]["name"] == "Ana"
