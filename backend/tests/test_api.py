from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.exc import IntegrityError

from student_clinic.config import settings
from student_clinic.main import app
from student_clinic.services import kv_store
from student_clinic.utils.auth import create_access_token
from student_clinic.utils.deps import get_current_user
from tests import student_payload


def _create_student(client, auth_headers, **overrides):
    response = client.post("/students", json=student_payload(**overrides), headers=auth_headers)
    assert response.status_code == 200, response.text
    return response.json()["student"]


def _create_medicine(client, auth_headers, **overrides):
    body = {"name": "Paracetamol", "stock": 10, "minimum_stock": 5, "unit": "tablets"}
    body.update(overrides)
    response = client.post("/medicine", json=body, headers=auth_headers)
    assert response.status_code == 200, response.text
    return response.json()["medicine"]


class TestAuth:
    def test_health_is_public(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_missing_token(self, client):
        response = client.get("/students")
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_bad_and_expired_tokens(self, client):
        expired = create_access_token("staff-1", expires_delta=timedelta(minutes=-5))
        for token in ("not-a-jwt", expired):
            response = client.get("/students", headers={"Authorization": f"Bearer {token}"})
            assert response.status_code == 401

    def test_profile_is_cached_on_first_request(self, client, auth_headers):
        response = client.get("/auth/me", headers=auth_headers)

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["id"] == "staff-1"
        assert user["email"] == "nurse@school.test"
        assert user["role"] == "staff"
        assert user["created_at"]


class TestStudentsApi:
    def test_register_and_fetch(self, client, auth_headers):
        student = _create_student(client, auth_headers, institution_id="S-9")
        assert student["record_number"] == "S-9 -- 1"

        response = client.get(f"/students/{student['id']}", headers=auth_headers)
        body = response.json()
        assert body["success"] is True
        assert body["student"]["full_name"] == "Budi Santoso"

        listing = client.get("/students", params={"search": "budi"}, headers=auth_headers).json()
        assert [s["id"] for s in listing["students"]] == [student["id"]]

    def test_unknown_student(self, client, auth_headers):
        response = client.get("/students/missing", headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Student not found"}

    def test_invalid_body_is_400(self, client, auth_headers):
        response = client.post("/students", json={"full_name": "Budi"}, headers=auth_headers)
        assert response.status_code == 400
        assert "error" in response.json()

    def test_update(self, client, auth_headers):
        student = _create_student(client, auth_headers)
        response = client.put(f"/students/{student['id']}", json={"grade": "9A"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["student"]["grade"] == "9A"


class TestVisitsAndLeaveApi:
    def test_record_visit_and_print_letter(self, client, auth_headers):
        student = _create_student(client, auth_headers)
        response = client.post("/medical-records", json={
            "student_id": student["id"],
            "visit_date": "2025-03-05",
            "diagnosis": "Flu",
            "symptoms": "Fever",
            "treatment": "Rest",
            "needs_permission_letter": True,
        }, headers=auth_headers)
        assert response.status_code == 200
        record = response.json()["record"]
        assert record["created_by"] == "staff-1"
        assert record["student_name"] == "Budi Santoso"

        history = client.get(f"/medical-records/student/{student['id']}", headers=auth_headers).json()
        assert [r["id"] for r in history["records"]] == [record["id"]]

        letter = client.get(f"/medical-records/{record['id']}/permission-letter", headers=auth_headers)
        assert letter.status_code == 200
        assert letter.headers["content-type"].startswith("text/html")
        assert "Budi Santoso" in letter.text

    def test_sick_leave_lifecycle(self, client, auth_headers):
        student = _create_student(client, auth_headers)
        created = client.post("/sick-leave", json={
            "student_id": student["id"],
            "start_date": "2025-01-01",
            "end_date": "2025-01-03",
            "reason": "Fever",
        }, headers=auth_headers).json()["leave"]
        assert created["status"] == "pending"
        assert created["duration_days"] == 3

        approved = client.put(f"/sick-leave/{created['id']}", json={"status": "Completed"},
                              headers=auth_headers)
        assert approved.json()["leave"]["status"] == "approved"

        again = client.put(f"/sick-leave/{created['id']}", json={"status": "rejected"},
                           headers=auth_headers)
        assert again.status_code == 409
        assert again.json() == {"error": "Sick leave is already approved"}

        pending = client.get("/sick-leave", params={"status": "pending"}, headers=auth_headers).json()
        assert pending["leaves"] == []

        certificate = client.get(f"/sick-leave/{created['id']}/certificate", headers=auth_headers)
        assert "Fever" in certificate.text


class TestMedicineApi:
    def test_stock_movements(self, client, auth_headers):
        medicine = _create_medicine(client, auth_headers, stock=3)

        out = client.post("/medicine-transactions", json={
            "medicine_id": medicine["id"], "type": "out", "quantity": 4,
        }, headers=auth_headers)
        assert out.status_code == 400
        assert out.json()["error"].startswith("Insufficient stock")

        stock_in = client.post("/medicine-transactions", json={
            "medicine_id": medicine["id"], "type": "in", "quantity": 7, "notes": "Delivery",
        }, headers=auth_headers)
        body = stock_in.json()
        assert body["new_stock"] == 10
        assert body["transaction"]["medicine_name"] == "Paracetamol"

        ledger = client.get("/medicine-transactions", params={"medicine_id": medicine["id"]},
                            headers=auth_headers).json()
        assert len(ledger["transactions"]) == 1

        fetched = client.get(f"/medicine/{medicine['id']}", headers=auth_headers).json()["medicine"]
        assert fetched["stock"] == 10
        assert fetched["is_low_stock"] is False

    def test_zero_quantity_is_rejected(self, client, auth_headers):
        medicine = _create_medicine(client, auth_headers)
        response = client.post("/medicine-transactions", json={
            "medicine_id": medicine["id"], "type": "in", "quantity": 0,
        }, headers=auth_headers)
        assert response.status_code == 400

    def test_low_stock_filter(self, client, auth_headers):
        _create_medicine(client, auth_headers, name="Amoxicillin", stock=2)
        _create_medicine(client, auth_headers, name="Vitamin C", stock=50)

        low = client.get("/medicine", params={"low_stock": "true"}, headers=auth_headers).json()
        assert [m["name"] for m in low["medicines"]] == ["Amoxicillin"]


class TestReportsApi:
    def test_monthly_statistics(self, client, auth_headers):
        student = _create_student(client, auth_headers)
        for visit_date, diagnosis in (("2025-03-02", "Flu"), ("2025-03-09", "Flu"), ("2025-03-20", "Cold")):
            client.post("/medical-records", json={
                "student_id": student["id"], "visit_date": visit_date, "diagnosis": diagnosis,
                "symptoms": "Fever", "treatment": "Rest",
            }, headers=auth_headers)

        response = client.get("/reports/statistics", params={"month": 3, "year": 2025},
                              headers=auth_headers)
        stats = response.json()["statistics"]
        assert stats["total_visits"] == 3
        assert stats["top_illnesses"] == [{"name": "Flu", "count": 2}, {"name": "Cold", "count": 1}]

    def test_month_out_of_range(self, client, auth_headers):
        response = client.get("/reports/statistics", params={"month": 13}, headers=auth_headers)
        assert response.status_code == 400


class TestProfileCache:
    def test_profile_follows_changed_claims(self, client, auth_headers):
        first = client.get("/auth/me", headers=auth_headers).json()["user"]

        token = create_access_token("staff-1", email="nurse@school.test", name="Dr. Ratna", role="doctor")
        second = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"}).json()["user"]

        assert second["name"] == "Dr. Ratna"
        assert second["role"] == "doctor"
        assert second["created_at"] == first["created_at"]

    def test_concurrent_first_insert_is_tolerated(self, client, auth_headers, monkeypatch):
        def already_inserted(db, key, value):
            raise IntegrityError("INSERT INTO kv_entries", {}, Exception("UNIQUE constraint failed"))

        monkeypatch.setattr(kv_store, "put", already_inserted)

        response = client.get("/students", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True, "students": []}

    def test_non_object_user_metadata_is_ignored(self, client):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "sub": "staff-2",
                "aud": "authenticated",
                "exp": int((now + timedelta(minutes=5)).timestamp()),
                "user_metadata": "x",
            },
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )

        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["user"]["role"] == "student"


class TestUnexpectedErrors:
    def test_fault_before_the_route_body_keeps_error_body(self, client):
        def broken_user():
            raise RuntimeError("identity lookup failed")

        app.dependency_overrides[get_current_user] = broken_user
        lenient = TestClient(app, raise_server_exceptions=False)
        try:
            response = lenient.get("/students", headers={"Authorization": "Bearer anything"})
        finally:
            app.dependency_overrides.pop(get_current_user, None)

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {"error": "Internal server error"}

    def test_negative_stock_is_400(self, client, auth_headers):
        response = client.post("/medicine", json={"name": "Paracetamol", "stock": -1},
                               headers=auth_headers)
        assert response.status_code == 400
        assert "error" in response.json()

    def test_blank_reason_is_400(self, client, auth_headers):
        student = _create_student(client, auth_headers)
        response = client.post("/sick-leave", json={
            "student_id": student["id"],
            "start_date": "2025-01-01",
            "end_date": "2025-01-01",
            "reason": "   ",
        }, headers=auth_headers)
        assert response.status_code == 400
        assert response.json() == {"error": "Reason is required"}
