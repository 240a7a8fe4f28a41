# tests/conftest.py
"""
Shared fixtures: an in-memory SQLite database, a FastAPI TestClient wired to
it, and bearer tokens minted with the same secret the API verifies against.
"""
import os

# Settings are read at import time, so the environment has to be ready first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["JWT_AUDIENCE"] = "authenticated"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from student_clinic.database import Base, get_db
from student_clinic.main import app
from student_clinic.schemas.medicine import MedicineCreate
from student_clinic.schemas.student import StudentCreate
from student_clinic.services import medicine as medicine_service
from student_clinic.services import students as student_service
from student_clinic.utils.auth import create_access_token
from tests import student_payload

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers():
    token = create_access_token("staff-1", email="nurse@school.test", name="Nurse Ratna", role="staff")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_student(db):
    def _make(**overrides):
        return student_service.register_student(db, StudentCreate(**student_payload(**overrides)))
    return _make


@pytest.fixture()
def make_medicine(db):
    def _make(**overrides):
        values = {"name": "Paracetamol", "category": "Analgesic", "stock": 10, "minimum_stock": 5}
        values.update(overrides)
        return medicine_service.add_medicine(db, MedicineCreate(**values))
    return _make
