"""
Test fixtures: a fresh SQLite file per test, the app's get_db overridden to use it,
and an admin logged in through the real login endpoint.
"""
import os

# Must be set before visitdesk.config is imported
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///./visitdesk-test.db")
os.environ.setdefault("AUTO_CHECKOUT_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from visitdesk.database import Base, get_db
from visitdesk.main import app
from visitdesk.models.admin import Admin
from visitdesk.schemas.visitor import CheckInRequest
from visitdesk.services.auth import get_password_hash

ADMIN_USERNAME = "frontdesk"
ADMIN_PASSWORD = "S3cure-pass!"


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'visitdesk.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin(db):
    row = Admin(username=ADMIN_USERNAME, hashed_password=get_password_hash(ADMIN_PASSWORD))
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@pytest.fixture
def admin_client(client, admin):
    r = client.post("/api/admin/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert r.status_code == 200, r.text
    return client


def check_in_payload(**overrides) -> dict:
    data = {
        "fullName": "Jean Mukendi",
        "yearOfBirth": 1985,
        "phoneNumber": "0812345678",
        "purpose": "Meeting",
        "sex": "Male",
        "municipality": "Gombe",
    }
    data.update(overrides)
    return data


def check_in_form(**overrides) -> CheckInRequest:
    return CheckInRequest(**check_in_payload(**overrides))
