"""Pytest configuration and fixtures for the cargo ledger API.

Every test gets a fresh in-memory SQLite database; the app's get_db
dependency is overridden to hand out sessions bound to it.
"""

import os

# Settings are read at import time, so the environment goes first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db, enable_sqlite_foreign_keys
from main import app


# ── Database ─────────────────────────────────────────────────────

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory) -> Generator[TestClient, None, None]:
    """Test client with the database dependency pointed at the test engine."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ── Auth helpers ─────────────────────────────────────────────────

def register(client: TestClient, email: str, role: str = "user", password: str = "secret123") -> dict:
    resp = client.post("/api/auth/register", json={"email": email, "password": password, "role": role})
    assert resp.status_code == 201, resp.text
    return resp.json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client) -> dict:
    return bearer(register(client, "admin@cargo.kz", role="admin")["token"])


@pytest.fixture
def staff_headers(client) -> dict:
    return bearer(register(client, "staff@cargo.kz", role="user")["token"])


# ── Data helpers ─────────────────────────────────────────────────

@pytest.fixture
def make_client(client, staff_headers):
    def _make(code: str = "C001", name: str = "Aigerim", phone: str = "+77011234567", **extra) -> dict:
        body = {"clientCode": code, "name": name, "phone": phone, **extra}
        resp = client.post("/api/clients", json=body, headers=staff_headers)
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make


@pytest.fixture
def make_item(client, staff_headers):
    def _make(client_id: int, arrival_date: str = "2024-01-15", product_code: str = "SKU-1", **fields) -> dict:
        body = {"clientId": client_id, "productCode": product_code, "arrivalDate": arrival_date, **fields}
        resp = client.post("/api/items", json=body, headers=staff_headers)
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make
