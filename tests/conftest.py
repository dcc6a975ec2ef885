# tests/conftest.py
"""Shared fixtures: in-memory SQLite database, API client, captured outbound mail."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ["API_KEY"] = ""
os.environ["EMAIL_USER"] = ""
os.environ["EMAIL_PASS"] = ""

import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ivisitor.database import create_tables, get_db
from ivisitor.main import app


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def outbox():
    """Replaces the SMTP sender; each call is recorded as (to, subject, html, text)."""
    with patch("ivisitor.services.notification_service.send_email", return_value=True) as mock_send:
        yield mock_send


@pytest.fixture
def client(session_factory, outbox):
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
def visitor_payload():
    return {
        "visitorName": "Jane Doe",
        "visitorEmail": "jane@example.com",
        "residentName": "Sam Resident",
        "residentEmail": "sam@example.com",
        "visitReason": "Dinner",
        "carNumber": "KA-01-1234",
    }
