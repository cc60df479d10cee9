"""Shared fixtures: a seeded in-memory store, a recording mailer and an API client."""

import json

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.dependencies import get_mailer, get_storage
from app.db.seed import SAMPLE_PASSWORD, seed_storage
from app.main import app
from app.services.email_service import EmailService
from app.storage import MemoryStorage, SqlStorage


# =============================================================================
# Doubles
# =============================================================================


class RecordingMailer(EmailService):
    """EmailService that keeps outgoing mail instead of talking to SMTP."""

    def __init__(self):
        super().__init__(settings)
        self.sent = []

    def send_email(self, recipient, subject, body, html_body=None):
        self.sent.append({"to": recipient, "subject": subject, "body": body})

    def subjects_for(self, address):
        return [m["subject"] for m in self.sent if m["to"] == address]


# =============================================================================
# Storage
# =============================================================================


@pytest.fixture
def storage() -> MemoryStorage:
    """In-memory store with the sample police stations and lawyers."""
    store = MemoryStorage()
    seed_storage(store)
    return store


@pytest.fixture
def sql_storage() -> SqlStorage:
    """SqlStorage on a private in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    session_factory = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    store = SqlStorage(session_factory, engine)
    store.init_schema()
    yield store
    engine.dispose()


@pytest.fixture
def station_ids(storage):
    """Station code -> id for the seeded stations."""
    return {s.code: s.id for s in storage.list_police_stations()}


# =============================================================================
# API client
# =============================================================================


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def client(storage, mailer, upload_dir):
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_mailer] = lambda: mailer
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def login(client, email: str, password: str = SAMPLE_PASSWORD) -> dict:
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    return {"user": body["user"], "headers": auth_headers(body["token"])}


@pytest.fixture
def register(client):
    """Register a user and log them in; returns {"user": ..., "headers": ...}."""

    def _register(role: str, email: str, name: str = None, **extra) -> dict:
        payload = {
            "name": name or email.split("@")[0].title(),
            "email": email,
            "password": "secret123",
            "phone": "9876500000",
            "role": role,
            **extra,
        }
        resp = client.post("/api/auth/register", json=payload)
        assert resp.status_code == 201, resp.text
        return login(client, email, "secret123")

    return _register


@pytest.fixture
def client_user(register):
    return register("client", "asha.verma@legalcase.io", name="Asha Verma", city="delhi")


@pytest.fixture
def other_client(register):
    return register("client", "rohan.das@legalcase.io", name="Rohan Das", city="mumbai")


@pytest.fixture
def police_user(register):
    return register("police", "inspector.rao@legalcase.io", name="Inspector Rao", city="delhi")


@pytest.fixture
def lawyer_user(client):
    """Seeded lawyer practising in Delhi."""
    return login(client, "sarah.johnson@lawfirm.com")


@pytest.fixture
def other_lawyer(client):
    return login(client, "michael.chen@lawfirm.com")


def case_form(station_id: str, lawyer_id: str = None, **overrides) -> dict:
    """Multipart form fields for POST /api/cases."""
    form = {
        "title": "Stolen laptop",
        "description": "Laptop taken from a parked car in Connaught Place",
        "case_type": "theft",
        "victim": json.dumps({"name": "Asha Verma", "phone": "9876500000", "email": "asha.verma@legalcase.io"}),
        "accused": json.dumps({"name": "Unknown person"}),
        "police_station_id": station_id,
        "city": "delhi",
    }
    if lawyer_id:
        form["lawyer_id"] = lawyer_id
    form.update(overrides)
    return form


@pytest.fixture
def filed_case(client, client_user, lawyer_user, station_ids):
    """A submitted case in Delhi with the seeded Delhi lawyer assigned."""
    resp = client.post(
        "/api/cases",
        data=case_form(station_ids["DEL-001"], lawyer_user["user"]["id"]),
        headers=client_user["headers"],
    )
    assert resp.status_code == 201, resp.text
    return resp.json()
