"""Shared pytest fixtures for Content Hub API tests."""
import os
from datetime import date, timedelta
from typing import Any, Dict

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DEBUG", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from contenthub.database import Base, enable_sqlite_foreign_keys
from contenthub.dependencies import get_db, get_storage
from contenthub.main import app
from contenthub.services.storage import StorageError


class FakeStorage:
    """In-memory stand-in for S3Service"""

    bucket = "test-bucket"

    def __init__(self):
        self.objects: Dict[str, bytes] = {}
        self.content_types: Dict[str, str] = {}
        self.deleted = []
        self.fail_put_for = set()  # file names whose upload should fail
        self.fail_get_for = set()
        self.fail_delete = False

    def put(self, s3_key, body, content_type=None):
        if any(s3_key.endswith(f"-{name}") for name in self.fail_put_for):
            raise StorageError(f"Failed to upload {s3_key}: simulated outage")
        self.objects[s3_key] = body
        self.content_types[s3_key] = content_type
        return f"https://{self.bucket}.s3.us-east-1.amazonaws.com/{s3_key}"

    def get(self, s3_key):
        if any(s3_key.endswith(f"-{name}") for name in self.fail_get_for) or s3_key not in self.objects:
            raise StorageError(f"Failed to download {s3_key}")
        return self.objects[s3_key]

    def delete(self, s3_key):
        if self.fail_delete:
            raise StorageError(f"Failed to delete {s3_key}: simulated outage")
        self.objects.pop(s3_key, None)
        self.deleted.append(s3_key)

    def generate_download_presigned_url(self, s3_key, expires_in=None):
        return f"https://signed.example/{s3_key}?expires={expires_in or 3600}"


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    """Direct database access for arranging and inspecting rows."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def client(session_factory, storage):
    """API client wired to the test database and fake storage."""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


def project_payload(**overrides) -> Dict[str, Any]:
    payload = {
        "client": "Acme Co",
        "title": "Spring Launch Reel",
        "type": "video",
        "subtype": "Instagram Reel",
        "priority": "high",
        "due_date": (date.today() + timedelta(days=7)).isoformat(),
        "description": "30 second teaser for the spring collection",
        "platforms": ["Instagram", "TikTok"],
        "tags": ["launch"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_project(client):
    """Create a project through the API and return its JSON."""
    def _make(**overrides):
        response = client.post("/api/v1/projects", json=project_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def upload(client):
    """Upload files to a project: upload(project_id, ("a.pdf", b"..."), ...)"""
    def _upload(project_id, *files, uploaded_by=None):
        data = {"uploaded_by": uploaded_by} if uploaded_by else {}
        return client.post(
            f"/api/v1/files/project/{project_id}",
            files=[("files", (name, body, "application/octet-stream")) for name, body in files],
            data=data,
        )
    return _upload
