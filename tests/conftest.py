"""
Shared fixtures.

Every test gets its own application built by ``create_app`` with an
isolated store and a temporary upload directory, so nothing leaks
between tests.
"""

import os
import tempfile

# Settings read the environment at import time; keep the import-time
# default app away from the working directory.
os.environ.setdefault("UPLOAD_DIR", os.path.join(tempfile.gettempdir(), "content-dashboard-test-uploads"))
os.environ.setdefault("STORE_BACKEND", "memory")

import pytest
from fastapi.testclient import TestClient

from content_dashboard_api.app.core.config import Settings
from content_dashboard_api.app.main import create_app
from content_dashboard_api.app.services.entity_store import InMemoryEntityStore
from content_dashboard_api.app.services.file_storage import LocalFileStorage
from content_dashboard_api.app.services.sqlite_store import SqliteEntityStore


@pytest.fixture
def memory_store():
    return InMemoryEntityStore()


@pytest.fixture
def sqlite_store(tmp_path):
    return SqliteEntityStore(str(tmp_path / "content.db"))


@pytest.fixture(params=["memory", "sqlite"])
def any_store(request, tmp_path):
    """Each test using this fixture runs once per store backend."""
    if request.param == "memory":
        return InMemoryEntityStore()
    return SqliteEntityStore(str(tmp_path / "content.db"))


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def file_storage(upload_dir):
    return LocalFileStorage(str(upload_dir), "http://testserver", max_bytes=1024)


@pytest.fixture
def settings(upload_dir):
    return Settings(upload_dir=str(upload_dir), public_base_url="http://testserver")


@pytest.fixture
def app(settings, any_store, file_storage):
    return create_app(settings, store=any_store, file_storage=file_storage)


@pytest.fixture
def store(app):
    return app.state.store


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def blog_payload():
    return {"title": "Hello", "content": "World", "status": "draft"}


@pytest.fixture
def project_payload():
    return {
        "title": "Portfolio",
        "content": "Built with FastAPI",
        "projectLink": "https://example.com",
        "githubLink": "https://github.com/example/portfolio",
        "coverImageUrl": "https://example.com/cover.png",
    }
