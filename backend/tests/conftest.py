"""Shared pytest fixtures for all tests."""

import pytest
from fastapi.testclient import TestClient

from filenest.core.config import settings
from filenest.main import app

TEST_USERNAME = "admin"
TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture
def app_settings(tmp_path, monkeypatch):
    """
    Point every storage location at a temporary directory and install a known
    credential pair.

    Returns:
        The patched settings object
    """
    monkeypatch.setattr(settings, "SECRET_KEY", "test-secret-key-with-enough-length")
    monkeypatch.setattr(settings, "ADMIN_USERNAME", TEST_USERNAME)
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", TEST_PASSWORD)
    monkeypatch.setattr(settings, "UPLOADS_DIR", str(tmp_path / "uploads"))
    monkeypatch.setattr(settings, "NOTES_DIR", str(tmp_path / "notes"))
    monkeypatch.setattr(settings, "SHARE_LINKS_FILE", str(tmp_path / "share-links.json"))
    monkeypatch.setattr(settings, "STATIC_DIR", str(tmp_path / "no-static"))
    monkeypatch.setattr(settings, "PUBLIC_BASE_URL", "")
    return settings


@pytest.fixture
def client(app_settings):
    """Create FastAPI test client with the lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    response = client.post('/api/login', json={
        'username': TEST_USERNAME,
        'password': TEST_PASSWORD,
    })
    assert response.status_code == 200
    return {'Authorization': f"Bearer {response.json()['token']}"}


@pytest.fixture
def upload(client, auth_headers):
    """
    Upload helper returning the stored filename.

    Usage: upload('report.txt', b'hello')
    """
    def _upload(filename, content, content_type='application/octet-stream'):
        response = client.post(
            '/api/upload',
            files={'file': (filename, content, content_type)},
            headers=auth_headers,
        )
        assert response.status_code == 200, response.text
        return response.json()['file']['name']
    return _upload
