from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from smartspend.core.config import settings
from smartspend.main import app
from smartspend.routers.expenses import get_gemini_service


@pytest.fixture
def gemini():
    service = Mock()
    app.dependency_overrides[get_gemini_service] = lambda: service
    yield service
    app.dependency_overrides.pop(get_gemini_service, None)


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "GUEST_STORAGE_DIR", str(tmp_path))
    return TestClient(app)


@pytest.fixture
def guest_headers(client):
    token = client.post("/api/auth/guest").json()["access_token"]
    return {"Authorization": f"Bearer {token}"}
