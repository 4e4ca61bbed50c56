from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from heartlink import create_app


@pytest.fixture()
def make_app(tmp_path: Path):
    def _make(**overrides):
        settings = {"TESTING": True, "UPLOADS_DIR": tmp_path / "uploads"}
        settings.update(overrides)
        return create_app(settings)
    return _make


@pytest.fixture()
def app(make_app):
    return make_app()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def login(client):
    """Register (if needed) and log in, returning the Authorization headers."""
    def _login(email: str = "a@x.com", password: str = "secret1") -> dict[str, str]:
        client.post("/api/register", json={"email": email, "password": password})
        response = client.post("/api/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.get_json()
        return {"Authorization": response.get_json()["sessionId"]}
    return _login
