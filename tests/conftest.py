"""Shared fixtures: settings, application and HTTP client for both storage backends."""

import pytest
from fastapi.testclient import TestClient

from inventory_api.config import Settings
from inventory_api.main import create_app


@pytest.fixture
def photo_dir(tmp_path):
    return tmp_path / "photos"


@pytest.fixture(params=["memory", "database"])
def settings(request, tmp_path, photo_dir):
    """Settings for each backend; the database backend runs on SQLite."""
    return Settings(
        host="testserver",
        port=8080,
        photo_dir=str(photo_dir),
        storage_backend=request.param,
        database_url=f"sqlite:///{tmp_path / 'inventory.db'}",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def jpeg_bytes():
    return b"\xff\xd8\xff\xe0" + b"fake-jpeg-payload" * 8 + b"\xff\xd9"


@pytest.fixture
def register(client):
    """Register an item and return its id (items are numbered in creation order)."""
    def _register(name="Widget", description=None, photo=None):
        data = {"inventory_name": name}
        if description is not None:
            data["description"] = description
        files = {"photo": photo} if photo is not None else None
        resp = client.post("/register", data=data, files=files)
        assert resp.status_code == 201
        return max(item["id"] for item in client.get("/inventory").json())
    return _register
