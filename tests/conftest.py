"""Fixtures partagées — client FastAPI sur une base SQLite temporaire."""
import json
import os

import pytest
from fastapi.testclient import TestClient

ADMIN_TOKEN = "test-token"


@pytest.fixture
def client(tmp_path):
    """Client de test authentifié (header X-Admin-Token) avec DB SQLite temporaire."""
    os.environ["DB_PATH"]         = str(tmp_path / "test.db")
    os.environ["ADMIN_TOKEN"]     = ADMIN_TOKEN
    os.environ["ADMIN_PASSWORD"]  = "secret"
    os.environ["PUBLIC_BASE_URL"] = "https://nfc.example.com"

    from nfc_pages.api.main import app
    from nfc_pages.database import init_db
    init_db()

    with TestClient(app) as c:
        c.headers.update({"X-Admin-Token": ADMIN_TOKEN})
        yield c


def hero(title="Welcome", description="Hello", bg="#FFFFFF") -> dict:
    return {"type": "HeroSection", "title": title, "description": description, "bgColor": bg}


def content(*components) -> str:
    return json.dumps({"components": list(components)})


@pytest.fixture
def make_page(client):
    def _make(name="Lobby", slug="lobby", components=()):
        r = client.post("/api/pages", json={"name": name, "slug": slug, "content": content(*components)})
        assert r.status_code == 201, r.text
        return r.json()
    return _make


@pytest.fixture
def make_tag(client):
    def _make(name="Front door"):
        r = client.post("/api/nfc-tags", json={"name": name})
        assert r.status_code == 201, r.text
        return r.json()
    return _make
