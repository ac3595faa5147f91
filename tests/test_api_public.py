"""Tests page visiteur /t/{id}, dashboard, analytics, outils page-builder, login."""
import json

import pytest

from conftest import content, hero


def _assigned_tag(client, make_page, make_tag, components=None):
    page = make_page(components=components if components is not None else [hero()])
    tag = make_tag()
    client.post("/api/nfc-tags/assign", json={"tag_id": tag["id"], "page_id": page["id"]})
    return tag, page


# ── /t/{tag_id} ───────────────────────────────────────────────────────────────

class TestPublicPage:
    def test_assigned_tag_renders_page(self, client, make_page, make_tag):
        tag, _ = _assigned_tag(client, make_page, make_tag)
        r = client.get(f"/t/{tag['id']}", headers={"X-Admin-Token": ""})
        assert r.status_code == 200
        assert "text/html" in r.headers["content-type"]
        assert "Welcome" in r.text
        assert "<title>Lobby - NFC Content</title>" in r.text

    def test_resolve_by_uid(self, client, make_page):
        page = make_page(components=[hero()])
        reg = client.post("/api/nfc-tags/register", json={"tag_uid": "04ABCD"}).json()
        client.post("/api/nfc-tags/assign", json={"tag_id": reg["tag"]["id"], "page_id": page["id"]})
        r = client.get("/t/04ABCD")
        assert r.status_code == 200
        assert "Welcome" in r.text

    def test_unassigned_tag(self, client, make_tag):
        tag = make_tag(name="Table 4")
        r = client.get(f"/t/{tag['id']}")
        assert r.status_code == 200
        assert "Content Not Assigned" in r.text
        assert "Table 4" in r.text

    def test_empty_document_renders_empty_page(self, client, make_page, make_tag):
        tag, _ = _assigned_tag(client, make_page, make_tag, components=[])
        r = client.get(f"/t/{tag['id']}")
        assert r.status_code == 200
        assert "Content Not Assigned" not in r.text
        assert "<title>Lobby - NFC Content</title>" in r.text

    def test_unknown_tag_404(self, client):
        r = client.get("/t/12345")
        assert r.status_code == 404
        assert "text/html" in r.headers["content-type"]

    @pytest.mark.parametrize("identifier", ["²", "٣", "Ⅻ", "tag-é"])
    def test_non_ascii_identifier_404(self, client, identifier):
        r = client.get(f"/t/{identifier}")
        assert r.status_code == 404
        assert "Tag Not Found" in r.text

    def test_non_ascii_uid_resolves(self, client, make_page):
        page = make_page(components=[hero()])
        reg = client.post("/api/nfc-tags/register", json={"tag_uid": "²3"}).json()
        client.post("/api/nfc-tags/assign", json={"tag_id": reg["tag"]["id"], "page_id": page["id"]})
        assert "Welcome" in client.get("/t/²3").text

    def test_unknown_block_isolated(self, client, make_page, make_tag):
        comps = [hero(), {"type": "Carousel", "slides": []}, {"type": "Spacer", "height": 4}]
        tag, _ = _assigned_tag(client, make_page, make_tag, components=comps)
        r = client.get(f"/t/{tag['id']}")
        assert r.status_code == 200
        assert "Welcome" in r.text
        assert "block-error" in r.text
        assert "height:1rem" in r.text

    def test_tap_recorded_only_when_resolved(self, client, make_page, make_tag):
        tag, _ = _assigned_tag(client, make_page, make_tag)
        spare = make_tag(name="Spare")
        client.get(f"/t/{tag['id']}")
        client.get(f"/t/{tag['id']}")
        client.get(f"/t/{spare['id']}")

        summary = client.get("/api/analytics/summary").json()
        assert summary["total_taps"] == 2
        assert summary["tags"][0]["id"] == tag["id"]
        assert summary["tags"][0]["tap_count"] == 2
        assert summary["tags"][0]["assigned_page"]["name"] == "Lobby"
        assert summary["tags"][1]["tap_count"] == 0


# ── Dashboard ─────────────────────────────────────────────────────────────────

def test_dashboard_counts(client, make_page, make_tag):
    page = make_page(slug="live")
    make_page(slug="draft")
    tag = make_tag()
    make_tag(name="Spare")
    client.post("/api/nfc-tags/register", json={"tag_uid": "BEEF"})
    client.post("/api/nfc-tags/assign", json={"tag_id": tag["id"], "page_id": page["id"]})

    counts = client.get("/api/dashboard").json()
    assert counts["page"] == {"total": 2, "live": 1, "draft": 1, "published": 0}
    assert counts["tag"] == {
        "total": 3, "registered": 1, "unregistered": 2, "assigned": 1, "unassigned": 2,
    }


# ── Page builder ──────────────────────────────────────────────────────────────

class TestPageBuilderTools:
    def test_catalog(self, client):
        blocks = client.get("/api/page-builder/catalog").json()["blocks"]
        assert {b["type"] for b in blocks} == {"HeroSection", "TextBlock", "Spacer"}

    def test_validate_ok(self, client):
        r = client.post("/api/page-builder/validate", json={"content": content(hero())})
        assert r.json() == {"valid": True, "count": 1}

    def test_validate_malformed(self, client):
        r = client.post("/api/page-builder/validate", json={"content": "{oops"})
        assert r.json()["valid"] is False
        assert r.json()["error"]["kind"] == "MALFORMED"

    def test_validate_unknown_type(self, client):
        r = client.post("/api/page-builder/validate", json={"content": content({"type": "Carousel"})})
        assert r.json()["error"]["kind"] == "UNKNOWN_TYPE"

    def test_preview(self, client):
        r = client.post("/api/page-builder/preview", json={"title": "Draft", "content": content(hero())})
        assert r.status_code == 200
        assert "Welcome" in r.text
        assert "<title>Draft - NFC Content</title>" in r.text

    def test_preview_sanitizes_text_blocks(self, client):
        dirty = content({"type": "TextBlock", "content": "<p>hi<img src=x onerror=alert(1)></p><script>x()</script>"})
        r = client.post("/api/page-builder/preview", json={"content": dirty})
        assert r.status_code == 200
        assert "onerror" not in r.text
        assert "<script>x()" not in r.text
        assert "<p>hi</p>" in r.text

    def test_preview_invalid_422(self, client):
        r = client.post("/api/page-builder/preview", json={"content": json.dumps({"components": 1})})
        assert r.status_code == 422


# ── Auth ──────────────────────────────────────────────────────────────────────

class TestAuth:
    def test_missing_token_403(self, client):
        r = client.get("/api/dashboard", headers={"X-Admin-Token": ""})
        assert r.status_code == 403

    def test_browser_redirected_to_login(self, client):
        r = client.get(
            "/api/dashboard",
            headers={"X-Admin-Token": "", "Accept": "text/html"},
            follow_redirects=False,
        )
        assert r.status_code == 303
        assert r.headers["location"] == "/admin/login"

    def test_query_token(self, client):
        r = client.get("/api/dashboard?token=test-token", headers={"X-Admin-Token": ""})
        assert r.status_code == 200

    def test_login_sets_cookie(self, client):
        r = client.post("/admin/login", data={"password": "secret"}, follow_redirects=False)
        assert r.status_code == 303
        assert r.headers["location"] == "/api/dashboard"
        assert "session_token=test-token" in r.headers["set-cookie"]

    def test_login_wrong_password(self, client):
        r = client.post("/admin/login", data={"password": "nope"}, follow_redirects=False)
        assert r.status_code == 303
        assert "error=1" in r.headers["location"]

    def test_health_is_public(self, client):
        assert client.get("/health", headers={"X-Admin-Token": ""}).json()["status"] == "ok"
