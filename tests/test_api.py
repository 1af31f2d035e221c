"""
HTTP-level tests for the compaction API.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from html_compactor.api import routes
from html_compactor.main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


class TestCompactEndpoint:
    def test_compact_with_method(self, client):
        resp = client.post(
            "/api/v1/compact",
            json={"html": "<div>\n  <p>hi</p>\n</div>", "method": "regex-minify"},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["html"] == "<div><p>hi</p></div>"
        assert body["method"] == "regex-minify"
        assert body["compacted_size"] == len(body["html"])
        assert body["estimated_tokens"] == 5
        assert body["original_tokens"] == 6
        assert body["warnings"] == []

    def test_defaults_to_recommended_method(self, client):
        resp = client.post("/api/v1/compact", json={"html": "<p>small</p>"})
        assert resp.status_code == 200
        assert resp.json()["method"] == "none"

    def test_unknown_method_is_a_warning(self, client):
        resp = client.post("/api/v1/compact", json={"html": "<p>x</p>", "method": "magic"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["html"] == "<p>x</p>"
        assert body["method"] == "magic"
        assert body["warnings"] == ["Unknown method: magic, using none"]

    def test_negative_max_size_rejected(self, client):
        resp = client.post(
            "/api/v1/compact",
            json={"html": "<p>x</p>", "method": "regex-minify", "max_size": -1},
        )
        assert resp.status_code == 422


class TestCompactUrlEndpoint:
    def test_fetches_then_compacts(self, client, monkeypatch):
        async def fake_fetch(url):
            assert url == "https://example.com/page"
            return '<html><body><img src="data:image/png;base64,AAAA"></body></html>'

        monkeypatch.setattr(routes, "fetch_page", fake_fetch)
        resp = client.post(
            "/api/v1/compact/url",
            json={"url": "https://example.com/page", "method": "regex-strip-base64"},
        )
        assert resp.status_code == 200
        assert 'src="[IMG_1]"' in resp.json()["html"]

    def test_fetch_failure_is_bad_gateway(self, client, monkeypatch):
        async def failing_fetch(url):
            raise httpx.ConnectError("connection refused")

        monkeypatch.setattr(routes, "fetch_page", failing_fetch)
        resp = client.post("/api/v1/compact/url", json={"url": "https://example.com"})
        assert resp.status_code == 502

    def test_rejects_non_http_url(self, client):
        resp = client.post("/api/v1/compact/url", json={"url": "ftp://example.com"})
        assert resp.status_code == 422


class TestAdvisoryEndpoints:
    def test_methods(self, client):
        resp = client.get("/api/v1/methods")
        assert resp.status_code == 200
        values = [m["value"] for m in resp.json()]
        assert len(values) == 12
        assert "combined-optimal" in values

    def test_recommend(self, client):
        resp = client.get("/api/v1/recommend", params={"size": 40_000})
        assert resp.status_code == 200
        assert resp.json() == {"size": 40_000, "method": "regex-minify"}

    def test_recommend_rejects_negative(self, client):
        assert client.get("/api/v1/recommend", params={"size": -1}).status_code == 422

    def test_tokens(self, client):
        resp = client.post("/api/v1/tokens", json={"html": "abcdefgh"})
        assert resp.json() == {"characters": 8, "tokens": 2}
