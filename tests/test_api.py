"""Tests for the HTTP surface: public access gate, content and headless endpoints.

The revalidation webhook is replaced with an ``AsyncMock`` so the tests run
without network access.
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from headless_core.main import app, reset_state

client = TestClient(app)

_POST_JSON = "headless_core.services.revalidation._post_json"


@pytest.fixture(autouse=True)
def headless_env(monkeypatch):
    """Fresh storage, cleared rate limits and a configured frontend for every test."""
    monkeypatch.setenv("HEADLESS_SITE_URL", "https://cms.example")
    monkeypatch.setenv("HEADLESS_FRONTEND_URL", "https://app.example/")
    monkeypatch.setenv("PREVIEW_SECRET_TOKEN", "s3cret")
    for name in ("HEADLESS_HOME_URL", "HEADLESS_UPLOADS_URL", "HEADLESS_PLUGINS_URL", "HEADLESS_OPTIONS_PATH"):
        monkeypatch.delenv(name, raising=False)
    reset_state(app)
    app.state.limiter._storage.reset()
    yield


def _create(rest_base: str = "posts", **kwargs):
    payload = {"title": "Hello", "slug": "hello", "status": "publish", "content": "<p>Hi</p>", **kwargs}
    return client.post(f"/wp-json/wp/v2/{rest_base}", json=payload)


# ---------------------------------------------------------------------------
# Public access gate
# ---------------------------------------------------------------------------

class TestPublicAccessGate:
    def test_home_redirects_to_frontend(self):
        resp = client.get("/", follow_redirects=False)
        assert resp.status_code == 302
        assert resp.headers["location"] == "https://app.example/"
        assert resp.headers["x-redirect-by"] == "Headless Core"

    def test_query_string_is_forwarded(self):
        resp = client.get("/blog/post-1/?ref=mail", follow_redirects=False)
        assert resp.status_code == 302
        assert resp.headers["location"] == "https://app.example/blog/post-1/?ref=mail"

    def test_uploads_are_not_redirected(self):
        resp = client.get("/wp-content/uploads/a.png", follow_redirects=False)
        assert resp.status_code == 404

    def test_admin_is_not_redirected(self):
        resp = client.get("/wp-admin/", follow_redirects=False)
        assert resp.status_code == 404

    def test_unconfigured_frontend_is_not_redirected(self, monkeypatch):
        monkeypatch.delenv("HEADLESS_FRONTEND_URL")
        resp = client.get("/", follow_redirects=False)
        assert resp.status_code == 404

    def test_api_docs_are_not_redirected(self):
        resp = client.get("/wp-json/openapi.json", follow_redirects=False)
        assert resp.status_code == 200
        assert resp.json()["info"]["title"] == "Headless Core"

    def test_api_docs_page_is_not_redirected(self):
        resp = client.get("/wp-json/docs", follow_redirects=False)
        assert resp.status_code == 200

    def test_api_health_check_passes_through(self):
        resp = client.get("/wp-json/")
        assert resp.status_code == 200
        assert resp.json() == {"message": "Hello from Headless Core"}


# ---------------------------------------------------------------------------
# Content endpoints
# ---------------------------------------------------------------------------

class TestContentEndpoints:
    def test_published_post_link_points_at_frontend(self):
        created = _create()
        assert created.status_code == 201
        item_id = created.json()["id"]

        resp = client.get(f"/wp-json/wp/v2/posts/{item_id}")
        assert resp.status_code == 200
        assert resp.json()["link"] == "https://app.example/hello/"

    def test_draft_link_is_preview_link(self):
        item_id = _create(status="draft", slug="", title="My Draft").json()["id"]
        link = client.get(f"/wp-json/wp/v2/posts/{item_id}").json()["link"]
        assert link == f"https://app.example/api/preview?name=my-draft&id={item_id}&post_type=post&token=s3cret"

    def test_error_page_link(self):
        item_id = _create("pages", slug="not-found").json()["id"]
        client.put("/wp-json/headless/v1/settings", json={"settings": {"error_404_page": str(item_id)}})

        link = client.get(f"/wp-json/wp/v2/pages/{item_id}").json()["link"]
        assert link == "https://app.example/404"

    def test_content_links_rewritten_on_create(self):
        body = (
            "<a href='https://cms.example/hello'>x</a> "
            "<img src='https://cms.example/wp-content/uploads/a.png'>"
        )
        with patch(_POST_JSON, new=AsyncMock(return_value=200)):
            resp = _create(content=body)
        assert resp.json()["content"] == (
            "<a href='https://app.example/hello'>x</a> "
            "<img src='https://cms.example/wp-content/uploads/a.png'>"
        )

    def test_update_sends_revalidation(self):
        item_id = _create().json()["id"]
        with patch(_POST_JSON, new=AsyncMock(return_value=200)) as post_json:
            resp = client.post(
                f"/wp-json/wp/v2/posts/{item_id}",
                json={"title": "Hello again", "slug": "hello", "status": "publish", "content": "<p>New</p>"},
            )
        assert resp.status_code == 200
        post_json.assert_awaited_once()
        url, payload = post_json.await_args.args[:2]
        assert url == "https://app.example/api/wordpress/revalidate"
        assert payload.model_dump() == {"secret": "s3cret", "slug": "/hello/"}

    def test_failed_revalidation_does_not_block_update(self):
        item_id = _create().json()["id"]
        with patch(_POST_JSON, new=AsyncMock(return_value=500)):
            resp = client.post(
                f"/wp-json/wp/v2/posts/{item_id}",
                json={"title": "Edited", "slug": "hello", "status": "publish", "content": "<p>x</p>"},
            )
        assert resp.status_code == 200
        assert resp.json()["title"] == "Edited"

    def test_partial_update_keeps_unsent_fields(self):
        item_id = _create().json()["id"]
        with patch(_POST_JSON, new=AsyncMock(return_value=200)) as post_json:
            resp = client.post(f"/wp-json/wp/v2/posts/{item_id}", json={"title": "Hello again"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["title"] == "Hello again"
        assert data["status"] == "publish"
        assert data["slug"] == "hello"
        assert data["content"] == "<p>Hi</p>"
        assert data["link"] == "https://app.example/hello/"
        post_json.assert_awaited_once()
        assert post_json.await_args.args[1].slug == "/hello/"

    def test_unknown_item(self):
        assert client.get("/wp-json/wp/v2/posts/999").status_code == 404

    def test_wrong_collection(self):
        item_id = _create("pages").json()["id"]
        assert client.get(f"/wp-json/wp/v2/posts/{item_id}").status_code == 404

    def test_unknown_collection(self):
        assert _create("widgets").status_code == 404

    def test_invalid_status_is_rejected(self):
        assert _create(status="archived").status_code == 422


# ---------------------------------------------------------------------------
# Headless endpoints
# ---------------------------------------------------------------------------

class TestHeadlessEndpoints:
    def test_preview_link(self):
        item_id = _create(status="draft").json()["id"]
        resp = client.get(f"/wp-json/headless/v1/preview-link/{item_id}")
        assert resp.status_code == 200
        assert resp.json()["preview_link"].startswith("https://app.example/api/preview?name=hello")

    def test_preview_link_unknown_item(self):
        assert client.get("/wp-json/headless/v1/preview-link/999").status_code == 404

    def test_settings_are_sanitised(self):
        resp = client.put(
            "/wp-json/headless/v1/settings",
            json={"settings": {"error_404_page": "not-a-number", "note": "<i>hello</i>"}},
        )
        assert resp.status_code == 200
        data = client.get("/wp-json/headless/v1/settings").json()
        assert data["error_404_page"] is None
        assert data["note"] == "hello"

    def test_homepage_settings(self):
        front_id = _create("pages", slug="home").json()["id"]
        app.state.options.update("page_on_front", str(front_id))

        data = client.get("/wp-json/headless/v1/homepage-settings").json()
        assert data["frontPage"]["id"] == front_id
        assert data["frontPage"]["link"] == "https://app.example/home/"
        assert data["postsPage"] is None

    def test_headless_config_error_page(self):
        page_id = _create("pages", slug="oops").json()["id"]
        client.put("/wp-json/headless/v1/settings", json={"settings": {"error_404_page": page_id}})

        data = client.get("/wp-json/headless/v1/headless-config").json()
        assert data["additionalSettings"]["error404Page"]["id"] == page_id
        assert data["additionalSettings"]["error404Page"]["link"] == "https://app.example/404"

    def test_headless_config_without_error_page(self):
        data = client.get("/wp-json/headless/v1/headless-config").json()
        assert data == {"additionalSettings": {"error404Page": None}}

    def test_commenter_avatar(self):
        resp = client.post("/wp-json/headless/v1/commenter-avatar", json={"email": " Someone@Example.com "})
        url = resp.json()["gravatarUrl"]
        assert url.startswith("https://secure.gravatar.com/avatar/")
        assert url.endswith("?s=150&d=mm&r=g")

    def test_guest_without_email_gets_mystery_avatar(self):
        resp = client.post("/wp-json/headless/v1/commenter-avatar", json={"name": "Guest"})
        assert resp.json()["gravatarUrl"] == (
            "https://secure.gravatar.com/avatar/5cf23001579ee91aff54a2dcd6e5acc9?s=150&d=mm&r=g"
        )
