from __future__ import annotations

import pytest

from debug_toolbar.config import get_settings
from debug_toolbar.toolbar.errors import StorageError
from debug_toolbar.toolbar.store import ToolbarStore, set_toolbar_store


async def test_health_request_is_recorded(api_client) -> None:
    resp = await api_client.get("/health")
    assert resp.status_code == 200
    toolbar_id = resp.headers.get("x-toolbar-id")
    assert toolbar_id and toolbar_id.endswith("-frontend-health")

    listing = await api_client.get("/api/toolbars")
    assert listing.status_code == 200
    assert listing.json() == {"toolbars": [{"id": toolbar_id, "filename": f"{toolbar_id}.html"}]}


async def test_inspection_requests_are_not_recorded(api_client) -> None:
    await api_client.get("/api/toolbars")
    resp = await api_client.get("/api/toolbars/contents")
    assert resp.status_code == 200
    assert "x-toolbar-id" not in resp.headers
    assert resp.json() == {"contents": {}}


async def test_get_toolbar_returns_html(api_client) -> None:
    toolbar_id = (await api_client.get("/health")).headers["x-toolbar-id"]

    resp = await api_client.get(f"/api/toolbars/{toolbar_id}")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert 'class="debug-toolbar"' in resp.text

    contents = (await api_client.get("/api/toolbars/contents")).json()["contents"]
    assert contents[toolbar_id] == resp.text


async def test_unknown_toolbar_is_404(api_client) -> None:
    resp = await api_client.get("/api/toolbars/st-missing")
    assert resp.status_code == 404


async def test_listing_is_oldest_first_and_bounded(api_client) -> None:
    ids = [(await api_client.get("/health")).headers["x-toolbar-id"] for _ in range(4)]

    listing = (await api_client.get("/api/toolbars")).json()["toolbars"]
    assert [item["id"] for item in listing] == ids[-3:]


async def test_endpoints_hidden_when_disabled(api_client, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TOOLBAR_ENABLED", "false")
    get_settings.cache_clear()

    health = await api_client.get("/health")
    assert "x-toolbar-id" not in health.headers

    for path in ("/api/toolbars", "/api/toolbars/contents", "/api/toolbars/st-anything"):
        resp = await api_client.get(path)
        assert resp.status_code == 404


async def test_storage_error_maps_to_503(api_client) -> None:
    class FailingStore(ToolbarStore):
        def list_artifacts(self) -> list[str]:
            raise StorageError("list", "/var/app/debug_toolbar", "Permission denied")

    set_toolbar_store(FailingStore("/var/app"))
    resp = await api_client.get("/api/toolbars")
    assert resp.status_code == 503
