from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from debug_toolbar.config import get_settings
from debug_toolbar.main import app
from debug_toolbar.toolbar.store import ToolbarStore, set_toolbar_store


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TOOLBAR_ENABLED", "true")
    monkeypatch.setenv("TOOLBAR_KEEP_LAST", "3")
    monkeypatch.setenv("VAR_DIR", str(tmp_path / "var"))
    monkeypatch.setenv("AREA_CODE", "frontend")
    get_settings.cache_clear()
    set_toolbar_store(None)

    yield

    set_toolbar_store(None)
    get_settings.cache_clear()


@pytest.fixture
def store(tmp_path: Path) -> ToolbarStore:
    return ToolbarStore(tmp_path / "var")


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
