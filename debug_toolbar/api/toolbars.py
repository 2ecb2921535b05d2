from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse

from debug_toolbar.config import Settings, get_settings
from debug_toolbar.models.schemas import ToolbarContentsResponse, ToolbarListResponse, ToolbarSummary
from debug_toolbar.toolbar.errors import StorageError
from debug_toolbar.toolbar.store import ToolbarStore, get_toolbar_store


router = APIRouter(prefix="/api/toolbars", tags=["toolbars"])


def get_enabled_store(settings: Settings = Depends(get_settings)) -> ToolbarStore:
    if not settings.is_enabled():
        raise HTTPException(status_code=404, detail="Not found")
    return get_toolbar_store()


@router.get("", response_model=ToolbarListResponse)
async def list_toolbars(store: ToolbarStore = Depends(get_enabled_store)) -> ToolbarListResponse:
    try:
        filenames = store.list_artifacts()
    except StorageError as exc:
        raise HTTPException(status_code=503, detail="Toolbar storage unavailable") from exc
    return ToolbarListResponse(
        toolbars=[ToolbarSummary(id=name.split(".", 1)[0], filename=name) for name in filenames]
    )


@router.get("/contents", response_model=ToolbarContentsResponse)
async def toolbar_contents(store: ToolbarStore = Depends(get_enabled_store)) -> ToolbarContentsResponse:
    try:
        contents = store.get_artifact_contents()
    except StorageError as exc:
        raise HTTPException(status_code=503, detail="Toolbar storage unavailable") from exc
    return ToolbarContentsResponse(contents=contents)


@router.get("/{toolbar_id}", response_class=HTMLResponse)
async def get_toolbar(toolbar_id: str, store: ToolbarStore = Depends(get_enabled_store)) -> HTMLResponse:
    try:
        content = store.read_artifact(toolbar_id)
    except StorageError as exc:
        raise HTTPException(status_code=503, detail="Toolbar storage unavailable") from exc
    if content is None:
        raise HTTPException(status_code=404, detail="Toolbar not found")
    return HTMLResponse(content)
