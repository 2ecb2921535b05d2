from __future__ import annotations

from pydantic import BaseModel


class ToolbarSummary(BaseModel):
    id: str
    filename: str


class ToolbarListResponse(BaseModel):
    toolbars: list[ToolbarSummary]


class ToolbarContentsResponse(BaseModel):
    contents: dict[str, str]
