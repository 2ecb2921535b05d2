from __future__ import annotations

from pathlib import Path


class ToolbarError(Exception):
    """Base class for debug toolbar errors."""


class AlreadySetError(ToolbarError):
    def __init__(self, toolbar_id: str) -> None:
        super().__init__(f"The toolbar id has already been set: {toolbar_id}")
        self.toolbar_id = toolbar_id


class NotSetError(ToolbarError):
    def __init__(self) -> None:
        super().__init__("The toolbar id has not been set")


class StorageError(ToolbarError):
    """A storage backend call failed; wraps the underlying OSError."""

    def __init__(self, operation: str, path: str | Path, reason: str = "") -> None:
        message = f"Toolbar storage {operation} failed for {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.operation = operation
        self.path = str(path)
