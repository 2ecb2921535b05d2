from __future__ import annotations

from pathlib import Path
from typing import Callable, TypeVar

import structlog

from debug_toolbar.config import get_settings
from debug_toolbar.toolbar.errors import StorageError
from debug_toolbar.toolbar.storage import FilesystemBackend, StorageBackend

T = TypeVar("T")

STORE_FOLDER_NAME = "debug_toolbar"
ARTIFACT_EXTENSION = ".html"
FOLDER_MODE = 0o775

logger = structlog.get_logger("toolbar.store")


class ToolbarStore:
    """Bounded on-disk history of rendered toolbars, one file per request.

    Filenames start with the toolbar id, whose leading fields are a
    zero-padded timestamp, so sorting by name sorts by creation time.
    """

    def __init__(
        self,
        var_dir: str | Path,
        *,
        backend: StorageBackend | None = None,
        folder_name: str = STORE_FOLDER_NAME,
        extension: str = ARTIFACT_EXTENSION,
    ) -> None:
        self._location = Path(var_dir) / folder_name
        self._backend = backend if backend is not None else FilesystemBackend()
        self._extension = extension

    def _call(self, operation: str, path: Path, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except (OSError, UnicodeError) as exc:
            logger.error("toolbar.storage_error", operation=operation, path=str(path), error=str(exc))
            raise StorageError(operation, path, str(exc)) from exc

    def get_store_location(self) -> Path:
        location = self._location
        self._call("create", location, lambda: self._backend.create(location, FOLDER_MODE))
        return location

    def save_artifact(self, toolbar_id: str, content: str) -> None:
        path = self.get_store_location() / f"{toolbar_id}{self._extension}"
        self._call("write", path, lambda: self._backend.write(path, content))
        logger.debug("toolbar.saved", toolbar_id=toolbar_id, path=str(path))

    def list_artifacts(self) -> list[str]:
        location = self.get_store_location()
        return sorted(self._call("list", location, lambda: self._backend.list(location)))

    def prune_to_last(self, n: int) -> list[str]:
        """Delete all but the `n` most recent artifacts; returns the deleted names.

        Concurrent pruners may race on the same files; a file that is already
        gone counts as deleted.
        """

        if n < 0:
            raise ValueError("Number of toolbars to keep must be >= 0")

        filenames = self.list_artifacts()
        if len(filenames) <= n:
            return []

        to_delete = filenames[: len(filenames) - n]
        location = self.get_store_location()
        for filename in to_delete:
            path = location / filename
            self._call("delete", path, lambda: self._backend.delete(path))

        logger.debug("toolbar.pruned", deleted=len(to_delete), kept=n)
        return to_delete

    def get_artifact_contents(self) -> dict[str, str]:
        location = self.get_store_location()
        contents: dict[str, str] = {}
        for filename in self.list_artifacts():
            path = location / filename
            try:
                content = self._backend.read(path)
            except FileNotFoundError:
                # Pruned by another request since listing.
                continue
            except (OSError, UnicodeError) as exc:
                logger.error("toolbar.storage_error", operation="read", path=str(path), error=str(exc))
                raise StorageError("read", path, str(exc)) from exc
            contents[filename.split(".", 1)[0]] = content
        return contents

    def read_artifact(self, toolbar_id: str) -> str | None:
        filename = f"{toolbar_id}{self._extension}"
        if filename not in self.list_artifacts():
            return None

        path = self.get_store_location() / filename
        try:
            return self._backend.read(path)
        except FileNotFoundError:
            return None
        except (OSError, UnicodeError) as exc:
            logger.error("toolbar.storage_error", operation="read", path=str(path), error=str(exc))
            raise StorageError("read", path, str(exc)) from exc


_store: ToolbarStore | None = None


def set_toolbar_store(store: ToolbarStore | None) -> None:
    global _store
    _store = store


def get_toolbar_store() -> ToolbarStore:
    global _store
    if _store is None:
        settings = get_settings()
        _store = ToolbarStore(settings.var_path)
    return _store
