from __future__ import annotations

from pathlib import Path, PurePath
from threading import Lock
from typing import Protocol


class StorageBackend(Protocol):
    """Where toolbar artifacts physically live.

    Implementations must be race tolerant: `create` succeeds when the
    location already exists and `delete` succeeds when the file is gone.
    Errors are raised as OSError.
    """

    def create(self, location: Path, mode: int) -> None:
        ...

    def write(self, path: Path, content: str) -> None:
        ...

    def list(self, location: Path) -> list[str]:
        """Names of the regular files directly inside `location`."""
        ...

    def read(self, path: Path) -> str:
        ...

    def delete(self, path: Path) -> None:
        ...


class FilesystemBackend:
    def create(self, location: Path, mode: int) -> None:
        location.mkdir(mode=mode, parents=True, exist_ok=True)

    def write(self, path: Path, content: str) -> None:
        # Debug values can carry lone surrogates; never leave a half-written file over them.
        path.write_text(content, encoding="utf-8", errors="backslashreplace")

    def list(self, location: Path) -> list[str]:
        # iterdir never yields "." or "..".
        return [entry.name for entry in location.iterdir() if entry.is_file()]

    def read(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def delete(self, path: Path) -> None:
        path.unlink(missing_ok=True)


class MemoryBackend:
    """Process-local backend for tests and throwaway setups."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._dirs: set[PurePath] = set()
        self._files: dict[PurePath, str] = {}

    def create(self, location: Path, mode: int) -> None:
        _ = mode
        with self._lock:
            path = PurePath(location)
            self._dirs.add(path)
            self._dirs.update(path.parents)

    def write(self, path: Path, content: str) -> None:
        with self._lock:
            key = PurePath(path)
            if key.parent not in self._dirs:
                raise FileNotFoundError(f"No such directory: {key.parent}")
            self._files[key] = content

    def list(self, location: Path) -> list[str]:
        with self._lock:
            parent = PurePath(location)
            if parent not in self._dirs:
                raise FileNotFoundError(f"No such directory: {parent}")
            return [key.name for key in self._files if key.parent == parent]

    def read(self, path: Path) -> str:
        with self._lock:
            try:
                return self._files[PurePath(path)]
            except KeyError:
                raise FileNotFoundError(f"No such file: {path}") from None

    def delete(self, path: Path) -> None:
        with self._lock:
            self._files.pop(PurePath(path), None)
