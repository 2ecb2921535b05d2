from __future__ import annotations

from contextvars import ContextVar, Token
from datetime import datetime, timezone
from time import perf_counter
from typing import Any, Callable

from debug_toolbar.toolbar.errors import AlreadySetError, NotSetError
from debug_toolbar.toolbar.identifiers import build_toolbar_id, new_unique_token


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DiagnosticContext:
    """Per-request diagnostics: timers, debug values and the toolbar id.

    One instance lives for the duration of one request and is never shared,
    so nothing here is locked.
    """

    def __init__(
        self,
        area_code: str,
        *,
        clock: Callable[[], datetime] = _utc_now,
        token_factory: Callable[[], str] = new_unique_token,
    ) -> None:
        self.area_code = area_code
        self._clock = clock
        self._token_factory = token_factory
        self._toolbar_id: str | None = None
        self._timers: dict[str, float] = {}
        self._values: dict[str, Any] = {}
        self.table_count = 0

    # Toolbar id

    def init_toolbar_id(self, action_name: str) -> str:
        if self._toolbar_id is not None:
            raise AlreadySetError(self._toolbar_id)

        self._toolbar_id = build_toolbar_id(
            action_name,
            self.area_code,
            now=self._clock(),
            token=self._token_factory(),
        )
        return self._toolbar_id

    def get_toolbar_id(self) -> str:
        if self._toolbar_id is None:
            raise NotSetError()
        return self._toolbar_id

    @property
    def has_toolbar_id(self) -> bool:
        return self._toolbar_id is not None

    def get_new_table_id(self) -> str:
        # Callers must init the id first; an unset id ends up as "None" in the handle.
        self.table_count += 1
        return f"{self._toolbar_id}_table_{self.table_count}"

    # Timers

    def start_timer(self, code: str) -> DiagnosticContext:
        self._timers[code] = perf_counter()
        return self

    def get_timer(self, code: str) -> float:
        """Seconds elapsed since `code` was started.

        Reading a timer that was never started starts it, so the first read
        is ~0 and later reads grow from that point.
        """

        if code not in self._timers:
            self.start_timer(code)
        return perf_counter() - self._timers[code]

    @property
    def timers(self) -> dict[str, float]:
        return {code: self.get_timer(code) for code in self._timers}

    # Values

    def set_value(self, key: str, value: Any) -> DiagnosticContext:
        self._values[key] = value
        return self

    def get_value(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    @property
    def values(self) -> dict[str, Any]:
        return dict(self._values)


_current: ContextVar[DiagnosticContext | None] = ContextVar("debug_toolbar_context", default=None)


def bind_context(context: DiagnosticContext) -> Token[DiagnosticContext | None]:
    return _current.set(context)


def reset_context(token: Token[DiagnosticContext | None]) -> None:
    _current.reset(token)


def get_current_context() -> DiagnosticContext | None:
    """Context of the request being handled, or None when the toolbar is off."""

    return _current.get()
