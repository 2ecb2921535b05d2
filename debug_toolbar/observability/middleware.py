from __future__ import annotations

from typing import Any, Callable

import structlog
from starlette.datastructures import MutableHeaders

from debug_toolbar.config import Settings, get_settings
from debug_toolbar.toolbar.context import DiagnosticContext, bind_context, reset_context
from debug_toolbar.toolbar.errors import ToolbarError
from debug_toolbar.toolbar.identifiers import action_name_from_path
from debug_toolbar.toolbar.render import render_toolbar
from debug_toolbar.toolbar.store import ToolbarStore, get_toolbar_store

REQUEST_TIMER = "request"

logger = structlog.get_logger("toolbar")


class ToolbarMiddleware:
    """Collects diagnostics for each HTTP request and stores the rendered toolbar."""

    def __init__(
        self,
        app: Callable[..., Any],
        *,
        settings_provider: Callable[[], Settings] = get_settings,
        store_provider: Callable[[], ToolbarStore] = get_toolbar_store,
        renderer: Callable[[DiagnosticContext], str] = render_toolbar,
    ) -> None:
        self.app = app
        self._settings_provider = settings_provider
        self._store_provider = store_provider
        self._renderer = renderer
        # Browsing stored toolbars must not push them out of the store.
        self._excluded_path = "/api/toolbars"

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        settings = self._settings_provider()
        path = scope.get("path") or "/"
        if not settings.is_enabled() or self._is_excluded(path):
            await self.app(scope, receive, send)
            return

        context = DiagnosticContext(settings.area_code)
        context.start_timer(REQUEST_TIMER)
        context.set_value("method", scope.get("method"))
        context.set_value("path", path)

        try:
            toolbar_id: str | None = context.init_toolbar_id(action_name_from_path(path))
        except (ToolbarError, ValueError):
            logger.exception("toolbar.setup_failed", path=path)
            toolbar_id = None

        if toolbar_id is None:
            await self.app(scope, receive, send)
            return

        context_token = bind_context(context)
        structlog.contextvars.bind_contextvars(toolbar_id=toolbar_id)
        status_code: int = 500

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code

            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 500))
                headers = MutableHeaders(scope=message)
                headers["X-Toolbar-Id"] = toolbar_id

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            try:
                context.set_value("status_code", status_code)
                context.set_value("elapsed_ms", round(context.get_timer(REQUEST_TIMER) * 1000.0, 2))
                self._persist(context, settings)
            finally:
                structlog.contextvars.unbind_contextvars("toolbar_id")
                reset_context(context_token)

    def _is_excluded(self, path: str) -> bool:
        return path == self._excluded_path or path.startswith(f"{self._excluded_path}/")

    def _persist(self, context: DiagnosticContext, settings: Settings) -> None:
        try:
            store = self._store_provider()
            store.save_artifact(context.get_toolbar_id(), self._renderer(context))
            store.prune_to_last(settings.retention_count())
        except ToolbarError as exc:
            # The store already logged the details; just lose the toolbar.
            logger.warning("toolbar.save_failed", error=str(exc))
        except Exception:  # noqa: BLE001 - a broken renderer or debug value must not fail the request
            logger.exception("toolbar.save_failed")
