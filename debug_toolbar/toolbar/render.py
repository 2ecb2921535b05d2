from __future__ import annotations

from html import escape
from typing import Any

from debug_toolbar.toolbar.context import DiagnosticContext


def _table(table_id: str, title: str, rows: dict[str, Any]) -> str:
    cells = "".join(
        f"<tr><th>{escape(str(key))}</th><td>{escape(str(value))}</td></tr>" for key, value in rows.items()
    )
    return f'<table id="{escape(table_id)}"><caption>{escape(title)}</caption>{cells}</table>'


def render_toolbar(context: DiagnosticContext) -> str:
    """Bare-bones HTML fragment so every request leaves an inspectable artifact."""

    toolbar_id = context.get_toolbar_id()
    timers = {code: f"{elapsed * 1000.0:.3f} ms" for code, elapsed in context.timers.items()}
    values = {key: repr(value) for key, value in context.values.items()}

    return (
        f'<div class="debug-toolbar" id="{escape(toolbar_id)}">'
        f"{_table(context.get_new_table_id(), 'Timers', timers)}"
        f"{_table(context.get_new_table_id(), 'Values', values)}"
        "</div>"
    )
