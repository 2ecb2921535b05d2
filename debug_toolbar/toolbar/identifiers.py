from __future__ import annotations

import itertools
import os
import re
from datetime import datetime
from threading import Lock

TOOLBAR_ID_PREFIX = "st"
SEPARATOR = "-"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_]")

_counter = itertools.count(1)
_counter_lock = Lock()


def sanitize_segment(value: str) -> str:
    """Make a value safe to embed as one field of a toolbar id.

    `-` separates the id fields and `.` separates the id from the file
    extension, so both are replaced along with anything else that is not
    a word character.
    """

    sanitized = _UNSAFE_CHARS.sub("_", value.strip())
    if not sanitized:
        raise ValueError("Toolbar id segment must not be empty")
    return sanitized


def action_name_from_path(path: str) -> str:
    segments = [segment for segment in path.split("/") if segment]
    if not segments:
        return "index"
    return sanitize_segment("_".join(segments))


def new_unique_token() -> str:
    """Process-unique token: pid plus a monotonic counter, both in hex."""

    with _counter_lock:
        sequence = next(_counter)
    return f"{os.getpid():x}{sequence:08x}"


def build_toolbar_id(action_name: str, area_code: str, *, now: datetime, token: str) -> str:
    values = [
        TOOLBAR_ID_PREFIX,
        now.strftime("%Y%m%d_%H%M%S"),
        now.strftime("%f"),
        token,
        sanitize_segment(area_code),
        sanitize_segment(action_name),
    ]
    return SEPARATOR.join(values)
