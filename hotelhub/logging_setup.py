"""Support log ring buffer.

Keeps the most recent WARNING+ records (backend failures, session expiries,
blocked CSRF posts) together with the request id and path they were emitted
under, so an operator report can be matched to the request log.
"""

from __future__ import annotations

import collections
import logging
import time

from flask import g, has_request_context, request

LOG_BUFFER: collections.deque[dict] = collections.deque(maxlen=500)


class SupportLogHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        if has_request_context():
            rid = getattr(g, "request_id", "-")
            path = request.path
        else:
            rid = "-"
            path = "-"
        LOG_BUFFER.append(
            {
                "ts": time.time(),
                "level": record.levelname,
                "logger": record.name,
                "msg": self.format(record),
                "request_id": rid,
                "path": path,
            }
        )


def install_support_log_handler() -> None:
    root = logging.getLogger()
    # Avoid duplicate attachment when several apps are built in one process
    if any(isinstance(h, SupportLogHandler) for h in root.handlers):
        return
    h = SupportLogHandler(level=logging.WARNING)
    h.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(h)


def recent_records(limit: int = 50, request_id: str | None = None) -> list[dict]:
    """Newest first, optionally narrowed to one request."""
    rows = [r for r in reversed(LOG_BUFFER) if request_id is None or r["request_id"] == request_id]
    return rows[:limit]


__all__ = ["LOG_BUFFER", "SupportLogHandler", "install_support_log_handler", "recent_records"]
