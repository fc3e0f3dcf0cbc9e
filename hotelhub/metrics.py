"""Counters for the dashboard's backend traffic and request guards.

Names are fixed: the API client counts refreshes, session expiries and
classified failures, the CSRF guard counts blocked posts. The process-wide
sink discards them unless METRICS_BACKEND=log installs LoggingMetrics.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Final, Literal, Protocol

MetricName = Literal["api.token_refresh", "api.session_expired", "api.error", "security.csrf_blocked"]

TOKEN_REFRESH: Final = "api.token_refresh"
SESSION_EXPIRED: Final = "api.session_expired"
API_ERROR: Final = "api.error"
CSRF_BLOCKED: Final = "security.csrf_blocked"


class Metrics(Protocol):
    def increment(self, name: MetricName, tags: Mapping[str, str] | None = None) -> None: ...  # pragma: no cover


class _Discard:
    def increment(self, name: MetricName, tags: Mapping[str, str] | None = None) -> None:
        pass


_sink: Metrics = _Discard()


def set_metrics(sink: Metrics) -> None:
    global _sink
    _sink = sink


def reset_metrics() -> None:
    set_metrics(_Discard())


def increment(name: MetricName, tags: Mapping[str, str] | None = None) -> None:
    _sink.increment(name, tags)


__all__ = [
    "MetricName",
    "Metrics",
    "TOKEN_REFRESH",
    "SESSION_EXPIRED",
    "API_ERROR",
    "CSRF_BLOCKED",
    "set_metrics",
    "reset_metrics",
    "increment",
]
