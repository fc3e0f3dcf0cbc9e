from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping

from .metrics import MetricName

logger = logging.getLogger("metrics")


class LoggingMetrics:
    """One dict log line per event plus running totals per metric name."""

    def __init__(self) -> None:
        self.totals: Counter[str] = Counter()

    def increment(self, name: MetricName, tags: Mapping[str, str] | None = None) -> None:
        self.totals[name] += 1
        logger.info({"metric": name, "total": self.totals[name], **dict(sorted((tags or {}).items()))})


__all__ = ["LoggingMetrics"]
