"""Small parsers for dashboard form posts."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any


def text(form: Mapping[str, Any], name: str, default: str = "") -> str:
    return (form.get(name) or default).strip()


def integer(form: Mapping[str, Any], name: str, default: int = 0, *, lo: int | None = None, hi: int | None = None) -> int:
    try:
        value = int(str(form.get(name, "")).strip())
    except ValueError:
        value = default
    if lo is not None:
        value = max(lo, value)
    if hi is not None:
        value = min(hi, value)
    return value


def number(form: Mapping[str, Any], name: str, default: float = 0.0) -> float:
    try:
        value = float(str(form.get(name, "")).strip())
    except ValueError:
        return default
    # NaN and infinity would serialize as invalid JSON
    if not math.isfinite(value):
        return default
    return int(value) if value.is_integer() else value


def checkbox(form: Mapping[str, Any], name: str) -> bool:
    return str(form.get(name, "")).lower() in ("1", "true", "on", "yes")


def lines(form: Mapping[str, Any], name: str) -> list[str]:
    """One list entry per non-empty line."""
    return [ln.strip() for ln in str(form.get(name) or "").splitlines() if ln.strip()]


def removed_indexes(form: Any, name: str) -> set[int]:
    """Indexes ticked for removal in a multi-value checkbox group."""
    getlist = getattr(form, "getlist", None)
    values = getlist(name) if getlist else []
    return {int(v) for v in values if str(v).isdigit()}


__all__ = ["text", "integer", "number", "checkbox", "lines", "removed_indexes"]
