"""Durable client-side state.

The dashboard keeps its tokens and store snapshots under four well-known keys.
In the web app the backing mapping is the signed Flask session cookie; scripts
and tests use a plain dict. Values are strings, snapshots are JSON.
"""

from __future__ import annotations

import json
from collections.abc import MutableMapping
from typing import Any

ACCESS_TOKEN_KEY = "accessToken"
REFRESH_TOKEN_KEY = "refreshToken"
AUTH_STORAGE_KEY = "auth-storage"
WEBSITE_STORAGE_KEY = "website-storage"

SESSION_KEYS = (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, AUTH_STORAGE_KEY, WEBSITE_STORAGE_KEY)


class Storage:
    """localStorage-style view over a mutable mapping."""

    def __init__(self, backing: MutableMapping[str, Any] | None = None):
        self._data: MutableMapping[str, Any] = backing if backing is not None else {}

    def get_item(self, key: str) -> str | None:
        value = self._data.get(key)
        if value is None or value == "":
            return None
        return str(value)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def read_json(self, key: str) -> dict[str, Any] | None:
        raw = self.get_item(key)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except ValueError:
            # Corrupt snapshot is treated as absent and dropped
            self.remove_item(key)
            return None
        return data if isinstance(data, dict) else None

    def write_json(self, key: str, value: dict[str, Any]) -> None:
        self.set_item(key, json.dumps(value, separators=(",", ":")))

    def clear_session_state(self) -> None:
        """Remove tokens and both store snapshots in lockstep."""
        for key in SESSION_KEYS:
            self.remove_item(key)

    def __contains__(self, key: object) -> bool:
        return self.get_item(str(key)) is not None


__all__ = [
    "ACCESS_TOKEN_KEY",
    "REFRESH_TOKEN_KEY",
    "AUTH_STORAGE_KEY",
    "WEBSITE_STORAGE_KEY",
    "SESSION_KEYS",
    "Storage",
]
