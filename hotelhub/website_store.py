"""Tenant websites and the operator's current selection.

Mutations patch the in-memory list from the backend's response instead of
refetching: the response is taken as authoritative and no concurrent writer is
assumed. Only the current selection (id + name) is persisted; full website
documents embed images and are refetched per request.
"""

from __future__ import annotations

import logging
from typing import Any

from .api import WebsiteApi, unwrap
from .api_client import ApiClient
from .errors import ApiError
from .notifications import Notifier, success
from .storage import WEBSITE_STORAGE_KEY, Storage

logger = logging.getLogger("hotelhub.websites")


def website_id(website: dict[str, Any] | None) -> str | None:
    if not website:
        return None
    wid = website.get("_id") or website.get("id")
    return str(wid) if wid else None


class WebsiteStore:
    def __init__(self, client: ApiClient, storage: Storage, notifier: Notifier):
        self.api = WebsiteApi(client)
        self.storage = storage
        self.notifier = notifier
        self.websites: list[dict[str, Any]] = []
        self.current: dict[str, Any] | None = None
        self.error: str | None = None
        self._hydrate()

    def _hydrate(self) -> None:
        snapshot = self.storage.read_json(WEBSITE_STORAGE_KEY) or {}
        current = snapshot.get("current")
        if isinstance(current, dict) and website_id(current):
            self.current = current

    def _persist(self) -> None:
        if self.current is None:
            self.storage.write_json(WEBSITE_STORAGE_KEY, {"current": None})
            return
        self.storage.write_json(
            WEBSITE_STORAGE_KEY,
            {"current": {"_id": website_id(self.current), "name": self.current.get("name", "")}},
        )

    def _fail(self, err: ApiError, default: str) -> None:
        payload = err.payload if isinstance(err.payload, dict) else {}
        self.error = str(payload.get("message") or default)
        logger.warning("%s: status=%s %s", default, err.status, err.message)

    @property
    def current_id(self) -> str | None:
        return website_id(self.current)

    def find(self, wid: str) -> dict[str, Any] | None:
        return next((w for w in self.websites if website_id(w) == wid), None)

    # --- actions ---

    def fetch_websites(self) -> list[dict[str, Any]]:
        self.error = None
        try:
            envelope = self.api.get_all()
        except ApiError as err:
            self._fail(err, "Failed to fetch websites")
            return self.websites
        websites = unwrap(envelope, "websites", [])
        self.websites = list(websites) if isinstance(websites, list) else []
        if self.current is None:
            self.current = self.websites[0] if self.websites else None
        else:
            # Same selection, fresher document when the list still carries it
            self.current = self.find(self.current_id or "") or self.current
        self._persist()
        return self.websites

    def switch_website(self, wid: str) -> dict[str, Any] | None:
        self.error = None
        try:
            envelope = self.api.switch(wid)
        except ApiError as err:
            self._fail(err, "Failed to switch website")
            return self.current
        website = unwrap(envelope, "website")
        if isinstance(website, dict):
            self.current = website
            self._persist()
            self.notifier.notify(success("Website switched", f"Now managing {website.get('name', '')}"))
        return self.current

    def create_website(self, data: dict[str, Any]) -> dict[str, Any]:
        self.error = None
        try:
            envelope = self.api.create(data)
        except ApiError as err:
            self._fail(err, "Failed to create website")
            raise
        website = unwrap(envelope, "website") or {}
        self.websites = [*self.websites, website]
        self.notifier.notify(success("Website created", f"{website.get('name', '')} has been created successfully."))
        return website

    def update_website(self, wid: str, data: dict[str, Any]) -> dict[str, Any]:
        self.error = None
        try:
            envelope = self.api.update(wid, data)
        except ApiError as err:
            self._fail(err, "Failed to update website")
            raise
        updated = unwrap(envelope, "website") or {}
        self.websites = [updated if website_id(w) == wid else w for w in self.websites]
        if self.current_id == wid:
            self.current = updated
            self._persist()
        self.notifier.notify(success("Website updated", "Website has been updated successfully."))
        return updated

    def delete_website(self, wid: str) -> None:
        self.error = None
        try:
            self.api.delete(wid)
        except ApiError as err:
            self._fail(err, "Failed to delete website")
            raise
        remaining = [w for w in self.websites if website_id(w) != wid]
        if self.current_id == wid:
            self.current = remaining[0] if remaining else None
            self._persist()
        self.websites = remaining
        self.notifier.notify(success("Website deleted", "Website has been deleted successfully."))

    def clear_error(self) -> None:
        self.error = None


__all__ = ["WebsiteStore", "website_id"]
