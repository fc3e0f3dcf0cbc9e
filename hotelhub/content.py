"""Shared plumbing for the per-website content pages.

Every content page edits the website the signed-in admin is assigned to; an
admin without an assignment gets an empty state instead of a form.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from flask import render_template

from .api import WebsiteApi, unwrap
from .context import assigned_website_id, get_api_client
from .errors import ApiError
from .notifications import FlashNotifier, Toast, destructive, success

logger = logging.getLogger("hotelhub.content")


def website_api() -> WebsiteApi:
    return WebsiteApi(get_api_client())


def no_website(title: str):
    return render_template("no_website.html", page_title=title)


def fetch(call: Callable[[], dict[str, Any]], key: str, default: Any, what: str) -> Any:
    """Run a read call; on a backend error log it and fall back to ``default``."""
    try:
        return unwrap(call(), key, default)
    except ApiError as err:
        logger.warning("Failed to fetch %s status=%s", what, err.status)
        return default


def notify(toast: Toast) -> None:
    FlashNotifier().notify(toast)


def saved(title: str, description: str) -> None:
    notify(success(title, description))


def failed(title: str, description: str) -> None:
    notify(destructive(title, description))


def find_by_id(items: list[dict[str, Any]], item_id: str) -> dict[str, Any] | None:
    return next((i for i in items if str(i.get("_id") or i.get("id")) == item_id), None)


__all__ = [
    "assigned_website_id",
    "website_api",
    "no_website",
    "fetch",
    "notify",
    "saved",
    "failed",
    "find_by_id",
]
