from __future__ import annotations

from http.cookiejar import DefaultCookiePolicy
from typing import Any

import requests
from flask import current_app, g, session

from .api_client import ApiClient
from .auth_store import AuthStore
from .notifications import FlashNotifier
from .roles import to_canonical
from .storage import Storage
from .website_store import WebsiteStore

HTTP_EXTENSION_KEY = "hotelhub.http"


def new_http_session() -> requests.Session:
    """Pooled session that never stores backend cookies.

    Every operator shares it, so a Set-Cookie answering one browser session
    must not ride along on another's requests.
    """
    http = requests.Session()
    http.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
    return http


def get_http() -> requests.Session:
    """Application-wide HTTP session (connection pool); tests swap it for a fake."""
    http = current_app.extensions.get(HTTP_EXTENSION_KEY)
    if http is None:
        http = new_http_session()
        current_app.extensions[HTTP_EXTENSION_KEY] = http
    return http


def get_storage() -> Storage:
    if "hh_storage" not in g:
        g.hh_storage = Storage(session)
    return g.hh_storage


def get_api_client() -> ApiClient:
    if "hh_client" not in g:
        cfg = current_app.config
        g.hh_client = ApiClient(
            cfg["API_BASE_URL"],
            get_storage(),
            http=get_http(),
            notifier=FlashNotifier(),
            timeout=float(cfg.get("API_TIMEOUT_SECONDS", 10)),
        )
    return g.hh_client


def get_auth_store() -> AuthStore:
    if "hh_auth" not in g:
        g.hh_auth = AuthStore(get_api_client(), get_storage(), FlashNotifier())
    return g.hh_auth


def get_website_store() -> WebsiteStore:
    if "hh_websites" not in g:
        g.hh_websites = WebsiteStore(get_api_client(), get_storage(), FlashNotifier())
    return g.hh_websites


def current_user() -> dict[str, Any] | None:
    return get_auth_store().user


def current_role() -> str | None:
    return to_canonical(get_auth_store().role)


def assigned_website_id() -> str | None:
    """Website the signed-in admin is assigned to, if any."""
    wid = (current_user() or {}).get("websiteId")
    return str(wid) if wid else None


__all__ = [
    "HTTP_EXTENSION_KEY",
    "new_http_session",
    "get_http",
    "get_storage",
    "get_api_client",
    "get_auth_store",
    "get_website_store",
    "current_user",
    "current_role",
    "assigned_website_id",
]
