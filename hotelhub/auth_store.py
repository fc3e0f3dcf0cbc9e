"""Authenticated identity for the current browser session.

Tokens live under their own storage keys; the ``auth-storage`` snapshot only
keeps the user document and the authenticated flag so there is a single
source of truth for each.
"""

from __future__ import annotations

import logging
from typing import Any

from .api import AuthApi, unwrap
from .api_client import ApiClient
from .errors import ApiError
from .notifications import Notifier, Toast, destructive, success
from .storage import ACCESS_TOKEN_KEY, AUTH_STORAGE_KEY, REFRESH_TOKEN_KEY, Storage

logger = logging.getLogger("hotelhub.auth")


def _backend_message(err: ApiError, default: str) -> str:
    payload = err.payload if isinstance(err.payload, dict) else {}
    return str(payload.get("message") or default)


class AuthStore:
    def __init__(self, client: ApiClient, storage: Storage, notifier: Notifier):
        self.api = AuthApi(client)
        self.storage = storage
        self.notifier = notifier
        self.user: dict[str, Any] | None = None
        self.tokens: dict[str, str] | None = None
        self.is_authenticated = False
        self.error: str | None = None
        self._hydrate()

    # --- persistence ---

    def _hydrate(self) -> None:
        snapshot = self.storage.read_json(AUTH_STORAGE_KEY) or {}
        user = snapshot.get("user")
        self.user = user if isinstance(user, dict) else None
        self.is_authenticated = bool(snapshot.get("isAuthenticated")) and self.user is not None

    def _persist(self) -> None:
        self.storage.write_json(AUTH_STORAGE_KEY, {"user": self.user, "isAuthenticated": self.is_authenticated})

    def _reset(self) -> None:
        self.storage.clear_session_state()
        self.user = None
        self.tokens = None
        self.is_authenticated = False
        self.error = None

    def _accept_session(self, envelope: dict[str, Any]) -> dict[str, Any]:
        user = unwrap(envelope, "user")
        tokens = unwrap(envelope, "tokens") or {}
        if not isinstance(user, dict) or not tokens.get("accessToken"):
            raise ApiError("Malformed authentication response", payload=envelope)
        self.storage.set_item(ACCESS_TOKEN_KEY, tokens["accessToken"])
        self.storage.set_item(REFRESH_TOKEN_KEY, tokens.get("refreshToken") or "")
        self.user = user
        self.tokens = {"accessToken": tokens["accessToken"], "refreshToken": tokens.get("refreshToken") or ""}
        self.is_authenticated = True
        self._persist()
        return user

    # --- actions ---

    @property
    def role(self) -> str | None:
        return (self.user or {}).get("role")

    @property
    def has_token(self) -> bool:
        return self.storage.get_item(ACCESS_TOKEN_KEY) is not None

    def login(self, email: str, password: str) -> dict[str, Any]:
        self.error = None
        try:
            user = self._accept_session(self.api.login(email, password))
        except ApiError as err:
            self.error = _backend_message(err, "Login failed")
            raise
        self.notifier.notify(success("Welcome back!", f"Logged in as {user.get('name', user.get('email', ''))}"))
        return user

    def register(self, email: str, password: str, name: str, role: str | None = None) -> dict[str, Any]:
        self.error = None
        try:
            user = self._accept_session(self.api.register(email, password, name, role))
        except ApiError as err:
            self.error = _backend_message(err, "Registration failed")
            raise
        self.notifier.notify(success("Account created!", "Your account has been created successfully."))
        return user

    def get_me(self) -> bool:
        """Re-validate the stored token; repopulate identity or clear it."""
        try:
            envelope = self.api.get_me()
        except ApiError as err:
            logger.info("Identity check failed status=%s", err.status)
            self.user = None
            self.is_authenticated = False
            self._persist()
            return False
        user = unwrap(envelope, "user")
        self.user = user if isinstance(user, dict) else None
        self.is_authenticated = self.user is not None
        self._persist()
        return self.is_authenticated

    def logout(self) -> None:
        try:
            self.api.logout()
        except ApiError as err:
            logger.warning("Logout notification failed status=%s: %s", err.status, err.message)
        finally:
            self._reset()
        self.notifier.notify(Toast("Logged out", "You have been logged out successfully."))

    def force_logout(self, message: str | None = None) -> None:
        self._reset()
        self.notifier.notify(destructive("Session Expired", message or "Your session has expired. Please log in again."))

    def clear_error(self) -> None:
        self.error = None


__all__ = ["AuthStore"]
