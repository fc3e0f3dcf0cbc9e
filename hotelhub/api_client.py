"""Authenticated HTTP client for the dashboard backend.

Every request carries the stored bearer token. A 401 on a request that has not
been retried yet triggers one token refresh followed by one replay; a missing
refresh token or a failed refresh ends the session (all durable keys wiped,
"Session Expired" toast, SessionExpiredError). Other failures are classified by
status into user-facing toasts and raised as ApiError subclasses.

The at-most-one-replay rule is carried by PendingRequest.state:

    NO_RETRY --401--> RETRYING --replay sent--> RETRIED

Only NO_RETRY may start a refresh, so a replayed request can never loop.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, NoReturn

import requests

from . import metrics
from .errors import ApiError, NetworkError, SessionExpiredError, error_for_status
from .notifications import CollectingNotifier, Notifier, destructive
from .storage import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, Storage

logger = logging.getLogger("hotelhub.api")

REFRESH_PATH = "/auth/refresh"


class RetryState(enum.Enum):
    NO_RETRY = "no_retry"
    RETRYING = "retrying"
    RETRIED = "retried"


@dataclass
class PendingRequest:
    method: str
    path: str
    params: dict[str, Any] | None = None
    json: Any = None
    data: dict[str, Any] | None = None
    files: Any = None
    refresh_on_401: bool = True
    state: RetryState = field(default=RetryState.NO_RETRY)

    @property
    def can_refresh(self) -> bool:
        return self.refresh_on_401 and self.state is RetryState.NO_RETRY

    def begin_retry(self) -> None:
        if self.state is not RetryState.NO_RETRY:
            raise RuntimeError(f"request already in state {self.state.value}")
        self.state = RetryState.RETRYING

    def rewind_files(self) -> None:
        """Seek file parts back to the start; the first send read them to EOF."""
        # requests takes a dict or a list of (field, value) pairs
        if isinstance(self.files, dict):
            values = list(self.files.values())
        else:
            values = [v for _, v in (self.files or ())]
        for value in values:
            fileobj = value[1] if isinstance(value, tuple) else value
            if hasattr(fileobj, "seek") and getattr(fileobj, "seekable", lambda: True)():
                fileobj.seek(0)

    def mark_retried(self) -> None:
        if self.state is not RetryState.RETRYING:
            raise RuntimeError(f"replay outside retry (state {self.state.value})")
        self.state = RetryState.RETRIED


def _json_or_none(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class ApiClient:
    def __init__(
        self,
        base_url: str,
        storage: Storage,
        *,
        http: requests.Session | None = None,
        notifier: Notifier | None = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.storage = storage
        self.http = http if http is not None else requests.Session()
        self.notifier: Notifier = notifier if notifier is not None else CollectingNotifier()
        self.timeout = timeout

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    # --- public surface ---

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: dict[str, Any] | None = None,
        files: Any = None,
        refresh_on_401: bool = True,
    ) -> requests.Response:
        pending = PendingRequest(
            method=method.upper(),
            path=path,
            params=params,
            json=json,
            data=data,
            files=files,
            refresh_on_401=refresh_on_401,
        )
        response = self._send(pending)
        if response.status_code == 401 and pending.can_refresh:
            pending.begin_retry()
            self._refresh_tokens(pending)
            pending.rewind_files()
            response = self._send(pending)
            pending.mark_retried()
        if response.status_code >= 400:
            raise self._classify(pending, response)
        return response

    def request_json(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        """Send a request and return the decoded response envelope ({} when empty)."""
        response = self.request(method, path, **kwargs)
        payload = _json_or_none(response)
        return payload if isinstance(payload, dict) else {}

    def get(self, path: str, **kwargs: Any) -> dict[str, Any]:
        return self.request_json("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> dict[str, Any]:
        return self.request_json("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> dict[str, Any]:
        return self.request_json("PUT", path, **kwargs)

    def patch(self, path: str, **kwargs: Any) -> dict[str, Any]:
        return self.request_json("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> dict[str, Any]:
        return self.request_json("DELETE", path, **kwargs)

    # --- pipeline ---

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self.storage.get_item(ACCESS_TOKEN_KEY)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _send(self, pending: PendingRequest) -> requests.Response:
        try:
            return self.http.request(
                pending.method,
                self.url(pending.path),
                headers=self._headers(),
                params=pending.params,
                json=pending.json,
                data=pending.data,
                files=pending.files,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Backend unreachable method=%s path=%s error=%s", pending.method, pending.path, exc)
            raise NetworkError(str(exc) or "Network error") from exc

    def _refresh_tokens(self, pending: PendingRequest) -> None:
        refresh_token = self.storage.get_item(REFRESH_TOKEN_KEY)
        if not refresh_token:
            self._expire_session(pending, "no refresh token")
        try:
            response = self.http.request(
                "POST",
                self.url(REFRESH_PATH),
                headers={"Accept": "application/json"},
                json={"refreshToken": refresh_token},
                timeout=self.timeout,
            )
            response.raise_for_status()
            tokens = response.json()["data"]["tokens"]
            access_token = str(tokens["accessToken"])
            new_refresh_token = str(tokens["refreshToken"])
        except (requests.RequestException, ValueError, KeyError, TypeError) as exc:
            self._expire_session(pending, f"refresh failed: {exc}", cause=exc)
        self.storage.set_item(ACCESS_TOKEN_KEY, access_token)
        self.storage.set_item(REFRESH_TOKEN_KEY, new_refresh_token)
        metrics.increment(metrics.TOKEN_REFRESH, {"path": pending.path})
        logger.info("Access token refreshed; replaying %s %s", pending.method, pending.path)

    def _expire_session(self, pending: PendingRequest, reason: str, cause: BaseException | None = None) -> NoReturn:
        self.storage.clear_session_state()
        self.notifier.notify(destructive("Session Expired", "Your session has expired. Please log in again."))
        metrics.increment(metrics.SESSION_EXPIRED, {"path": pending.path})
        logger.warning("Session expired during %s %s: %s", pending.method, pending.path, reason)
        raise SessionExpiredError() from cause

    def _classify(self, pending: PendingRequest, response: requests.Response) -> ApiError:
        payload = _json_or_none(response)
        message = payload.get("message") if isinstance(payload, dict) else None
        error_cls = error_for_status(response.status_code)
        err = error_cls(message, status=response.status_code, payload=payload)
        if err.title:
            description = getattr(err, "description", None) or err.message
            self.notifier.notify(destructive(err.title, description))
            metrics.increment(metrics.API_ERROR, {"category": err.category, "status": str(response.status_code)})
        logger.info(
            {
                "api_error": err.category,
                "status": response.status_code,
                "method": pending.method,
                "path": pending.path,
                "retry_state": pending.state.value,
            }
        )
        return err


__all__ = ["ApiClient", "PendingRequest", "RetryState", "REFRESH_PATH"]
