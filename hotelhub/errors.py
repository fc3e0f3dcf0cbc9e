"""Error taxonomy for backend calls + HTML error handler registration.

ApiError covers every failed backend call the user can retry from the same
page. SessionExpiredError is deliberately *not* an ApiError: views catch
ApiError around their calls, and session expiry must escape them so the
app-level handler can send the user back to the login page.
"""
from __future__ import annotations

import uuid
from typing import Any

from flask import current_app, g, render_template, request, url_for
from werkzeug.exceptions import HTTPException

DEFAULT_MESSAGE = "An unexpected error occurred"
SESSION_EXPIRED_MESSAGE = "Your session has expired. Please log in again."


class ApiError(Exception):
    status: int | None = None
    category = "unclassified"
    # Toast title for classified buckets; None means no notification
    title: str | None = None

    def __init__(self, message: str | None = None, *, status: int | None = None, payload: Any = None):
        self.message = message or DEFAULT_MESSAGE
        if status is not None:
            self.status = status
        self.payload = payload
        super().__init__(self.message)


class BadRequestError(ApiError):
    status = 400
    category = "bad_request"
    title = "Invalid Request"


class AuthenticationError(ApiError):
    status = 401
    category = "authentication"


class ForbiddenError(ApiError):
    status = 403
    category = "forbidden"
    title = "Access Denied"


class NotFoundError(ApiError):
    status = 404
    category = "not_found"
    title = "Not Found"


class ServerError(ApiError):
    status = 500
    category = "server_error"
    title = "Server Error"
    description = "Something went wrong. Please try again later."


class NetworkError(ApiError):
    category = "network"


class SessionExpiredError(Exception):
    def __init__(self, message: str = SESSION_EXPIRED_MESSAGE):
        self.message = message
        super().__init__(message)


def error_for_status(status: int) -> type[ApiError]:
    if status == 400:
        return BadRequestError
    if status == 401:
        return AuthenticationError
    if status == 403:
        return ForbiddenError
    if status == 404:
        return NotFoundError
    if status >= 500:
        return ServerError
    return ApiError


def register_error_handlers(app: Any) -> None:
    @app.errorhandler(SessionExpiredError)
    def _h_session_expired(err: SessionExpiredError):
        # The identity is gone; render without the signed-in shell
        g.pop("user", None)
        g.pop("role", None)
        delay = float(current_app.config.get("SESSION_EXPIRED_REDIRECT_DELAY", 1.5))
        html = render_template(
            "session_expired.html",
            message=err.message,
            delay=delay,
            login_url=url_for("auth_ui.login"),
        )
        return html, 401

    @app.errorhandler(ApiError)
    def _h_api(err: ApiError):
        status = err.status or 502
        # Backend faults are ours to report as a bad gateway
        if status >= 500:
            status = 502
        app.logger.warning(
            "Unhandled backend error status=%s category=%s path=%s", err.status, err.category, request.path
        )
        return render_template("error.html", status=status, title=err.title or "Request failed", message=err.message), status

    @app.errorhandler(HTTPException)
    def _h_http(ex: HTTPException):
        status = ex.code or 500
        return render_template("error.html", status=status, title=ex.name, message=ex.description), status

    @app.errorhandler(Exception)
    def _h_exception(ex: Exception):
        incident_id = str(uuid.uuid4())
        app.logger.exception("Unhandled exception incident_id=%s path=%s", incident_id, request.path)
        return (
            render_template(
                "error.html",
                status=500,
                title="Internal Server Error",
                message="Something went wrong. Please try again later.",
                incident_id=incident_id,
            ),
            500,
        )


__all__ = [
    "ApiError",
    "BadRequestError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "ServerError",
    "NetworkError",
    "SessionExpiredError",
    "error_for_status",
    "register_error_handlers",
    "DEFAULT_MESSAGE",
    "SESSION_EXPIRED_MESSAGE",
]
