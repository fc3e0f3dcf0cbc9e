"""Security middleware and helpers.

Features:
 - CSRF synchronizer token kept in the session, rendered into every form as
   ``csrf_token`` and accepted from the ``X-CSRF-Token`` header.
 - Security headers (CSP, HSTS outside debug/testing, nosniff, frame deny,
   Referrer-Policy, Permissions-Policy).
 - Counters for blocked CSRF attempts.
 - The token is mirrored into a readable ``csrf_token`` cookie.

CSRF Policy:
 - SAFE methods always allowed.
 - Every other method needs a token equal to the session's.
 - Under TESTING the check is bypassed unless STRICT_CSRF_IN_TESTS is set, so
   view tests can post forms without scraping a token first.
"""

from __future__ import annotations

import logging
import secrets

from flask import Flask, render_template, request, session

from . import metrics
from .cookies import set_secure_cookie

SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}
CSRF_SESSION_KEY = "CSRF_TOKEN"
CSRF_FIELD = "csrf_token"
CSRF_HEADER = "X-CSRF-Token"
CSRF_COOKIE = "csrf_token"

_CSRF_COUNTERS = {"missing": 0, "mismatch": 0}

logger = logging.getLogger("hotelhub.security")


def csrf_token() -> str:
    token = session.get(CSRF_SESSION_KEY)
    if not token:
        token = secrets.token_hex(16)
        session[CSRF_SESSION_KEY] = token
    return str(token)


def _csrf_check(app: Flask):
    if request.method.upper() in SAFE_METHODS:
        return None
    if not app.config.get("ENABLE_CSRF", True):
        return None
    if app.config.get("TESTING") and not (
        app.config.get("STRICT_CSRF_IN_TESTS") or app.config.get("HOTELHUB_STRICT_CSRF")
    ):
        return None
    expected = session.get(CSRF_SESSION_KEY)
    candidate = request.headers.get(CSRF_HEADER) or request.form.get(CSRF_FIELD)
    if candidate and expected and secrets.compare_digest(str(expected), str(candidate)):
        return None
    reason = "mismatch" if candidate else "missing"
    _CSRF_COUNTERS[reason] += 1
    metrics.increment(metrics.CSRF_BLOCKED, {"reason": reason})
    logger.warning({"csrf_blocked": reason, "path": request.path, "method": request.method})
    html = render_template(
        "error.html",
        status=403,
        title="Forbidden",
        message="Your form expired or was submitted from another site. Reload the page and try again.",
    )
    return html, 403


def init_security(app: Flask):
    app.jinja_env.globals["csrf_token"] = csrf_token

    @app.before_request
    def _security_before_request():
        return _csrf_check(app)

    @app.after_request
    def _security_after_request(resp):
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        resp.headers.setdefault("Permissions-Policy", "geolocation=(), microphone=(), camera=()")
        if not app.config.get("TESTING") and not app.config.get("DEBUG"):
            resp.headers.setdefault("Strict-Transport-Security", "max-age=63072000; includeSubDomains")
        token = session.get(CSRF_SESSION_KEY)
        # Mirrored for scripts that send X-CSRF-Token instead of the form field
        if token and request.cookies.get(CSRF_COOKIE) != token:
            set_secure_cookie(resp, CSRF_COOKIE, str(token), script_readable=True)
        # Images come from the backend host or are embedded as data URLs
        resp.headers.setdefault(
            "Content-Security-Policy",
            "default-src 'self'; img-src 'self' data: http: https:; object-src 'none'; "
            "base-uri 'self'; frame-ancestors 'none'",
        )
        return resp


def csrf_counters() -> dict[str, int]:
    return dict(_CSRF_COUNTERS)


__all__ = ["init_security", "csrf_token", "csrf_counters", "CSRF_FIELD", "CSRF_HEADER"]
