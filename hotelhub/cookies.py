"""Cookies the dashboard sets next to its session cookie.

They share the session cookie's SameSite setting. Only the plain-http dev
server and the test client go without the Secure flag.
"""
from __future__ import annotations

from flask import Flask, Response, current_app


def cookie_is_secure(app: Flask) -> bool:
    return not (app.debug or app.testing)


def set_secure_cookie(
    resp: Response,
    name: str,
    value: str,
    *,
    script_readable: bool = False,
    max_age: int | None = None,
) -> None:
    app = current_app
    resp.set_cookie(
        name,
        value,
        max_age=max_age,
        path="/",
        secure=cookie_is_secure(app),
        httponly=not script_readable,
        samesite=app.config.get("SESSION_COOKIE_SAMESITE") or "Lax",
    )


__all__ = ["cookie_is_secure", "set_secure_cookie"]
