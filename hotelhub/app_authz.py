"""Authorization guard for dashboard pages.

require_roles(*roles) wraps a view so that:
 - a browser without an access token is sent to the login page (with ``next``);
 - a token without a cached identity is re-validated once via /auth/me, and a
   failed check force-logs the session out before redirecting to login;
 - an authenticated operator whose role is not allowed lands on /dashboard.
Calling it without roles only requires a valid session.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from flask import g, redirect, request, url_for

from .context import get_auth_store
from .roles import RoleLike, to_canonical

P = ParamSpec("P")
R = TypeVar("R")

logger = logging.getLogger("hotelhub.authz")


def _login_redirect():
    return redirect(url_for("auth_ui.login", next=request.path))


def require_roles(*roles: RoleLike) -> Callable[[Callable[P, R]], Callable[P, R]]:
    canonical_allowed = {to_canonical(r) for r in roles}

    def decorator(fn: Callable[P, R]) -> Callable[P, R]:
        @wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs):  # type: ignore[no-untyped-def]
            auth = get_auth_store()
            if not auth.has_token:
                return _login_redirect()
            if not auth.is_authenticated and not auth.get_me():
                auth.force_logout("Your session has expired. Please log in again.")
                return _login_redirect()
            role = to_canonical(auth.role)
            if canonical_allowed and role not in canonical_allowed:
                logger.info({"authz_denied": request.path, "role": role, "allowed": sorted(r for r in canonical_allowed if r)})
                return redirect(url_for("dashboard.dashboard_home"))
            g.user = auth.user
            g.role = role
            return fn(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def login_required(fn: Callable[P, R]) -> Callable[P, R]:
    return require_roles()(fn)


__all__ = ["require_roles", "login_required"]
