"""Flask application factory.

Provides:
 - App factory with configuration override
 - Shared backend HTTP session (swappable in tests)
 - Request id / duration headers and one structured log line per request
 - HTML error pages, CSRF + security headers
 - Blueprint registration (auth, dashboard shell, super-admin pages) and
   dynamic registration of the enabled content modules
"""

from __future__ import annotations

import logging
import os
import time
import uuid
from importlib import import_module
from typing import Any

from dotenv import load_dotenv
from flask import Flask, g, request
from werkzeug.wrappers.response import Response

from .auth_ui import bp as auth_ui_bp
from .config import ALL_CONTENT_MODULES, Config
from .dashboard_ui import bp as dashboard_bp
from .errors import register_error_handlers
from .logging_setup import install_support_log_handler
from .metrics import reset_metrics, set_metrics
from .metrics_logging import LoggingMetrics
from .navigation import nav_items_for
from .roles import role_label
from .security import init_security

# Map of module key -> import path:attr blueprint (for dynamic registration)
MODULE_IMPORTS = {name: f"modules.{name}.views:bp" for name in ALL_CONTENT_MODULES}

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))

# Room documents carry base64 images; leave headroom for ten detail shots
MAX_UPLOAD_BYTES = 32 * 1024 * 1024


def _load_blueprint(target: str):
    module_path, attr = target.split(":", 1)
    return getattr(import_module(module_path), attr)


def create_app(config_override: dict[str, Any] | None = None) -> Flask:
    load_dotenv()
    app = Flask(
        __name__,
        template_folder=os.path.join(ROOT, "templates"),
        static_folder=os.path.join(ROOT, "static"),
    )
    cfg = Config.from_env()
    if config_override:
        cfg.override(config_override)
    app.config.update(cfg.to_flask_dict())
    app.config.setdefault("MAX_CONTENT_LENGTH", MAX_UPLOAD_BYTES)
    if config_override:
        # Flask keys (TESTING, API_BASE_URL, ...) pass straight through
        app.config.update({k: v for k, v in config_override.items() if k.isupper()})

    if app.config.get("METRICS_BACKEND") == "log":
        set_metrics(LoggingMetrics())
    else:
        reset_metrics()

    install_support_log_handler()
    init_security(app)
    register_error_handlers(app)

    # --- Logging / timing middleware ---
    log = logging.getLogger("hotelhub")
    if not log.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("%(message)s"))
        log.addHandler(h)
    log.setLevel(logging.INFO)

    @app.before_request
    def _before_req() -> None:
        g._t0 = time.perf_counter()
        g.request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())

    @app.after_request
    def _after_req(resp: Response) -> Response:
        dur_ms = int((time.perf_counter() - getattr(g, "_t0", time.perf_counter())) * 1000)
        rid = getattr(g, "request_id", str(uuid.uuid4()))
        resp.headers["X-Request-Id"] = rid
        resp.headers["X-Request-Duration-ms"] = str(dur_ms)
        if "Cache-Control" not in resp.headers and not request.path.startswith("/static/"):
            resp.headers["Cache-Control"] = "no-store"
        log.info(
            {
                "request_id": rid,
                "method": request.method,
                "path": request.path,
                "status": resp.status_code,
                "duration_ms": dur_ms,
                "role": getattr(g, "role", None),
            }
        )
        return resp

    @app.context_processor
    def _inject_shell() -> dict[str, Any]:
        # Only guarded views set g.user; public pages render without the sidebar
        user = getattr(g, "user", None)
        role = getattr(g, "role", None)
        website_name = None
        if role == "admin" and user:
            website_name = user.get("websiteName")
        return {
            "current_user": user,
            "current_role": role,
            "role_label": role_label,
            "nav_items": nav_items_for(role) if user else [],
            "website_name": website_name,
        }

    app.register_blueprint(auth_ui_bp)
    app.register_blueprint(dashboard_bp)

    from admin.ui_blueprint import admin_ui_bp

    app.register_blueprint(admin_ui_bp)

    for mod in app.config.get("ENABLED_MODULES", ALL_CONTENT_MODULES):
        target = MODULE_IMPORTS.get(mod)
        if not target:
            app.logger.warning("Unknown content module %r ignored", mod)
            continue
        app.register_blueprint(_load_blueprint(target))

    return app


__all__ = ["create_app", "MODULE_IMPORTS"]
