from __future__ import annotations

import logging
from datetime import date

from flask import Blueprint, flash, g, redirect, render_template, request, url_for
from werkzeug.wrappers.response import Response as WsgiResponse

from .api import AuthApi, UserApi, WebsiteApi, unwrap
from .app_authz import login_required, require_roles
from .context import assigned_website_id, get_api_client, get_auth_store
from .errors import ApiError

bp = Blueprint("dashboard", __name__)

logger = logging.getLogger("hotelhub.dashboard")


@bp.get("/")
def root_redirect() -> WsgiResponse:
    """Landing: signed-in browsers go to the dashboard, everyone else to login."""
    if get_auth_store().has_token:
        return redirect(url_for("dashboard.dashboard_home"))
    return redirect(url_for("auth_ui.login"))


def _super_admin_stats() -> dict[str, int]:
    client = get_api_client()
    stats = {"websites": 0, "users": 0, "rooms": 0}
    try:
        websites = unwrap(WebsiteApi(client).get_all(), "websites", [])
        users = unwrap(UserApi(client).get_all(), "users", [])
    except ApiError as err:
        logger.warning("Failed to fetch dashboard data status=%s", err.status)
        return stats
    stats["websites"] = len(websites)
    stats["users"] = len(users)
    stats["rooms"] = sum(len(w.get("rooms") or []) for w in websites)
    return stats


def _admin_stats(website_id: str | None) -> dict[str, int]:
    stats = {"rooms": 0, "hero_sections": 0}
    if not website_id:
        return stats
    try:
        website = unwrap(WebsiteApi(get_api_client()).get_by_id(website_id), "website", {})
    except ApiError as err:
        logger.warning("Failed to fetch dashboard data status=%s", err.status)
        return stats
    stats["rooms"] = len(website.get("rooms") or [])
    stats["hero_sections"] = len(website.get("heroSections") or [])
    return stats


@bp.get("/dashboard")
@login_required
def dashboard_home():
    if g.role == "super_admin":
        stats = _super_admin_stats()
    else:
        stats = _admin_stats(assigned_website_id())
    return render_template(
        "dashboard.html",
        stats=stats,
        month=date.today().strftime("%B %Y"),
    )


@bp.route("/dashboard/settings", methods=["GET", "POST"])
@login_required
def settings():
    if request.method == "GET":
        return render_template("settings.html", error=None)
    current = request.form.get("current_password") or ""
    new = request.form.get("new_password") or ""
    confirm = request.form.get("confirm_password") or ""
    error = None
    if not current or not new:
        error = "Current and new password are required"
    elif len(new) < 6:
        error = "New password must be at least 6 characters"
    elif new != confirm:
        error = "Passwords do not match"
    if error:
        return render_template("settings.html", error=error), 400
    try:
        AuthApi(get_api_client()).change_password(current, new)
    except ApiError as err:
        logger.warning("Password change failed status=%s", err.status)
        payload = err.payload if isinstance(err.payload, dict) else {}
        return render_template("settings.html", error=payload.get("message") or "Failed to change password"), 400
    flash("Password changed: Your password has been updated.", "success")
    return redirect(url_for("dashboard.settings"))


# Pages retired from the original dashboard; old bookmarks land on the overview
@bp.get("/dashboard/hotels")
@bp.get("/dashboard/amenities")
@require_roles("super_admin", "admin")
def legacy_redirect() -> WsgiResponse:
    return redirect(url_for("dashboard.dashboard_home"))


__all__ = ["bp"]
