"""Login, registration, logout and password-reset pages."""

from __future__ import annotations

import logging

from flask import Blueprint, flash, redirect, render_template, request, url_for
from werkzeug.wrappers.response import Response as WsgiResponse

from . import forms
from .api import AuthApi
from .context import get_api_client, get_auth_store
from .errors import ApiError

bp = Blueprint("auth_ui", __name__)

logger = logging.getLogger("hotelhub.auth")

MIN_PASSWORD_LENGTH = 6


def _safe_next(target: str | None) -> str:
    # Only same-site paths; "//host" would leave the dashboard
    if target and target.startswith("/") and not target.startswith("//"):
        return target
    return url_for("dashboard.dashboard_home")


@bp.route("/login", methods=["GET", "POST"])
def login():
    auth = get_auth_store()
    next_url = request.values.get("next")
    if request.method == "GET":
        if auth.has_token and auth.is_authenticated:
            return redirect(_safe_next(next_url))
        return render_template("login.html", email="", error=None, next=next_url)
    email = forms.text(request.form, "email")
    password = request.form.get("password") or ""
    if not email or not password:
        return render_template("login.html", email=email, error="Email and password are required", next=next_url), 400
    try:
        auth.login(email, password)
    except ApiError:
        return render_template("login.html", email=email, error=auth.error, next=next_url), 401
    return redirect(_safe_next(next_url))


@bp.route("/register", methods=["GET", "POST"])
def register():
    auth = get_auth_store()
    if request.method == "GET":
        return render_template("register.html", name="", email="", error=None)
    name = forms.text(request.form, "name")
    email = forms.text(request.form, "email")
    password = request.form.get("password") or ""
    confirm = request.form.get("confirm_password") or ""
    error = None
    if not name or not email or not password:
        error = "Name, email and password are required"
    elif len(password) < MIN_PASSWORD_LENGTH:
        error = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    elif password != confirm:
        error = "Passwords do not match"
    if error:
        return render_template("register.html", name=name, email=email, error=error), 400
    try:
        auth.register(email, password, name)
    except ApiError:
        return render_template("register.html", name=name, email=email, error=auth.error), 400
    return redirect(url_for("dashboard.dashboard_home"))


@bp.post("/logout")
def logout() -> WsgiResponse:
    get_auth_store().logout()
    return redirect(url_for("auth_ui.login"))


@bp.route("/forgot-password", methods=["GET", "POST"])
def forgot_password():
    if request.method == "GET":
        return render_template("forgot_password.html", email="", sent=False)
    email = forms.text(request.form, "email")
    if not email:
        return render_template("forgot_password.html", email=email, sent=False, error="Email is required"), 400
    try:
        AuthApi(get_api_client()).forgot_password(email)
    except ApiError as err:
        logger.warning("Forgot-password request failed status=%s", err.status)
        return render_template("forgot_password.html", email=email, sent=False, error=err.message), 400
    # Same confirmation whether or not the address is known
    return render_template("forgot_password.html", email=email, sent=True)


@bp.route("/reset-password", methods=["GET", "POST"])
def reset_password():
    token = request.values.get("token") or ""
    if request.method == "GET":
        return render_template("reset_password.html", token=token, error=None)
    password = request.form.get("password") or ""
    confirm = request.form.get("confirm_password") or ""
    error = None
    if not token:
        error = "Reset link is missing its token"
    elif len(password) < MIN_PASSWORD_LENGTH:
        error = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    elif password != confirm:
        error = "Passwords do not match"
    if error:
        return render_template("reset_password.html", token=token, error=error), 400
    try:
        AuthApi(get_api_client()).reset_password(token, password)
    except ApiError as err:
        logger.warning("Password reset failed status=%s", err.status)
        return render_template("reset_password.html", token=token, error=err.message), 400
    flash("Password updated: You can now log in with your new password.", "success")
    return redirect(url_for("auth_ui.login"))


__all__ = ["bp"]
