from __future__ import annotations

import logging
from typing import Any

from flask import Blueprint, flash, redirect, render_template, request, url_for
from werkzeug.wrappers.response import Response as WsgiResponse

from hotelhub import forms
from hotelhub.api import UserApi, unwrap
from hotelhub.app_authz import require_roles
from hotelhub.context import get_api_client, get_website_store
from hotelhub.errors import ApiError
from hotelhub.website_store import website_id

admin_ui_bp = Blueprint("admin_ui", __name__, url_prefix="/dashboard")

logger = logging.getLogger("hotelhub.admin")

WEBSITE_FIELDS = ("name", "domain", "subdomain")


def _assigned_admin_id(website: dict[str, Any]) -> str | None:
    admin = website.get("assignedAdmin")
    if isinstance(admin, dict):
        return website_id(admin)
    return str(admin) if admin else None


def assignable_admins(admins: list[dict[str, Any]], websites: list[dict[str, Any]], website: dict[str, Any] | None) -> list[dict[str, Any]]:
    """Admins free to take ``website``: unassigned ones plus its current admin.

    Advisory only; two super-admins assigning at once can still double-book.
    """
    current = _assigned_admin_id(website) if website else None
    taken = {aid for aid in (_assigned_admin_id(w) for w in websites) if aid}
    return [a for a in admins if website_id(a) not in taken or website_id(a) == current]


def _website_form() -> dict[str, str]:
    return {f: forms.text(request.form, f) for f in WEBSITE_FIELDS}


# ---- websites ----


@admin_ui_bp.get("/websites")
@require_roles("super_admin")
def websites():
    store = get_website_store()
    store.fetch_websites()
    mode = request.args.get("modal")
    selected = store.find(request.args.get("id", "")) if request.args.get("id") else None
    candidates: list[dict[str, Any]] = []
    if mode == "assign" and selected is not None:
        try:
            admins = unwrap(UserApi(get_api_client()).get_all(role="admin"), "users", [])
        except ApiError as err:
            logger.warning("Failed to fetch admins status=%s", err.status)
            admins = []
        candidates = assignable_admins(admins, store.websites, selected)
    return render_template(
        "websites.html",
        websites=store.websites,
        current_id=store.current_id,
        error=store.error,
        modal=mode,
        selected=selected,
        selected_admin_id=_assigned_admin_id(selected) if selected else None,
        candidates=candidates,
    )


@admin_ui_bp.post("/websites")
@require_roles("super_admin")
def website_create() -> WsgiResponse:
    data = _website_form()
    data["theme"] = forms.text(request.form, "theme", "default") or "default"
    if not data["name"] or not data["domain"]:
        flash("Missing fields: Name and domain are required.", "danger")
        return redirect(url_for("admin_ui.websites", modal="create"))
    store = get_website_store()
    try:
        store.create_website(data)
    except ApiError as err:
        logger.warning("Failed to create website status=%s", err.status)
        return redirect(url_for("admin_ui.websites", modal="create"))
    return redirect(url_for("admin_ui.websites"))


@admin_ui_bp.post("/websites/<wid>/edit")
@require_roles("super_admin")
def website_update(wid: str) -> WsgiResponse:
    store = get_website_store()
    try:
        store.update_website(wid, _website_form())
    except ApiError as err:
        logger.warning("Failed to update website status=%s", err.status)
        return redirect(url_for("admin_ui.websites", modal="edit", id=wid))
    return redirect(url_for("admin_ui.websites"))


@admin_ui_bp.post("/websites/<wid>/delete")
@require_roles("super_admin")
def website_delete(wid: str) -> WsgiResponse:
    store = get_website_store()
    # The list is per request; load it so the current selection can be reassigned
    store.fetch_websites()
    try:
        store.delete_website(wid)
    except ApiError as err:
        logger.warning("Failed to delete website status=%s", err.status)
    return redirect(url_for("admin_ui.websites"))


@admin_ui_bp.post("/websites/<wid>/switch")
@require_roles("super_admin")
def website_switch(wid: str) -> WsgiResponse:
    get_website_store().switch_website(wid)
    return redirect(url_for("admin_ui.websites"))


@admin_ui_bp.post("/websites/<wid>/assign-admin")
@require_roles("super_admin")
def website_assign_admin(wid: str) -> WsgiResponse:
    admin_id = forms.text(request.form, "admin_id") or None
    store = get_website_store()
    try:
        store.api.assign_admin(wid, admin_id)
    except ApiError as err:
        logger.warning("Failed to assign admin status=%s", err.status)
        return redirect(url_for("admin_ui.websites", modal="assign", id=wid))
    name = forms.text(request.form, "website_name") or "the website"
    if admin_id:
        flash(f"Admin assigned: Admin has been assigned to {name}.", "success")
    else:
        flash(f"Admin removed: Admin has been removed from {name}.", "success")
    return redirect(url_for("admin_ui.websites"))


# ---- users ----


def _matches(user: dict[str, Any], query: str) -> bool:
    q = query.lower()
    return q in str(user.get("name", "")).lower() or q in str(user.get("email", "")).lower()


@admin_ui_bp.get("/users")
@require_roles("super_admin")
def users():
    client = get_api_client()
    query = (request.args.get("q") or "").strip()
    try:
        all_users = unwrap(UserApi(client).get_all(), "users", [])
    except ApiError as err:
        logger.warning("Failed to fetch users status=%s", err.status)
        all_users = []
    store = get_website_store()
    store.fetch_websites()
    listed = [u for u in all_users if _matches(u, query)] if query else list(all_users)
    editing = None
    if request.args.get("modal") == "edit":
        editing = next((u for u in all_users if website_id(u) == request.args.get("id")), None)
    return render_template(
        "users.html",
        users=listed,
        query=query,
        total_users=len(all_users),
        total_websites=len(store.websites),
        assigned_websites=sum(1 for w in store.websites if _assigned_admin_id(w)),
        modal=request.args.get("modal"),
        editing=editing,
    )


@admin_ui_bp.post("/users")
@require_roles("super_admin")
def user_create() -> WsgiResponse:
    name = forms.text(request.form, "name")
    email = forms.text(request.form, "email")
    password = request.form.get("password") or ""
    if not name or not email or not password:
        flash("Missing fields: Name, email and password are required.", "danger")
        return redirect(url_for("admin_ui.users", modal="create"))
    try:
        UserApi(get_api_client()).create({"name": name, "email": email, "password": password, "role": "admin"})
    except ApiError as err:
        logger.warning("Failed to save user status=%s", err.status)
        return redirect(url_for("admin_ui.users", modal="create"))
    flash(f"User created: {name} has been created successfully.", "success")
    return redirect(url_for("admin_ui.users"))


@admin_ui_bp.post("/users/<uid>/edit")
@require_roles("super_admin")
def user_update(uid: str) -> WsgiResponse:
    name = forms.text(request.form, "name")
    data: dict[str, Any] = {"name": name}
    # Blank password keeps the current one
    password = request.form.get("password") or ""
    if password:
        data["password"] = password
    try:
        UserApi(get_api_client()).update(uid, data)
    except ApiError as err:
        logger.warning("Failed to save user status=%s", err.status)
        return redirect(url_for("admin_ui.users", modal="edit", id=uid))
    flash(f"User updated: {name} has been updated successfully.", "success")
    return redirect(url_for("admin_ui.users"))


@admin_ui_bp.post("/users/<uid>/delete")
@require_roles("super_admin")
def user_delete(uid: str) -> WsgiResponse:
    try:
        UserApi(get_api_client()).delete(uid)
    except ApiError as err:
        logger.warning("Failed to delete user status=%s", err.status)
        return redirect(url_for("admin_ui.users"))
    flash("User deleted: The user has been removed.", "success")
    return redirect(url_for("admin_ui.users"))


@admin_ui_bp.post("/users/<uid>/toggle-status")
@require_roles("super_admin")
def user_toggle_status(uid: str) -> WsgiResponse:
    try:
        envelope = UserApi(get_api_client()).toggle_status(uid)
    except ApiError as err:
        logger.warning("Failed to toggle user status=%s", err.status)
        return redirect(url_for("admin_ui.users"))
    user = unwrap(envelope, "user") or {}
    state = "activated" if user.get("isActive") else "deactivated"
    flash(f"Status updated: User has been {state}.", "success")
    return redirect(url_for("admin_ui.users"))


__all__ = ["admin_ui_bp", "assignable_admins"]
