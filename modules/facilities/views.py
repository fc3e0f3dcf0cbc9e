from __future__ import annotations

import logging
from typing import Any

from flask import Blueprint, redirect, render_template, request, url_for
from werkzeug.wrappers.response import Response as WsgiResponse

from hotelhub import content, forms
from hotelhub.api import unwrap
from hotelhub.app_authz import require_roles
from hotelhub.errors import ApiError
from hotelhub.images import replace_image

bp = Blueprint("facilities", __name__, url_prefix="/dashboard/facilities")

logger = logging.getLogger("hotelhub.facilities")

MAX_FACILITIES = 6


def _payload(existing: dict[str, Any] | None) -> dict[str, Any]:
    return {
        "title": forms.text(request.form, "title"),
        "subTitle": forms.text(request.form, "subTitle"),
        "image": replace_image((existing or {}).get("image") or "", request.files.get("image")),
    }


@bp.get("")
@require_roles("admin")
def index():
    wid = content.assigned_website_id()
    if not wid:
        return content.no_website("Facilities")
    api = content.website_api()
    facilities = content.fetch(lambda: api.get_facilities(wid), "facilities", [], "facilities")
    modal = request.args.get("modal")
    return render_template(
        "facilities.html",
        facilities=facilities,
        modal=modal,
        editing=content.find_by_id(facilities, request.args.get("id", "")) if modal == "edit" else None,
        max_facilities=MAX_FACILITIES,
    )


@bp.post("")
@require_roles("admin")
def create() -> WsgiResponse:
    wid = content.assigned_website_id()
    if not wid:
        return redirect(url_for("facilities.index"))
    api = content.website_api()
    try:
        current = unwrap(api.get_facilities(wid), "facilities", [])
        if len(current) >= MAX_FACILITIES:
            content.failed("Limit reached", f"Maximum {MAX_FACILITIES} facilities allowed")
            return redirect(url_for("facilities.index"))
        data = _payload(None)
        if not data["title"]:
            content.failed("Missing fields", "Title is required.")
            return redirect(url_for("facilities.index", modal="create"))
        api.add_facility(wid, data)
    except ApiError as err:
        logger.warning("Failed to create facility status=%s", err.status)
        return redirect(url_for("facilities.index", modal="create"))
    content.saved("Created", "Facility has been created.")
    return redirect(url_for("facilities.index"))


@bp.post("/<facility_id>/edit")
@require_roles("admin")
def update(facility_id: str) -> WsgiResponse:
    wid = content.assigned_website_id()
    if not wid:
        return redirect(url_for("facilities.index"))
    api = content.website_api()
    try:
        existing = content.find_by_id(unwrap(api.get_facilities(wid), "facilities", []), facility_id)
        api.update_facility(wid, facility_id, _payload(existing))
    except ApiError as err:
        logger.warning("Failed to update facility status=%s", err.status)
        return redirect(url_for("facilities.index", modal="edit", id=facility_id))
    content.saved("Updated", "Facility has been updated.")
    return redirect(url_for("facilities.index"))


@bp.post("/<facility_id>/delete")
@require_roles("admin")
def delete(facility_id: str) -> WsgiResponse:
    wid = content.assigned_website_id()
    if not wid:
        return redirect(url_for("facilities.index"))
    title = forms.text(request.form, "title")
    try:
        content.website_api().delete_facility(wid, facility_id)
    except ApiError as err:
        logger.warning("Failed to delete facility status=%s", err.status)
        return redirect(url_for("facilities.index"))
    content.saved("Deleted", f'"{title}" has been deleted.')
    return redirect(url_for("facilities.index"))
