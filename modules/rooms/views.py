from __future__ import annotations

import logging
from typing import Any

from flask import Blueprint, redirect, render_template, request, url_for
from werkzeug.wrappers.response import Response as WsgiResponse

from hotelhub import content, forms
from hotelhub.api import unwrap
from hotelhub.app_authz import require_roles
from hotelhub.errors import ApiError
from hotelhub.images import MAX_DETAIL_IMAGES, append_images, replace_image

bp = Blueprint("rooms", __name__, url_prefix="/dashboard/rooms")

logger = logging.getLogger("hotelhub.rooms")

BED_TYPES = ("Single", "Double", "Queen", "King", "Twin", "Suite", "Bunk")


def room_payload(form: Any, files: Any, existing: dict[str, Any] | None) -> tuple[dict[str, Any], int]:
    """Build the room document from a form post; returns it with the count of dropped detail images."""
    existing = existing or {}
    bed_type = forms.text(form, "bedType")
    details, dropped = append_images(
        list(existing.get("detailImages") or []),
        files.getlist("detailImages"),
        MAX_DETAIL_IMAGES,
        forms.removed_indexes(form, "removeDetailImage"),
    )
    data = {
        "name": forms.text(form, "name"),
        "description": forms.text(form, "description"),
        "maxOccupancy": forms.integer(form, "maxOccupancy", 2, lo=1),
        "bedType": bed_type if bed_type in BED_TYPES else "Double",
        "size": forms.integer(form, "size", 0, lo=0),
        "basePrice": forms.number(form, "basePrice", 0),
        "discountPercentage": forms.text(form, "discountPercentage"),
        "mainImage": replace_image(
            existing.get("mainImage") or "", files.get("mainImage"), forms.checkbox(form, "clearMainImage")
        ),
        "detailImages": details,
        "amenities": forms.lines(form, "amenities"),
        "features": forms.lines(form, "features"),
        "servicesIncluded": forms.lines(form, "servicesIncluded"),
        "isAvailable": forms.checkbox(form, "isAvailable"),
    }
    return data, dropped


def _limit_notice(dropped: int) -> None:
    if dropped:
        content.failed("Limit reached", f"Maximum {MAX_DETAIL_IMAGES} detail images allowed")


@bp.get("")
@require_roles("admin")
def index():
    wid = content.assigned_website_id()
    if not wid:
        return content.no_website("Rooms")
    api = content.website_api()
    rooms = content.fetch(lambda: api.get_rooms(wid), "rooms", [], "rooms")
    modal = request.args.get("modal")
    editing = content.find_by_id(rooms, request.args.get("id", "")) if modal == "edit" else None
    return render_template(
        "rooms.html",
        rooms=rooms,
        modal=modal,
        editing=editing,
        bed_types=BED_TYPES,
        max_detail_images=MAX_DETAIL_IMAGES,
    )


@bp.post("")
@require_roles("admin")
def create() -> WsgiResponse:
    wid = content.assigned_website_id()
    if not wid:
        return redirect(url_for("rooms.index"))
    data, dropped = room_payload(request.form, request.files, None)
    if not data["name"]:
        content.failed("Missing fields", "Room name is required.")
        return redirect(url_for("rooms.index", modal="create"))
    try:
        content.website_api().add_room(wid, data)
    except ApiError as err:
        logger.warning("Failed to create room status=%s", err.status)
        return redirect(url_for("rooms.index", modal="create"))
    _limit_notice(dropped)
    content.saved("Room created", f"{data['name']} has been created.")
    return redirect(url_for("rooms.index"))


@bp.post("/<room_id>/edit")
@require_roles("admin")
def update(room_id: str) -> WsgiResponse:
    wid = content.assigned_website_id()
    if not wid:
        return redirect(url_for("rooms.index"))
    api = content.website_api()
    try:
        # Images are not round-tripped through the form; start from the stored room
        existing = content.find_by_id(unwrap(api.get_rooms(wid), "rooms", []), room_id)
        if existing is None:
            content.failed("Not Found", "That room no longer exists.")
            return redirect(url_for("rooms.index"))
        data, dropped = room_payload(request.form, request.files, existing)
        api.update_room(wid, room_id, data)
    except ApiError as err:
        logger.warning("Failed to update room status=%s", err.status)
        return redirect(url_for("rooms.index", modal="edit", id=room_id))
    _limit_notice(dropped)
    content.saved("Room updated", f"{data['name']} has been updated.")
    return redirect(url_for("rooms.index"))


@bp.post("/<room_id>/delete")
@require_roles("admin")
def delete(room_id: str) -> WsgiResponse:
    wid = content.assigned_website_id()
    if not wid:
        return redirect(url_for("rooms.index"))
    name = forms.text(request.form, "name") or "Room"
    try:
        content.website_api().delete_room(wid, room_id)
    except ApiError as err:
        logger.warning("Failed to delete room status=%s", err.status)
        return redirect(url_for("rooms.index"))
    content.saved("Room deleted", f"{name} has been deleted.")
    return redirect(url_for("rooms.index"))
