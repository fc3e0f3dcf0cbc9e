from __future__ import annotations

import logging

from flask import Blueprint, redirect, render_template, request, url_for
from werkzeug.wrappers.response import Response as WsgiResponse

from hotelhub import content, forms
from hotelhub.api import ImageApi, unwrap
from hotelhub.app_authz import require_roles
from hotelhub.context import get_api_client
from hotelhub.errors import ApiError
from hotelhub.images import has_file

bp = Blueprint("offers", __name__, url_prefix="/dashboard/offers")

logger = logging.getLogger("hotelhub.offers")


@bp.get("")
@require_roles("admin")
def index():
    wid = content.assigned_website_id()
    if not wid:
        return content.no_website("Offers")
    api = content.website_api()
    try:
        offer = unwrap(api.get_offer(wid), "offer")
    except ApiError as err:
        # 404 just means no offer yet; the client already toasted anything worse
        logger.info("No offer loaded status=%s", err.status)
        offer = None
    return render_template("offers.html", offer=offer)


@bp.post("")
@require_roles("admin")
def save() -> WsgiResponse:
    wid = content.assigned_website_id()
    if not wid:
        return redirect(url_for("offers.index"))
    image = forms.text(request.form, "existing_image")
    upload = request.files.get("offer_image")
    if has_file(upload):
        try:
            image = ImageApi(get_api_client()).upload(upload, wid, folder="offers")
        except (ApiError, ValueError) as err:
            logger.warning("Offer image upload failed: %s", err)
            content.failed("Error", "Failed to upload image")
            return redirect(url_for("offers.index"))
    data = {
        "title": forms.text(request.form, "title"),
        "subtitle": forms.text(request.form, "subtitle"),
        "offer_available": forms.checkbox(request.form, "offer_available"),
        "offer_percentage": forms.integer(request.form, "offer_percentage", 0, lo=0, hi=100),
        "offer_image": image,
    }
    try:
        content.website_api().update_offer(wid, data)
    except ApiError as err:
        logger.warning("Failed to save offer status=%s", err.status)
        content.failed("Error", "Failed to save offer")
        return redirect(url_for("offers.index"))
    content.saved("Success", "Offer saved successfully")
    return redirect(url_for("offers.index"))


@bp.post("/delete")
@require_roles("admin")
def delete() -> WsgiResponse:
    wid = content.assigned_website_id()
    if not wid:
        return redirect(url_for("offers.index"))
    try:
        content.website_api().delete_offer(wid)
    except ApiError as err:
        logger.warning("Failed to delete offer status=%s", err.status)
        content.failed("Error", "Failed to delete offer")
        return redirect(url_for("offers.index"))
    content.saved("Success", "Offer deleted successfully")
    return redirect(url_for("offers.index"))
