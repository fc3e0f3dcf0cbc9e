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

bp = Blueprint("reviews", __name__, url_prefix="/dashboard/reviews")

logger = logging.getLogger("hotelhub.reviews")


def review_payload(form: Any, files: Any, existing: dict[str, Any] | None) -> dict[str, Any]:
    return {
        "name": forms.text(form, "name"),
        "review": forms.text(form, "review"),
        "rating": forms.integer(form, "rating", 5, lo=1, hi=5),
        "avatar": replace_image((existing or {}).get("avatar") or "", files.get("avatar")),
    }


@bp.get("")
@require_roles("admin")
def index():
    wid = content.assigned_website_id()
    if not wid:
        return content.no_website("Reviews")
    api = content.website_api()
    reviews = content.fetch(lambda: api.get_reviews(wid), "reviews", [], "reviews")
    modal = request.args.get("modal")
    return render_template(
        "reviews.html",
        reviews=reviews,
        modal=modal,
        editing=content.find_by_id(reviews, request.args.get("id", "")) if modal == "edit" else None,
    )


@bp.post("")
@require_roles("admin")
def create() -> WsgiResponse:
    wid = content.assigned_website_id()
    if not wid:
        return redirect(url_for("reviews.index"))
    data = review_payload(request.form, request.files, None)
    if not data["name"] or not data["review"]:
        content.failed("Missing fields", "Name and review are required.")
        return redirect(url_for("reviews.index", modal="create"))
    try:
        content.website_api().add_review(wid, data)
    except ApiError as err:
        logger.warning("Failed to create review status=%s", err.status)
        return redirect(url_for("reviews.index", modal="create"))
    content.saved("Created", "Review has been created.")
    return redirect(url_for("reviews.index"))


@bp.post("/<review_id>/edit")
@require_roles("admin")
def update(review_id: str) -> WsgiResponse:
    wid = content.assigned_website_id()
    if not wid:
        return redirect(url_for("reviews.index"))
    api = content.website_api()
    try:
        existing = content.find_by_id(unwrap(api.get_reviews(wid), "reviews", []), review_id)
        api.update_review(wid, review_id, review_payload(request.form, request.files, existing))
    except ApiError as err:
        logger.warning("Failed to update review status=%s", err.status)
        return redirect(url_for("reviews.index", modal="edit", id=review_id))
    content.saved("Updated", "Review has been updated.")
    return redirect(url_for("reviews.index"))


@bp.post("/<review_id>/delete")
@require_roles("admin")
def delete(review_id: str) -> WsgiResponse:
    wid = content.assigned_website_id()
    if not wid:
        return redirect(url_for("reviews.index"))
    name = forms.text(request.form, "name")
    try:
        content.website_api().delete_review(wid, review_id)
    except ApiError as err:
        logger.warning("Failed to delete review status=%s", err.status)
        return redirect(url_for("reviews.index"))
    content.saved("Deleted", f'Review by "{name}" has been deleted.')
    return redirect(url_for("reviews.index"))
