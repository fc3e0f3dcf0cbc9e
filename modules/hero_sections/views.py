from __future__ import annotations

import logging

from flask import Blueprint, redirect, render_template, request, url_for
from werkzeug.wrappers.response import Response as WsgiResponse

from hotelhub import content, forms
from hotelhub.api import ImageApi
from hotelhub.app_authz import require_roles
from hotelhub.context import get_api_client
from hotelhub.errors import ApiError
from hotelhub.images import has_file

bp = Blueprint("hero_sections", __name__, url_prefix="/dashboard/hero-sections")

logger = logging.getLogger("hotelhub.hero_sections")

# One hero section per public page, saved by upsert on ``page``
PAGE_OPTIONS: tuple[tuple[str, str, str], ...] = (
    ("home", "Home", "Main landing page hero banner"),
    ("facilities", "Facilities", "Hotel facilities & amenities page"),
    ("about", "About", "About us page hero section"),
    ("contact", "Contact", "Contact page hero section"),
    ("room", "Rooms", "Rooms listing page hero"),
    ("roomdetails", "Room Details", "Individual room detail page hero"),
    ("location", "Location", "Location / map page hero"),
    ("dining", "Dining", "Restaurant & dining page hero"),
)
PAGE_LABELS = {value: label for value, label, _ in PAGE_OPTIONS}


@bp.get("")
@require_roles("admin")
def index():
    wid = content.assigned_website_id()
    if not wid:
        return content.no_website("Hero Sections")
    api = content.website_api()
    sections = content.fetch(lambda: api.get_hero_sections(wid), "heroSections", [], "hero sections")
    by_page = {s.get("page"): s for s in sections if isinstance(s, dict)}
    return render_template(
        "hero_sections.html",
        pages=PAGE_OPTIONS,
        by_page=by_page,
        editing=request.args.get("page") if request.args.get("page") in PAGE_LABELS else None,
    )


@bp.post("/<page>")
@require_roles("admin")
def save(page: str) -> WsgiResponse:
    wid = content.assigned_website_id()
    if not wid or page not in PAGE_LABELS:
        return redirect(url_for("hero_sections.index"))
    image = forms.text(request.form, "existing_image")
    upload = request.files.get("image")
    if has_file(upload):
        try:
            image = ImageApi(get_api_client()).upload(upload, wid, folder="hero")
        except (ApiError, ValueError) as err:
            logger.warning("Hero image upload failed: %s", err)
            content.failed("Error", "Failed to upload image")
            return redirect(url_for("hero_sections.index", page=page))
    data = {
        "page": page,
        "image": image,
        "text": forms.text(request.form, "text"),
        "subText": forms.text(request.form, "subText"),
        "detailsText": forms.text(request.form, "detailsText"),
        "isActive": forms.checkbox(request.form, "isActive"),
    }
    try:
        content.website_api().upsert_hero_section(wid, data)
    except ApiError as err:
        logger.warning("Failed to save hero section status=%s", err.status)
        return redirect(url_for("hero_sections.index", page=page))
    content.saved("Saved", f'Hero section for "{PAGE_LABELS[page]}" saved.')
    return redirect(url_for("hero_sections.index"))


@bp.post("/<page>/delete")
@require_roles("admin")
def delete(page: str) -> WsgiResponse:
    wid = content.assigned_website_id()
    hero_id = forms.text(request.form, "hero_id")
    if not wid or not hero_id:
        return redirect(url_for("hero_sections.index"))
    try:
        content.website_api().delete_hero_section(wid, hero_id)
    except ApiError as err:
        logger.warning("Failed to delete hero section status=%s", err.status)
        return redirect(url_for("hero_sections.index"))
    content.saved("Deleted", f'Hero section for "{PAGE_LABELS.get(page, page)}" deleted.')
    return redirect(url_for("hero_sections.index"))
