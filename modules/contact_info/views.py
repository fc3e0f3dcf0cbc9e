from __future__ import annotations

import logging

from flask import Blueprint, redirect, render_template, request, url_for
from werkzeug.wrappers.response import Response as WsgiResponse

from hotelhub import content, forms
from hotelhub.app_authz import require_roles
from hotelhub.errors import ApiError

bp = Blueprint("contact_info", __name__, url_prefix="/dashboard/contact-info")

logger = logging.getLogger("hotelhub.contact_info")

FIELDS = ("location", "email", "number", "facebook", "instagram", "linkedin")


@bp.get("")
@require_roles("admin")
def index():
    wid = content.assigned_website_id()
    if not wid:
        return content.no_website("Contact Info")
    api = content.website_api()
    info = content.fetch(lambda: api.get_contact_info(wid), "contactInfo", {}, "contact info")
    return render_template("contact_info.html", info=info, fields=FIELDS)


@bp.post("")
@require_roles("admin")
def save() -> WsgiResponse:
    wid = content.assigned_website_id()
    if not wid:
        return redirect(url_for("contact_info.index"))
    try:
        content.website_api().update_contact_info(wid, {f: forms.text(request.form, f) for f in FIELDS})
    except ApiError as err:
        logger.warning("Failed to save contact info status=%s", err.status)
        return redirect(url_for("contact_info.index"))
    content.saved("Saved", "Contact info updated successfully.")
    return redirect(url_for("contact_info.index"))
