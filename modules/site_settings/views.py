from __future__ import annotations

import logging

from flask import Blueprint, redirect, render_template, request, url_for
from werkzeug.wrappers.response import Response as WsgiResponse

from hotelhub import content, forms
from hotelhub.api import unwrap
from hotelhub.app_authz import require_roles
from hotelhub.errors import ApiError
from hotelhub.images import replace_image

bp = Blueprint("site_settings", __name__, url_prefix="/dashboard/site-settings")

logger = logging.getLogger("hotelhub.site_settings")


@bp.get("")
@require_roles("admin")
def index():
    wid = content.assigned_website_id()
    if not wid:
        return content.no_website("Site Settings")
    api = content.website_api()
    settings = content.fetch(lambda: api.get_site_settings(wid), "siteSettings", {}, "site settings")
    return render_template("site_settings.html", settings=settings)


@bp.post("")
@require_roles("admin")
def save() -> WsgiResponse:
    wid = content.assigned_website_id()
    if not wid:
        return redirect(url_for("site_settings.index"))
    api = content.website_api()
    try:
        existing = unwrap(api.get_site_settings(wid), "siteSettings", {})
        api.update_site_settings(
            wid,
            {
                "logo": replace_image(
                    existing.get("logo") or "", request.files.get("logo"), forms.checkbox(request.form, "clearLogo")
                ),
                "footerLogo": replace_image(
                    existing.get("footerLogo") or "",
                    request.files.get("footerLogo"),
                    forms.checkbox(request.form, "clearFooterLogo"),
                ),
                "footerDescription": forms.text(request.form, "footerDescription"),
            },
        )
    except ApiError as err:
        logger.warning("Failed to save site settings status=%s", err.status)
        return redirect(url_for("site_settings.index"))
    content.saved("Saved", "Site settings updated successfully.")
    return redirect(url_for("site_settings.index"))
