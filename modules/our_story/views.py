from __future__ import annotations

import logging

from flask import Blueprint, redirect, render_template, request, url_for
from werkzeug.wrappers.response import Response as WsgiResponse

from hotelhub import content, forms
from hotelhub.api import unwrap
from hotelhub.app_authz import require_roles
from hotelhub.errors import ApiError
from hotelhub.images import MAX_STORY_IMAGES, append_images

bp = Blueprint("our_story", __name__, url_prefix="/dashboard/our-story")

logger = logging.getLogger("hotelhub.our_story")


@bp.get("")
@require_roles("admin")
def index():
    wid = content.assigned_website_id()
    if not wid:
        return content.no_website("Our Story")
    api = content.website_api()
    story = content.fetch(lambda: api.get_our_story(wid), "ourStory", {}, "our story")
    return render_template("our_story.html", story=story, max_images=MAX_STORY_IMAGES)


@bp.post("")
@require_roles("admin")
def save() -> WsgiResponse:
    wid = content.assigned_website_id()
    if not wid:
        return redirect(url_for("our_story.index"))
    api = content.website_api()
    try:
        existing = unwrap(api.get_our_story(wid), "ourStory", {})
        images, dropped = append_images(
            list(existing.get("images") or []),
            request.files.getlist("images"),
            MAX_STORY_IMAGES,
            forms.removed_indexes(request.form, "removeImage"),
        )
        api.update_our_story(
            wid,
            {
                "title": forms.text(request.form, "title"),
                "subTitle": forms.text(request.form, "subTitle"),
                "percentage": forms.text(request.form, "percentage"),
                "suites": forms.text(request.form, "suites"),
                "images": images,
            },
        )
    except ApiError as err:
        logger.warning("Failed to save our story status=%s", err.status)
        content.failed("Error", "Failed to save Our Story.")
        return redirect(url_for("our_story.index"))
    if dropped:
        content.failed("Limit reached", f"Maximum {MAX_STORY_IMAGES} images allowed")
    content.saved("Saved", "Our Story has been updated.")
    return redirect(url_for("our_story.index"))
