"""Media library: images uploaded to the backend for the admin's website."""

from __future__ import annotations

import logging

from flask import Blueprint, redirect, render_template, request, url_for
from werkzeug.wrappers.response import Response as WsgiResponse

from hotelhub import content, forms
from hotelhub.api import ImageApi, UploadApi
from hotelhub.app_authz import require_roles
from hotelhub.context import get_api_client
from hotelhub.errors import ApiError
from hotelhub.images import has_file

bp = Blueprint("media", __name__, url_prefix="/dashboard/media")

logger = logging.getLogger("hotelhub.media")


@bp.get("")
@require_roles("admin")
def index():
    wid = content.assigned_website_id()
    if not wid:
        return content.no_website("Media")
    uploads = UploadApi(get_api_client())
    files = content.fetch(lambda: uploads.list_images(wid), "images", [], "media")
    query = (request.args.get("q") or "").strip().lower()
    if query:
        files = [f for f in files if query in str(f.get("originalName") or f.get("filename") or "").lower()]
    return render_template("media.html", files=files, query=request.args.get("q", ""))


@bp.post("")
@require_roles("admin")
def upload() -> WsgiResponse:
    wid = content.assigned_website_id()
    if not wid:
        return redirect(url_for("media.index"))
    images = ImageApi(get_api_client())
    uploaded = 0
    for f in request.files.getlist("files"):
        if not has_file(f):
            continue
        try:
            images.upload(f, wid, folder="general")
        except (ApiError, ValueError) as err:
            logger.warning("Upload failed for %s: %s", f.filename, err)
            content.failed("Upload failed", f"{f.filename} could not be uploaded.")
            break
        uploaded += 1
    if uploaded:
        content.saved("Uploaded", f"{uploaded} image(s) uploaded.")
    return redirect(url_for("media.index"))


@bp.post("/delete")
@require_roles("admin")
def delete() -> WsgiResponse:
    wid = content.assigned_website_id()
    filename = forms.text(request.form, "filename")
    if not wid or not filename:
        return redirect(url_for("media.index"))
    try:
        UploadApi(get_api_client()).delete_image(filename, wid)
    except ApiError as err:
        logger.warning("Failed to delete image status=%s", err.status)
        return redirect(url_for("media.index"))
    content.saved("Deleted", f"{filename} has been deleted.")
    return redirect(url_for("media.index"))
