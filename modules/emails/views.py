"""Contact-form inbox for the admin's website."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, redirect, render_template, request, url_for
from werkzeug.wrappers.response import Response as WsgiResponse

from hotelhub import content, forms
from hotelhub.api import unwrap
from hotelhub.app_authz import require_roles
from hotelhub.errors import ApiError

bp = Blueprint("emails", __name__, url_prefix="/dashboard/emails")

logger = logging.getLogger("hotelhub.emails")


def _page() -> int:
    return forms.integer(request.values, "page", 1, lo=1)


@bp.get("")
@require_roles("admin")
def index():
    wid = content.assigned_website_id()
    if not wid:
        return content.no_website("Emails")
    page = _page()
    limit = int(current_app.config.get("MESSAGES_PAGE_SIZE", 15))
    messages: list = []
    total_pages = 1
    total_count = 0
    try:
        envelope = content.website_api().get_contact_messages(wid, page=page, limit=limit)
    except ApiError as err:
        logger.warning("Failed to fetch messages status=%s", err.status)
    else:
        # Pagination counters ride at the top level of the envelope
        messages = unwrap(envelope, "messages", [])
        if not isinstance(messages, list):
            messages = []
        total_pages = int(envelope.get("totalPages") or 1)
        total_count = int(envelope.get("totalCount") or 0)
    return render_template(
        "emails.html",
        messages=messages,
        page=page,
        total_pages=total_pages,
        total_count=total_count,
        unread=sum(1 for m in messages if not m.get("isRead")),
    )


@bp.post("/<message_id>/read")
@require_roles("admin")
def toggle_read(message_id: str) -> WsgiResponse:
    wid = content.assigned_website_id()
    if wid:
        try:
            content.website_api().toggle_message_read(wid, message_id)
        except ApiError as err:
            logger.warning("Failed to toggle read status=%s", err.status)
    return redirect(url_for("emails.index", page=_page()))


@bp.post("/<message_id>/delete")
@require_roles("admin")
def delete(message_id: str) -> WsgiResponse:
    wid = content.assigned_website_id()
    if not wid:
        return redirect(url_for("emails.index"))
    try:
        content.website_api().delete_contact_message(wid, message_id)
    except ApiError as err:
        logger.warning("Failed to delete message status=%s", err.status)
        return redirect(url_for("emails.index", page=_page()))
    content.saved("Deleted", "Message deleted successfully.")
    return redirect(url_for("emails.index", page=_page()))
