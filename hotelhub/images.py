"""Image form fields.

Most content forms embed images directly in the website document as base64
data URLs; hero sections, offers and the media library upload through the
backend instead and store the returned URL.
"""

from __future__ import annotations

import base64
from collections.abc import Iterable

from werkzeug.datastructures import FileStorage

MAX_DETAIL_IMAGES = 10
MAX_STORY_IMAGES = 20


def has_file(file: FileStorage | None) -> bool:
    return bool(file is not None and file.filename)


def to_data_url(file: FileStorage) -> str:
    raw = file.read()
    mimetype = file.mimetype or "application/octet-stream"
    return f"data:{mimetype};base64,{base64.b64encode(raw).decode('ascii')}"


def append_images(
    existing: list[str],
    files: Iterable[FileStorage],
    limit: int,
    removed: set[int] | None = None,
) -> tuple[list[str], int]:
    """Drop ``removed`` positions, then append uploads as data URLs up to ``limit``.

    Returns the new list and how many uploads were dropped for exceeding it.
    """
    images = [img for i, img in enumerate(existing) if i not in (removed or set())]
    dropped = 0
    for f in files:
        if not has_file(f):
            continue
        if len(images) >= limit:
            dropped += 1
            continue
        images.append(to_data_url(f))
    return images, dropped


def replace_image(existing: str, file: FileStorage | None, clear: bool = False) -> str:
    """New upload wins; otherwise keep ``existing`` unless the form asked to clear it."""
    if has_file(file):
        return to_data_url(file)  # type: ignore[arg-type]
    return "" if clear else existing


__all__ = ["MAX_DETAIL_IMAGES", "MAX_STORY_IMAGES", "has_file", "to_data_url", "append_images", "replace_image"]
