"""Toast notifications.

Views and the API client report user-facing outcomes as toasts. In a request
they are queued through Flask's flash() and rendered by the layout; outside a
request (scripts, tests) they are collected in memory.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

from flask import flash, has_request_context

Variant = Literal["default", "success", "destructive"]

# flash() category per toast variant; templates style on these names
FLASH_CATEGORIES: dict[str, str] = {
    "default": "info",
    "success": "success",
    "destructive": "danger",
}


@dataclass(frozen=True)
class Toast:
    title: str
    description: str = ""
    variant: Variant = "default"

    @property
    def category(self) -> str:
        return FLASH_CATEGORIES.get(self.variant, "info")


class Notifier(Protocol):
    def notify(self, toast: Toast) -> None: ...


class FlashNotifier:
    def notify(self, toast: Toast) -> None:
        if not has_request_context():
            return
        message = f"{toast.title}: {toast.description}" if toast.description else toast.title
        flash(message, toast.category)


class CollectingNotifier:
    def __init__(self) -> None:
        self.toasts: list[Toast] = []

    def notify(self, toast: Toast) -> None:
        self.toasts.append(toast)

    def titles(self) -> list[str]:
        return [t.title for t in self.toasts]


def success(title: str, description: str = "") -> Toast:
    return Toast(title, description, "success")


def destructive(title: str, description: str = "") -> Toast:
    return Toast(title, description, "destructive")


__all__ = [
    "Toast",
    "Notifier",
    "FlashNotifier",
    "CollectingNotifier",
    "FLASH_CATEGORIES",
    "success",
    "destructive",
]
