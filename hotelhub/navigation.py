"""Sidebar navigation, filtered by role and by the enabled content modules."""

from __future__ import annotations

from dataclasses import dataclass

from flask import current_app, url_for

from .roles import to_canonical


@dataclass(frozen=True)
class NavItem:
    title: str
    endpoint: str
    roles: tuple[str, ...]
    icon: str = ""
    module: str | None = None


MENU_ITEMS: tuple[NavItem, ...] = (
    NavItem("Dashboard", "dashboard.dashboard_home", ("super_admin", "admin"), "▦"),
    NavItem("Websites", "admin_ui.websites", ("super_admin",), "🌐"),
    NavItem("Rooms", "rooms.index", ("admin",), "🛏", "rooms"),
    NavItem("Hero Sections", "hero_sections.index", ("admin",), "🖼", "hero_sections"),
    NavItem("Site Settings", "site_settings.index", ("admin",), "🎨", "site_settings"),
    NavItem("Our Story", "our_story.index", ("admin",), "📖", "our_story"),
    NavItem("Facilities", "facilities.index", ("admin",), "🏢", "facilities"),
    NavItem("Reviews", "reviews.index", ("admin",), "★", "reviews"),
    NavItem("Offers", "offers.index", ("admin",), "🏷", "offers"),
    NavItem("Contact Info", "contact_info.index", ("admin",), "☎", "contact_info"),
    NavItem("Emails", "emails.index", ("admin",), "✉", "emails"),
    NavItem("Media", "media.index", ("admin",), "🗂", "media"),
    NavItem("Users", "admin_ui.users", ("super_admin",), "👥"),
)


def nav_items_for(role: str | None) -> list[dict[str, str]]:
    canonical = to_canonical(role)
    if canonical is None:
        return []
    registered = current_app.blueprints
    items = []
    for item in MENU_ITEMS:
        if canonical not in item.roles:
            continue
        if item.module and item.module not in registered:
            continue
        items.append({"title": item.title, "url": url_for(item.endpoint), "endpoint": item.endpoint, "icon": item.icon})
    return items


__all__ = ["NavItem", "MENU_ITEMS", "nav_items_for"]
