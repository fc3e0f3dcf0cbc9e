"""Operator roles.

CanonicalRole: the two roles the dashboard authorizes on.
AppRole: alternate spellings some backend deployments emit for the same roles.
"""

from __future__ import annotations

from typing import Literal

CanonicalRole = Literal["super_admin", "admin"]
AppRole = Literal["superadmin", "superuser", "site_admin"]
RoleLike = CanonicalRole | AppRole

ROLE_MAP: dict[AppRole, CanonicalRole] = {
    "superadmin": "super_admin",
    "superuser": "super_admin",
    "site_admin": "admin",
}

ROLE_LABELS: dict[CanonicalRole, str] = {
    "super_admin": "Super Admin",
    "admin": "Admin",
}


def to_canonical(role: str | None) -> CanonicalRole | None:
    if not role:
        return None
    if role in ROLE_MAP:
        return ROLE_MAP[role]  # type: ignore[index]
    if role in ("super_admin", "admin"):
        return role  # type: ignore[return-value]
    return None


def role_label(role: str | None) -> str:
    canonical = to_canonical(role)
    return ROLE_LABELS.get(canonical, role or "") if canonical else (role or "")


__all__ = ["CanonicalRole", "AppRole", "RoleLike", "ROLE_MAP", "ROLE_LABELS", "to_canonical", "role_label"]
