"""Backend endpoint wrappers, one method per call.

Each method returns the decoded response envelope
``{"success": ..., "data": {...}, "message": ...}``; use ``unwrap`` to pull a
named member out of ``data``.
"""

from __future__ import annotations

from typing import Any

from .api_client import ApiClient


def unwrap(envelope: dict[str, Any], key: str, default: Any = None) -> Any:
    data = envelope.get("data") or {}
    if not isinstance(data, dict):
        return default
    value = data.get(key)
    return default if value is None else value


def _drop_none(params: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in params.items() if v is not None}


class AuthApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def login(self, email: str, password: str):
        return self.client.post("/auth/login", json={"email": email, "password": password}, refresh_on_401=False)

    def register(self, email: str, password: str, name: str, role: str | None = None):
        body = _drop_none({"email": email, "password": password, "name": name, "role": role})
        return self.client.post("/auth/register", json=body, refresh_on_401=False)

    def logout(self):
        # A dead token needs no refresh just to be discarded
        return self.client.post("/auth/logout", refresh_on_401=False)

    def get_me(self):
        return self.client.get("/auth/me")

    def refresh_token(self, refresh_token: str):
        return self.client.post("/auth/refresh", json={"refreshToken": refresh_token}, refresh_on_401=False)

    def forgot_password(self, email: str):
        return self.client.post("/auth/forgot-password", json={"email": email}, refresh_on_401=False)

    def reset_password(self, token: str, password: str):
        return self.client.post("/auth/reset-password", json={"token": token, "password": password}, refresh_on_401=False)

    def change_password(self, current_password: str, new_password: str):
        return self.client.post(
            "/auth/change-password",
            json={"currentPassword": current_password, "newPassword": new_password},
        )


class WebsiteApi:
    """Websites plus their embedded sub-resources."""

    def __init__(self, client: ApiClient):
        self.client = client

    def _base(self, website_id: str) -> str:
        return f"/websites/{website_id}"

    def get_all(self):
        return self.client.get("/websites")

    def get_by_id(self, website_id: str):
        return self.client.get(self._base(website_id))

    def create(self, data: dict[str, Any]):
        return self.client.post("/websites", json=data)

    def update(self, website_id: str, data: dict[str, Any]):
        return self.client.put(self._base(website_id), json=data)

    def delete(self, website_id: str):
        return self.client.delete(self._base(website_id))

    def switch(self, website_id: str):
        return self.client.post(f"{self._base(website_id)}/switch")

    def assign_admin(self, website_id: str, admin_id: str | None):
        return self.client.patch(f"{self._base(website_id)}/assign-admin", json={"adminId": admin_id})

    # rooms
    def get_rooms(self, website_id: str):
        return self.client.get(f"{self._base(website_id)}/rooms")

    def add_room(self, website_id: str, data: dict[str, Any]):
        return self.client.post(f"{self._base(website_id)}/rooms", json=data)

    def update_room(self, website_id: str, room_id: str, data: dict[str, Any]):
        return self.client.put(f"{self._base(website_id)}/rooms/{room_id}", json=data)

    def delete_room(self, website_id: str, room_id: str):
        return self.client.delete(f"{self._base(website_id)}/rooms/{room_id}")

    # hero sections: one per page, saved by upsert
    def get_hero_sections(self, website_id: str):
        return self.client.get(f"{self._base(website_id)}/hero-sections")

    def upsert_hero_section(self, website_id: str, data: dict[str, Any]):
        return self.client.post(f"{self._base(website_id)}/hero-sections", json=data)

    def delete_hero_section(self, website_id: str, hero_id: str):
        return self.client.delete(f"{self._base(website_id)}/hero-sections/{hero_id}")

    # single embedded objects
    def get_site_settings(self, website_id: str):
        return self.client.get(f"{self._base(website_id)}/site-settings")

    def update_site_settings(self, website_id: str, data: dict[str, Any]):
        return self.client.put(f"{self._base(website_id)}/site-settings", json=data)

    def get_our_story(self, website_id: str):
        return self.client.get(f"{self._base(website_id)}/our-story")

    def update_our_story(self, website_id: str, data: dict[str, Any]):
        return self.client.put(f"{self._base(website_id)}/our-story", json=data)

    def get_contact_info(self, website_id: str):
        return self.client.get(f"{self._base(website_id)}/contact-info")

    def update_contact_info(self, website_id: str, data: dict[str, Any]):
        return self.client.put(f"{self._base(website_id)}/contact-info", json=data)

    def get_offer(self, website_id: str):
        return self.client.get(f"{self._base(website_id)}/offer")

    def update_offer(self, website_id: str, data: dict[str, Any]):
        return self.client.put(f"{self._base(website_id)}/offer", json=data)

    def delete_offer(self, website_id: str):
        return self.client.delete(f"{self._base(website_id)}/offer")

    # facilities
    def get_facilities(self, website_id: str):
        return self.client.get(f"{self._base(website_id)}/facilities")

    def add_facility(self, website_id: str, data: dict[str, Any]):
        return self.client.post(f"{self._base(website_id)}/facilities", json=data)

    def update_facility(self, website_id: str, facility_id: str, data: dict[str, Any]):
        return self.client.put(f"{self._base(website_id)}/facilities/{facility_id}", json=data)

    def delete_facility(self, website_id: str, facility_id: str):
        return self.client.delete(f"{self._base(website_id)}/facilities/{facility_id}")

    # reviews
    def get_reviews(self, website_id: str):
        return self.client.get(f"{self._base(website_id)}/reviews")

    def add_review(self, website_id: str, data: dict[str, Any]):
        return self.client.post(f"{self._base(website_id)}/reviews", json=data)

    def update_review(self, website_id: str, review_id: str, data: dict[str, Any]):
        return self.client.put(f"{self._base(website_id)}/reviews/{review_id}", json=data)

    def delete_review(self, website_id: str, review_id: str):
        return self.client.delete(f"{self._base(website_id)}/reviews/{review_id}")

    # contact-form inbox
    def get_contact_messages(self, website_id: str, page: int = 1, limit: int = 15):
        return self.client.get(f"{self._base(website_id)}/contact-messages", params={"page": page, "limit": limit})

    def toggle_message_read(self, website_id: str, message_id: str):
        return self.client.patch(f"{self._base(website_id)}/contact-messages/{message_id}/read")

    def delete_contact_message(self, website_id: str, message_id: str):
        return self.client.delete(f"{self._base(website_id)}/contact-messages/{message_id}")


class UserApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def get_all(self, role: str | None = None, is_active: bool | None = None, search: str | None = None):
        params = _drop_none({"role": role, "isActive": is_active, "search": search or None})
        return self.client.get("/users", params=params or None)

    def get_by_id(self, user_id: str):
        return self.client.get(f"/users/{user_id}")

    def create(self, data: dict[str, Any]):
        return self.client.post("/users", json=data)

    def update(self, user_id: str, data: dict[str, Any]):
        return self.client.put(f"/users/{user_id}", json=data)

    def delete(self, user_id: str):
        return self.client.delete(f"/users/{user_id}")

    def update_permissions(self, user_id: str, data: dict[str, Any]):
        return self.client.patch(f"/users/{user_id}/permissions", json=data)

    def toggle_status(self, user_id: str):
        return self.client.patch(f"/users/{user_id}/toggle-status")


class UploadApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def upload_image(self, files: Any, data: dict[str, Any] | None = None):
        return self.client.post("/upload/image", files=files, data=data)

    def upload_multiple(self, files: Any, data: dict[str, Any] | None = None):
        return self.client.post("/upload/multiple", files=files, data=data)

    def upload_gallery(self, files: Any, data: dict[str, Any] | None = None):
        return self.client.post("/upload/gallery", files=files, data=data)

    def delete_image(self, filename: str, website_id: str | None = None):
        return self.client.delete(f"/upload/{filename}", params=_drop_none({"websiteId": website_id}) or None)

    def list_images(self, website_id: str):
        return self.client.get(f"/upload/list/{website_id}")


class ImageApi:
    """Single-image upload returning the stored URL."""

    def __init__(self, client: ApiClient):
        self.uploads = UploadApi(client)

    def upload(self, file: Any, website_id: str, folder: str = "general") -> str:
        filename = getattr(file, "filename", None) or "image"
        mimetype = getattr(file, "mimetype", None) or "application/octet-stream"
        # Bytes, not the stream: a refresh-and-replay must resend the same body
        content = getattr(file, "stream", file).read()
        envelope = self.uploads.upload_image(
            files={"image": (filename, content, mimetype)},
            data={"websiteId": website_id, "folder": folder},
        )
        url = unwrap(envelope, "url") or unwrap(envelope, "imageUrl")
        if not url:
            raise ValueError("upload response carried no image url")
        return str(url)


class PublicApi:
    """Unauthenticated lookups used by the hotel sites themselves."""

    def __init__(self, client: ApiClient):
        self.client = client

    def get_website_by_unique_id(self, unique_id: str):
        return self.client.get(f"/public/website/{unique_id}", refresh_on_401=False)


__all__ = ["AuthApi", "WebsiteApi", "UserApi", "UploadApi", "ImageApi", "PublicApi", "unwrap"]
