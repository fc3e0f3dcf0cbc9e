from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_API_URL = "http://localhost:5000/api"

# Content modules registered by the app factory, in sidebar order.
ALL_CONTENT_MODULES = [
    "rooms",
    "hero_sections",
    "site_settings",
    "our_story",
    "facilities",
    "reviews",
    "offers",
    "contact_info",
    "emails",
    "media",
]


@dataclass
class Config:
    secret_key: str = "change-me"
    api_base_url: str = DEFAULT_API_URL
    api_timeout_seconds: float = 10.0
    session_expired_redirect_delay: float = 1.5
    messages_page_size: int = 15
    default_enabled_modules: list[str] = field(default_factory=lambda: list(ALL_CONTENT_MODULES))
    metrics_backend: str = "noop"
    strict_csrf_env: bool = False

    @classmethod
    def from_env(cls) -> Config:
        mods = os.getenv("DEFAULT_ENABLED_MODULES", ",".join(ALL_CONTENT_MODULES))
        # HOTELHUB_API_URL wins; API_URL kept for deployments sharing one .env with the backend
        api_url = os.getenv("HOTELHUB_API_URL") or os.getenv("API_URL") or DEFAULT_API_URL
        return cls(
            secret_key=os.getenv("SECRET_KEY", "change-me"),
            api_base_url=api_url.rstrip("/"),
            api_timeout_seconds=float(os.getenv("API_TIMEOUT_SECONDS", "10")),
            session_expired_redirect_delay=float(os.getenv("SESSION_EXPIRED_REDIRECT_DELAY", "1.5")),
            messages_page_size=int(os.getenv("MESSAGES_PAGE_SIZE", "15")),
            default_enabled_modules=[m.strip() for m in mods.split(",") if m.strip()],
            metrics_backend=os.getenv("METRICS_BACKEND", "noop"),
            strict_csrf_env=bool(int(os.getenv("HOTELHUB_STRICT_CSRF", "0"))),
        )

    def override(self, d: dict):
        for k, v in d.items():
            if hasattr(self, k):
                setattr(self, k, v)

    def to_flask_dict(self):
        return {
            "SECRET_KEY": self.secret_key,
            "API_BASE_URL": self.api_base_url.rstrip("/"),
            "API_TIMEOUT_SECONDS": self.api_timeout_seconds,
            "SESSION_EXPIRED_REDIRECT_DELAY": self.session_expired_redirect_delay,
            "MESSAGES_PAGE_SIZE": self.messages_page_size,
            "ENABLED_MODULES": list(self.default_enabled_modules),
            "METRICS_BACKEND": self.metrics_backend,
            "HOTELHUB_STRICT_CSRF": self.strict_csrf_env,
            "STRICT_CSRF_IN_TESTS": bool(int(os.getenv("STRICT_CSRF_IN_TESTS", "0"))),
            # Tokens ride in the session cookie; keep it out of reach of page scripts
            "SESSION_COOKIE_HTTPONLY": True,
            "SESSION_COOKIE_SAMESITE": "Lax",
        }
