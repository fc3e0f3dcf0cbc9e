"""HotelHub dashboard: admin front end for the multi-tenant hotel website backend."""

from .app_factory import create_app

__all__ = ["create_app"]
