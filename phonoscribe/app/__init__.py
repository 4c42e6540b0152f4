"""Application facade and text-level services."""

from .app import PhonoscribeApp, create_default_registry, get_default_app

__all__ = ["PhonoscribeApp", "create_default_registry", "get_default_app"]
