"""StockQuest game core: typed event bus, event catalog and storage."""

from .settings import Settings, get_settings  # noqa: F401

__all__ = ["get_settings", "Settings"]
