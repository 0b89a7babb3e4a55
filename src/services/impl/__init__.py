"""Services implementation package."""

from .cache_service import PageCache, RedisPageCache, create_page_cache
from .telemetry_service import TelemetryService
from .wiki_mediator import WikiMediator

__all__ = ["PageCache", "RedisPageCache", "create_page_cache", "TelemetryService", "WikiMediator"]
