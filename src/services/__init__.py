"""비즈니스 로직 서비스 - export only."""

from .impl import PageCache, RedisPageCache, TelemetryService, WikiMediator, create_page_cache

__all__ = ["PageCache", "RedisPageCache", "TelemetryService", "WikiMediator", "create_page_cache"]
