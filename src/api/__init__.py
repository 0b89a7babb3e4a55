"""API 엔드포인트 패키지 - export only."""

from .routes import (
    health_router,
    wiki_router,
    stats_router,
    get_page_cache,
    get_mediator,
    get_telemetry_service,
)

__all__ = [
    "health_router",
    "wiki_router",
    "stats_router",
    "get_page_cache",
    "get_mediator",
    "get_telemetry_service",
]
