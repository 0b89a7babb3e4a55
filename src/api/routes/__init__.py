"""API routes package."""

from .health_routes import router as health_router
from .wiki_routes import router as wiki_router, get_page_cache, get_mediator, get_telemetry_service
from .stats_routes import stats_router

__all__ = [
    "health_router",
    "wiki_router",
    "stats_router",
    "get_page_cache",
    "get_mediator",
    "get_telemetry_service",
]
