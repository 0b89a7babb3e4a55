"""헬스 체크 엔드포인트"""
from fastapi import APIRouter, Depends
from datetime import datetime

from src.schemas.wiki_schema import HealthResponse
from src.api.routes.wiki_routes import get_page_cache
from src.core.database import engine
from src.core.logging import logger
from src import __version__

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check(page_cache=Depends(get_page_cache)):
    """
    헬스 체크 엔드포인트

    - 서버 상태
    - 캐시 상태
    - DB(텔레메트리 저장소) 연결 상태
    """
    cache_ok = False
    db_ok = False

    try:
        cache_ok = page_cache.health_check()
    except Exception as e:
        logger.error(f"Unexpected cache error: {e}")
        cache_ok = False

    try:
        with engine.connect() as connection:
            connection.exec_driver_sql("SELECT 1")
            db_ok = True
    except Exception as e:
        logger.error(f"Database connection error: {e}")
        db_ok = False

    status = "ok" if cache_ok and db_ok else ("degraded" if cache_ok or db_ok else "error")

    return HealthResponse(
        status=status,
        timestamp=datetime.now(),
        version=__version__
    )


@router.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "service": "Wiki Mediator",
        "version": __version__,
        "docs": "/docs"
    }
