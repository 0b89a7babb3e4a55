"""FastAPI 앱 팩토리"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from src.core.config import settings
from src.core.database import init_db
from src.core.exceptions import DatabaseException
from src.core.logging import logger
from src.api import health_router, wiki_router, stats_router
from src.api import get_page_cache, get_mediator, get_telemetry_service
from src.scheduler.telemetry_snapshot import TelemetrySnapshotScheduler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기"""
    logger.info("Starting application...")
    try:
        init_db()
    except DatabaseException as e:
        # 텔레메트리 저장소 없이도 중계 기능은 계속 제공 (저장/복원은 False 보고)
        logger.error(f"Telemetry store unavailable, continuing without it: {e}")

    telemetry = get_telemetry_service(get_mediator(get_page_cache()))
    if settings.telemetry_load_on_startup:
        logger.info(f"Telemetry restored: {telemetry.load_all()}")

    scheduler = TelemetrySnapshotScheduler(telemetry)
    scheduler.start()
    logger.info("Application started")
    yield
    logger.info("Shutting down application...")
    scheduler.shutdown()
    if settings.telemetry_autosave_seconds > 0:
        telemetry.save_all()
    try:
        from src.crawlers.wiki_client import shutdown_shared_wiki_client
        shutdown_shared_wiki_client()
    except Exception as e:
        # 종료 훅에서의 예외는 앱 종료를 막지 않음
        logger.warning(f"Wiki client shutdown failed: {e}")


def create_app() -> FastAPI:
    """
    FastAPI 앱 생성 (Factory Pattern)

    Returns:
        FastAPI 앱 인스턴스
    """
    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 라우터 등록
    app.include_router(health_router)
    app.include_router(wiki_router)
    app.include_router(stats_router)

    return app

# 앱 인스턴스 생성 (uvicorn이 로드할 수 있도록)
app = create_app()
