"""사용 통계 API"""
from fastapi import APIRouter, Depends, HTTPException

from src.api.routes.wiki_routes import get_mediator, get_telemetry_service
from src.core.logging import logger
from src.core.security import SecurityValidator, log_request
from src.schemas.wiki_schema import PeakLoadResponse, SnapshotResponse, TitleListResponse
from src.services.impl.telemetry_service import TelemetryService
from src.services.impl.wiki_mediator import WikiMediator

stats_router = APIRouter(prefix="/api/v1/stats", tags=["stats"], dependencies=[Depends(log_request)])


def _check_limit(limit: int) -> None:
    try:
        SecurityValidator.validate_limit(limit)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@stats_router.get("/zeitgeist", response_model=TitleListResponse)
def zeitgeist(limit: int = 10, mediator: WikiMediator = Depends(get_mediator)):
    """전체 기간 인기 검색어"""
    _check_limit(limit)
    return TitleListResponse(status="success", items=mediator.zeitgeist(limit))


@stats_router.get("/trending", response_model=TitleListResponse)
def trending(limit: int = 10, mediator: WikiMediator = Depends(get_mediator)):
    """최근 30초 인기 검색어"""
    _check_limit(limit)
    return TitleListResponse(status="success", items=mediator.trending(limit))


@stats_router.get("/peak-load", response_model=PeakLoadResponse)
def peak_load(mediator: WikiMediator = Depends(get_mediator)):
    """임의의 30초 구간 최대 요청 수"""
    return PeakLoadResponse(peak_load_30s=mediator.peak_load_30s())


@stats_router.post("/snapshot", response_model=SnapshotResponse)
def save_snapshot(telemetry: TelemetryService = Depends(get_telemetry_service)):
    """
    텔레메트리 저장

    Return:
    {
        "status": "success" | "partial",
        "records": {"terms": true, "invocations": true, "start_time": true}
    }
    """
    records = telemetry.save_all()
    status = "success" if all(records.values()) else "partial"
    logger.info(f"[API] Telemetry snapshot: {status}")
    return SnapshotResponse(status=status, records=records)


@stats_router.post("/restore", response_model=SnapshotResponse)
def restore_snapshot(telemetry: TelemetryService = Depends(get_telemetry_service)):
    """텔레메트리 복원 (실패한 레코드는 메모리 상태 유지)"""
    records = telemetry.load_all()
    status = "success" if all(records.values()) else "partial"
    logger.info(f"[API] Telemetry restore: {status}")
    return SnapshotResponse(status=status, records=records)
