"""Wiki Routes - WikiMediator 진입점을 HTTP로 노출

HTTP Layer는 입력 검증 후 WikiMediator로 위임하는 Translator 역할만 수행합니다.
WikiMediator는 동기(blocking) 서비스이므로 핸들러는 def로 두어 threadpool에서 실행됩니다.
검증에 실패한 요청(HTTP 400)은 WikiMediator에 도달하지 않으므로 호출 기록에 남지 않습니다.
"""

import threading
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from src.core.exceptions import ContentSourceException
from src.core.logging import logger, sanitize_for_log
from src.core.security import SecurityValidator, log_request
from src.crawlers.wiki_client import get_shared_wiki_client
from src.schemas.wiki_schema import (
    PageResponse,
    PathResponse,
    QueryRequest,
    TitleListResponse,
)
from src.services.impl.cache_service import create_page_cache
from src.services.impl.telemetry_service import TelemetryService
from src.services.impl.wiki_mediator import WikiMediator

router = APIRouter(prefix="/api/v1/wiki", tags=["wiki"], dependencies=[Depends(log_request)])

# 싱글톤 서비스
_singleton_lock = threading.Lock()
_page_cache = None
_mediator: Optional[WikiMediator] = None
_telemetry: Optional[TelemetryService] = None


def get_page_cache():
    """페이지 캐시 싱글톤"""
    global _page_cache
    with _singleton_lock:
        if _page_cache is None:
            _page_cache = create_page_cache()
        return _page_cache


def get_mediator(page_cache=Depends(get_page_cache)) -> WikiMediator:
    """WikiMediator 싱글톤"""
    global _mediator
    with _singleton_lock:
        if _mediator is None:
            _mediator = WikiMediator(source=get_shared_wiki_client(), cache=page_cache)
        return _mediator


def get_telemetry_service(mediator: WikiMediator = Depends(get_mediator)) -> TelemetryService:
    """TelemetryService 싱글톤 (mediator의 원장 사용)"""
    global _telemetry
    with _singleton_lock:
        if _telemetry is None:
            _telemetry = TelemetryService(mediator.ledger)
        return _telemetry


def _validate(check, *args) -> None:
    try:
        check(*args)
    except ValueError as e:
        logger.warning(f"[API] Input validation failed: {e}")
        raise HTTPException(status_code=400, detail=str(e))


def _source_error(e: ContentSourceException) -> HTTPException:
    logger.error(f"[API] Content source failed: {e}")
    return HTTPException(status_code=502, detail=e.message)


@router.get("/search", response_model=TitleListResponse)
def search(query: str, limit: int = 10, mediator: WikiMediator = Depends(get_mediator)):
    """검색어로 페이지 제목 검색"""
    _validate(SecurityValidator.validate_text, query, "query")
    _validate(SecurityValidator.validate_limit, limit)
    try:
        items = mediator.search(query, limit)
    except ContentSourceException as e:
        raise _source_error(e)
    return TitleListResponse(status="success", items=items)


@router.get("/page", response_model=PageResponse)
def get_page(title: str, mediator: WikiMediator = Depends(get_mediator)):
    """페이지 본문 (캐시 우선)"""
    _validate(SecurityValidator.validate_title, title, "title")
    try:
        text = mediator.get_page(title)
    except ContentSourceException as e:
        raise _source_error(e)
    return PageResponse(title=title, text=text)


@router.get("/connected", response_model=TitleListResponse)
def get_connected_pages(title: str, hops: int = 1, mediator: WikiMediator = Depends(get_mediator)):
    """hops 이내로 연결된 페이지"""
    _validate(SecurityValidator.validate_title, title, "title")
    _validate(SecurityValidator.validate_hops, hops)
    try:
        items = mediator.get_connected_pages(title, hops)
    except ContentSourceException as e:
        raise _source_error(e)
    return TitleListResponse(status="success", items=items)


@router.get("/path", response_model=PathResponse)
def get_path(start: str, stop: str, mediator: WikiMediator = Depends(get_mediator)):
    """start → stop 최단 홉 경로

    도달할 수 없거나 시간 예산(5분)이 끝나면 빈 경로를 반환합니다.
    """
    _validate(SecurityValidator.validate_title, start, "start")
    _validate(SecurityValidator.validate_title, stop, "stop")
    try:
        result = mediator.find_path(start, stop)
    except ContentSourceException as e:
        raise _source_error(e)

    logger.info(
        f"[API] Path '{sanitize_for_log(start)}' -> '{sanitize_for_log(stop)}': {result.status.value}"
    )
    return PathResponse(
        start=start,
        stop=stop,
        path=result.path,
        status=result.status.value,
        hops=result.hops,
        elapsed_ms=result.elapsed_ms,
    )


@router.post("/query", response_model=TitleListResponse)
def execute_query(request: QueryRequest, mediator: WikiMediator = Depends(get_mediator)):
    """쿼리 언어 실행

    문법 오류는 오류가 아니라 빈 결과로 응답합니다.
    """
    try:
        items = mediator.execute_query(request.query)
    except ContentSourceException as e:
        raise _source_error(e)
    return TitleListResponse(status="success", items=items)
