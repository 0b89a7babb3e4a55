"""Pydantic 스키마 정의"""
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime


class QueryRequest(BaseModel):
    """쿼리 언어 실행 요청"""
    query: str = Field(..., min_length=1, max_length=500, description="예: page where category \"Cats\" sorted asc")

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("query must not be blank")
        return v


class TitleListResponse(BaseModel):
    """제목/작성자/카테고리 목록 응답"""
    status: str = Field(..., description="success or error")
    items: List[str] = Field(default_factory=list, description="결과 목록")
    message: Optional[str] = Field(None, description="응답 메시지")
    error_code: Optional[str] = Field(None, description="에러 코드 (error 시)")


class PageResponse(BaseModel):
    """페이지 본문 응답"""
    title: str
    text: str


class PathResponse(BaseModel):
    """경로 탐색 응답"""
    start: str
    stop: str
    path: List[str] = Field(default_factory=list, description="start → stop (실패 시 빈 목록)")
    status: str = Field(..., description="found | same_page | frontier_exhausted | deadline_exceeded")
    hops: int = Field(..., ge=0)
    elapsed_ms: Optional[float] = Field(None, ge=0, description="탐색 소요 시간 (밀리초)")


class PeakLoadResponse(BaseModel):
    """최대 부하 응답"""
    peak_load_30s: int = Field(..., ge=1)


class SnapshotResponse(BaseModel):
    """텔레메트리 저장/복원 결과 (레코드별 성공 여부)"""
    status: str
    records: Dict[str, bool]


class HealthResponse(BaseModel):
    """헬스 체크 응답"""
    status: str
    timestamp: datetime
    version: str
