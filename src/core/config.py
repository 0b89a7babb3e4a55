"""설정 관리 - 환경 변수 로드 및 검증"""
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 콘텐츠 소스 (MediaWiki Action API)
    wiki_api_url: str = "https://en.wikipedia.org/w/api.php"
    wiki_user_agent: str = "wiki-mediator/1.0 (https://github.com/ImportTeam/wiki-mediator)"
    wiki_http_timeout_s: float = 10.0

    # 페이지 캐시
    # - memory: 프로세스 내 캐시 (기본값)
    # - redis: 여러 워커가 공유하는 Redis 캐시
    cache_backend: str = "memory"
    redis_url: str = ""
    cache_capacity: int = 256
    cache_ttl: int = 43200  # 12시간

    # getPath 탐색 예산 (5분)
    path_search_timeout_s: float = 300.0

    # 통계 윈도우 (trending / peakLoad30s)
    stats_window_seconds: int = 30

    # 텔레메트리 저장소
    database_url: str = "sqlite:///local/telemetry.db"
    # 0이면 주기 저장 비활성화
    telemetry_autosave_seconds: int = 0
    telemetry_load_on_startup: bool = False

    # API
    api_title: str = "Wiki Mediator"
    api_version: str = "1.0.0"
    api_description: str = "Wikipedia 중계 서비스: 캐시, 사용 통계, 경로 탐색, 쿼리 언어."

    # 로깅
    log_level: str = "INFO"

    @field_validator("cache_capacity", "cache_ttl", "stats_window_seconds")
    @classmethod
    def validate_positive_int(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("cache_capacity, cache_ttl and stats_window_seconds must be positive")
        return v

    @field_validator("path_search_timeout_s", "wiki_http_timeout_s")
    @classmethod
    def validate_timeouts(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @field_validator("telemetry_autosave_seconds")
    @classmethod
    def validate_autosave(cls, v: int) -> int:
        if v < 0:
            raise ValueError("telemetry_autosave_seconds must be >= 0")
        return v

    @field_validator("cache_backend")
    @classmethod
    def validate_cache_backend(cls, v: str) -> str:
        v = v.lower()
        if v not in ("memory", "redis"):
            raise ValueError("cache_backend must be 'memory' or 'redis'")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
