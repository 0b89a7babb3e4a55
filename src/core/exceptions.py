"""커스텀 예외 정의 (Structured Exception Hierarchy)"""
from typing import Any, Optional


# 기본 예외 클래스
class WikiMediatorException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 콘텐츠 소스 관련 예외
class ContentSourceException(WikiMediatorException):
    """콘텐츠 소스(MediaWiki) 호출 실패의 기본 클래스"""
    def __init__(self, message: str, error_code: str = "CONTENT_SOURCE_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "CONTENT_SOURCE_ERROR", details)


class PageNotFoundException(ContentSourceException):
    """페이지를 찾을 수 없을 때"""
    def __init__(self, title: str, details: Optional[dict[str, Any]] = None):
        message = f"Page not found: {title}"
        super().__init__(message, "PAGE_NOT_FOUND", details or {"title": title})


class NetworkTimeoutException(ContentSourceException):
    """네트워크 타임아웃 예외"""
    def __init__(self, operation: str, timeout_s: float, details: Optional[dict[str, Any]] = None):
        message = f"Network timeout during '{operation}' after {timeout_s}s"
        super().__init__(message, "NETWORK_TIMEOUT",
                        details or {"operation": operation, "timeout_s": timeout_s})


# 캐시 관련 예외
class CacheException(WikiMediatorException):
    """캐시 관련 예외"""
    def __init__(self, message: str, error_code: str = "CACHE_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "CACHE_ERROR", details)


class CacheConnectionException(CacheException):
    """캐시 연결 실패"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Failed to connect to cache: {reason}"
        super().__init__(message, "CACHE_CONNECTION_ERROR", details or {"reason": reason})


# 데이터베이스 관련 예외
class DatabaseException(WikiMediatorException):
    """데이터베이스 관련 예외"""
    def __init__(self, message: str, error_code: str = "DB_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "DB_ERROR", details)


class DatabaseConnectionException(DatabaseException):
    """DB 연결 실패"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Database connection failed: {reason}"
        super().__init__(message, "DB_CONNECTION_ERROR", details)


class DatabaseQueryException(DatabaseException):
    """DB 쿼리 실행 오류"""
    def __init__(self, query: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Database query failed: {reason}"
        super().__init__(message, "DB_QUERY_ERROR",
                        details or {"query": query, "reason": reason})


# 유효성 검증 관련 예외
class ValidationException(WikiMediatorException):
    """유효성 검증 예외"""
    def __init__(self, field: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Validation failed for '{field}': {reason}"
        super().__init__(message, "VALIDATION_ERROR",
                        details or {"field": field, "reason": reason})


class InvalidQueryException(ValidationException):
    """문법에 맞지 않는 쿼리"""
    def __init__(self, reason: str, position: Optional[int] = None, details: Optional[dict[str, Any]] = None):
        self.position = position
        if position is not None:
            reason = f"{reason} (at position {position})"
        super().__init__("query", reason, details or {"position": position})
        self.error_code = "INVALID_QUERY"
