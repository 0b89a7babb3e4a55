"""
입력 검증 함수
"""

from fastapi import Request
from src.core.logging import logger, sanitize_for_log


class SecurityValidator:
    """입력 보안 검증"""

    MAX_TEXT_LENGTH = 500
    MAX_LIMIT = 500
    MAX_HOPS = 3

    # 제목/검색어에 허용하지 않는 제어 문자
    CONTROL_CHARS = ['\0', '\n', '\r']

    # 페이지 제목에 쓸 수 없는 문자 (MediaWiki 다중 제목 구분자)
    TITLE_SEPARATORS = ['|']

    @staticmethod
    def validate_text(value: str, field: str = "query") -> bool:
        """검색어/페이지 제목/쿼리 검증

        Args:
            value: 입력 문자열
            field: 오류 메시지에 쓸 필드 이름

        Returns:
            유효성 여부

        Raises:
            ValueError: 유효하지 않은 입력
        """
        if not value or not value.strip():
            raise ValueError(f"{field} is required")

        if len(value) > SecurityValidator.MAX_TEXT_LENGTH:
            raise ValueError(f"{field} must be at most {SecurityValidator.MAX_TEXT_LENGTH} characters")

        for char in SecurityValidator.CONTROL_CHARS:
            if char in value:
                logger.warning(f"Control character in {field}: {sanitize_for_log(repr(char))}")
                raise ValueError(f"{field} contains a control character")

        return True

    @staticmethod
    def validate_title(value: str, field: str = "title") -> bool:
        """페이지 제목 검증 (validate_text + 제목 구분자 금지)

        MediaWiki는 titles 파라미터의 '|'를 여러 제목의 구분자로 해석합니다.
        """
        SecurityValidator.validate_text(value, field)
        for char in SecurityValidator.TITLE_SEPARATORS:
            if char in value:
                logger.warning(f"Title separator in {field}: {sanitize_for_log(value)}")
                raise ValueError(f"{field} must not contain '{char}'")
        return True

    @staticmethod
    def validate_limit(limit: int) -> bool:
        """결과 개수 검증 (0 허용)"""
        if limit < 0 or limit > SecurityValidator.MAX_LIMIT:
            raise ValueError(f"limit must be between 0 and {SecurityValidator.MAX_LIMIT}")
        return True

    @staticmethod
    def validate_hops(hops: int) -> bool:
        """링크 홉 수 검증"""
        if hops < 0 or hops > SecurityValidator.MAX_HOPS:
            raise ValueError(f"hops must be between 0 and {SecurityValidator.MAX_HOPS}")
        return True


async def log_request(request: Request) -> None:
    """요청 로깅 (파라미터는 잘라서)

    Args:
        request: FastAPI Request 객체
    """
    query_params = {
        key: sanitize_for_log(str(value), max_length=50)
        for key, value in request.query_params.items()
    }
    if query_params:
        logger.debug(f"{request.method} {request.url.path}?{query_params}")
    else:
        logger.debug(f"{request.method} {request.url.path}")
