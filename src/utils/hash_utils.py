"""해싱 유틸리티"""
import hashlib

CACHE_INDEX_KEY = "page:index"


def hash_string(text: str) -> str:
    """
    문자열을 MD5 해시로 변환

    Args:
        text: 해시할 문자열

    Returns:
        MD5 해시 문자열
    """
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def generate_cache_key(title: str) -> str:
    """
    페이지 제목으로 캐시 키 생성 (제목은 대소문자 구분, 정규화하지 않음)

    Args:
        title: 페이지 제목

    Returns:
        Redis 캐시 키
    """
    return f"page:{hash_string(title)}"
