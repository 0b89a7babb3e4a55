"""페이지 캐시 서비스 - 캐싱 로직만 담당

두 구현이 같은 계약을 따릅니다.
- get(title) -> Optional[str]
- put(title, text)
- capacity / ttl_seconds 는 생성 시 고정

PageCache: 프로세스 내 캐시. 조회는 잠금 없이, 삽입/제거만 직렬화.
RedisPageCache: 여러 워커가 공유하는 Redis 캐시. 삽입 순서 인덱스(ZSET)로 용량 제한.
"""
import threading
import time
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from redis import Redis

from src.core.config import settings
from src.core.logging import logger, sanitize_for_log
from src.core.exceptions import CacheConnectionException
from src.utils.hash_utils import generate_cache_key, CACHE_INDEX_KEY


class PageCache:
    """용량/만료 시간이 있는 인메모리 페이지 캐시"""

    def __init__(
        self,
        capacity: Optional[int] = None,
        ttl_seconds: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.capacity = capacity or settings.cache_capacity
        self.ttl_seconds = ttl_seconds or settings.cache_ttl
        if self.capacity <= 0 or self.ttl_seconds <= 0:
            raise ValueError("capacity and ttl_seconds must be positive")
        self._clock = clock
        self._lock = threading.RLock()
        self._entries: "OrderedDict[str, Tuple[str, float]]" = OrderedDict()

    def get(self, title: str) -> Optional[str]:
        """캐시 조회 (만료된 항목은 미스)"""
        entry = self._entries.get(title)
        if entry is None:
            logger.debug(f"[Cache] miss: '{sanitize_for_log(title)}'")
            return None
        text, inserted_at = entry
        if self._clock() - inserted_at >= self.ttl_seconds:
            logger.debug(f"[Cache] expired: '{sanitize_for_log(title)}'")
            return None
        logger.debug(f"[Cache] hit: '{sanitize_for_log(title)}'")
        return text

    def put(self, title: str, text: str) -> bool:
        """캐시 저장

        같은 제목은 덮어쓰고 만료 시간을 갱신합니다. 용량이 차면 만료된 항목을
        먼저 지우고, 그래도 차 있으면 가장 먼저 들어온 항목을 지웁니다.
        """
        now = self._clock()
        with self._lock:
            if title in self._entries:
                del self._entries[title]
            self._purge_expired(now)
            while len(self._entries) >= self.capacity:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"[Cache] evicted: '{sanitize_for_log(evicted)}'")
            self._entries[title] = (text, now)
        return True

    def delete(self, title: str) -> bool:
        with self._lock:
            return self._entries.pop(title, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _purge_expired(self, now: float) -> None:
        expired = [
            key for key, (_, inserted_at) in self._entries.items()
            if now - inserted_at >= self.ttl_seconds
        ]
        for key in expired:
            del self._entries[key]

    def __len__(self) -> int:
        return len(self._entries)

    def health_check(self) -> bool:
        return True


class RedisPageCache:
    """Redis 페이지 캐시 관리 서비스"""

    def __init__(
        self,
        redis_url: Optional[str] = None,
        capacity: Optional[int] = None,
        ttl_seconds: Optional[int] = None,
    ):
        """Redis 클라이언트 초기화"""
        self.capacity = capacity or settings.cache_capacity
        self.ttl_seconds = ttl_seconds or settings.cache_ttl
        self._lock = threading.Lock()
        try:
            self.redis_client = Redis.from_url(
                redis_url or settings.redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )
            # 연결 테스트
            self.redis_client.ping()
            logger.info("Redis connection established")
        except Exception as e:
            logger.error(f"Failed to connect to Redis: {e}")
            raise CacheConnectionException(reason=str(e))

    def get(self, title: str) -> Optional[str]:
        """
        캐시된 페이지 본문 조회

        Args:
            title: 페이지 제목

        Returns:
            본문 문자열 또는 None
        """
        cache_key = generate_cache_key(title)
        try:
            cached = self.redis_client.get(cache_key)
        except Exception as e:
            logger.error(f"Cache read error: {e}")
            raise CacheConnectionException(reason=f"read failed: {e}")

        if cached is None:
            logger.info(f"Cache miss for key: {cache_key}")
            return None
        logger.info(f"Cache hit for key: {cache_key}")
        return cached

    def put(self, title: str, text: str) -> bool:
        """
        페이지 본문 캐싱

        Args:
            title: 페이지 제목
            text: 페이지 본문

        Returns:
            성공 여부
        """
        cache_key = generate_cache_key(title)
        now = time.time()
        try:
            with self._lock:
                pipe = self.redis_client.pipeline()
                pipe.setex(cache_key, self.ttl_seconds, text)
                pipe.zadd(CACHE_INDEX_KEY, {cache_key: now})
                # 만료된 항목은 인덱스에서도 제거
                pipe.zremrangebyscore(CACHE_INDEX_KEY, 0, now - self.ttl_seconds)
                pipe.execute()
                self._evict_over_capacity()
            logger.info(f"Cache set for key: {cache_key}, TTL: {self.ttl_seconds}s")
            return True
        except Exception as e:
            logger.error(f"Cache write error: {e}")
            raise CacheConnectionException(reason=f"write failed: {e}")

    def _evict_over_capacity(self) -> None:
        overflow = self.redis_client.zcard(CACHE_INDEX_KEY) - self.capacity
        if overflow <= 0:
            return
        evicted = self.redis_client.zpopmin(CACHE_INDEX_KEY, overflow)
        keys = [key for key, _ in evicted]
        if keys:
            self.redis_client.delete(*keys)
            logger.info(f"Cache evicted {len(keys)} keys (capacity {self.capacity})")

    def delete(self, title: str) -> bool:
        """
        캐시 삭제

        Args:
            title: 페이지 제목

        Returns:
            성공 여부
        """
        try:
            cache_key = generate_cache_key(title)
            self.redis_client.zrem(CACHE_INDEX_KEY, cache_key)
            result = self.redis_client.delete(cache_key)
            logger.info(f"Cache deleted for key: {cache_key}")
            return result > 0
        except Exception as e:
            logger.error(f"Cache delete error: {e}")
            return False

    def health_check(self) -> bool:
        """Redis 연결 상태 확인"""
        try:
            self.redis_client.ping()
            return True
        except Exception:
            return False


def create_page_cache():
    """설정(cache_backend)에 맞는 캐시 생성"""
    if settings.cache_backend == "redis":
        return RedisPageCache()
    return PageCache()
