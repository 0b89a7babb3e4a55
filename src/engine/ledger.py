"""Request Ledger - Thread-safe telemetry store

두 개의 독립된 네임스페이스에 (키 → 타임스탬프 목록)을 기록합니다.
- invocations: 고정된 메서드 이름 집합 (생성 시 모두 채워짐)
- terms: 검색어/페이지 제목 (처음 등장할 때 생성)

잠금 구조:
- 네임스페이스마다 구조 잠금 1개 (키 생성, 전체 교체)
- 키마다 잠금 1개 (append, 스냅샷 읽기)
서로 다른 키에 대한 기록은 서로를 막지 않습니다.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from src.core.logging import logger, sanitize_for_log


METHOD_KEYS: tuple[str, ...] = (
    "search",
    "get_page",
    "get_connected_pages",
    "zeitgeist",
    "trending",
    "peak_load_30s",
    "get_path",
    "execute_query",
)


class TimeSeries:
    """append-only 타임스탬프 목록 (키 단위 잠금)"""

    __slots__ = ("_lock", "_times")

    def __init__(self, times: Optional[Iterable[float]] = None):
        self._lock = threading.Lock()
        self._times: List[float] = list(times or [])

    def append(self, timestamp: float) -> None:
        with self._lock:
            self._times.append(timestamp)

    def snapshot(self) -> List[float]:
        with self._lock:
            return list(self._times)

    def count(self, since: Optional[float] = None) -> int:
        """전체 개수, 또는 since 이후(초과) 개수"""
        with self._lock:
            if since is None:
                return len(self._times)
            return sum(1 for t in self._times if t > since)

    def __len__(self) -> int:
        return self.count()


class _Namespace:
    """키 → TimeSeries 매핑 + 구조 잠금"""

    def __init__(self, name: str):
        self.name = name
        self._lock = threading.Lock()
        self._series: Dict[str, TimeSeries] = {}

    def get_or_create(self, key: str) -> TimeSeries:
        series = self._series.get(key)
        if series is not None:
            return series
        with self._lock:
            # 잠금 대기 중 다른 스레드가 만들었을 수 있음
            series = self._series.get(key)
            if series is None:
                series = TimeSeries()
                self._series[key] = series
            return series

    def get(self, key: str) -> Optional[TimeSeries]:
        return self._series.get(key)

    def items(self) -> List[tuple[str, TimeSeries]]:
        with self._lock:
            return list(self._series.items())

    def replace(self, mapping: Mapping[str, Iterable[float]]) -> None:
        fresh = {key: TimeSeries(times) for key, times in mapping.items()}
        with self._lock:
            self._series = fresh

    def snapshot(self) -> Dict[str, List[float]]:
        return {key: series.snapshot() for key, series in self.items()}


class RequestLedger:
    """메서드 호출 / 검색어 텔레메트리 원장

    Usage:
        ledger = RequestLedger()
        ledger.record_invocation("search")
        ledger.record_term("Barack Obama")

        counts = ledger.term_counts()
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        method_keys: Iterable[str] = METHOD_KEYS,
    ):
        self._clock = clock
        self._method_keys: tuple[str, ...] = tuple(method_keys)
        self._start_time: float = clock()
        self._invocations = _Namespace("invocations")
        self._terms = _Namespace("terms")
        self._invocations.replace({key: [] for key in self._method_keys})

    @property
    def start_time(self) -> float:
        return self._start_time

    @property
    def method_keys(self) -> tuple[str, ...]:
        return self._method_keys

    def now(self) -> float:
        return self._clock()

    # ------------------------------------------------------------------
    # 기록
    # ------------------------------------------------------------------

    def record_invocation(self, method: str) -> float:
        """메서드 호출 시각 기록

        Raises:
            ValueError: 고정 메서드 집합에 없는 이름
        """
        series = self._invocations.get(method)
        if series is None:
            raise ValueError(f"Unknown method key: {method}")
        timestamp = self._clock()
        series.append(timestamp)
        return timestamp

    def record_term(self, term: str) -> float:
        """검색어/페이지 제목 사용 시각 기록 (대소문자 구분)"""
        timestamp = self._clock()
        self._terms.get_or_create(term).append(timestamp)
        logger.debug(f"[Ledger] term recorded: '{sanitize_for_log(term)}'")
        return timestamp

    # ------------------------------------------------------------------
    # 읽기 (키 단위로 일관, 키 간 일관성은 best-effort)
    # ------------------------------------------------------------------

    def term_counts(self, since: Optional[float] = None) -> Dict[str, int]:
        return {term: series.count(since) for term, series in self._terms.items()}

    def invocation_counts(self) -> Dict[str, int]:
        return {key: series.count() for key, series in self._invocations.items()}

    def invocation_timestamps(self) -> List[float]:
        """모든 메서드 키의 호출 시각 (정렬됨)"""
        merged: List[float] = []
        for _, series in self._invocations.items():
            merged.extend(series.snapshot())
        merged.sort()
        return merged

    def snapshot_terms(self) -> Dict[str, List[float]]:
        return self._terms.snapshot()

    def snapshot_invocations(self) -> Dict[str, List[float]]:
        return self._invocations.snapshot()

    # ------------------------------------------------------------------
    # 복원 (전체 교체)
    # ------------------------------------------------------------------

    def restore_terms(self, mapping: Mapping[str, Iterable[float]]) -> None:
        self._terms.replace(mapping)
        logger.info(f"[Ledger] terms restored: {len(mapping)} keys")

    def restore_invocations(self, mapping: Mapping[str, Iterable[float]]) -> None:
        """호출 기록 복원

        고정 메서드 키는 항상 존재해야 하므로 빠진 키는 빈 목록으로 채우고,
        모르는 키는 버립니다.
        """
        unknown = [key for key in mapping if key not in self._method_keys]
        if unknown:
            logger.warning(f"[Ledger] dropping unknown method keys on restore: {unknown}")
        self._invocations.replace(
            {key: list(mapping.get(key, [])) for key in self._method_keys}
        )
        logger.info("[Ledger] invocations restored")

    def restore_start_time(self, start_time: float) -> None:
        self._start_time = float(start_time)
        logger.info(f"[Ledger] start time restored: {self._start_time}")
