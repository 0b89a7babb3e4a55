"""Stats Engine - 원장 기반 통계 계산

- zeitgeist: 전체 기간 인기 검색어
- trending: 최근 윈도우(기본 30초) 인기 검색어
- peak_load: 시작 이후 임의의 윈도우에서 관측된 최대 호출 수
"""

from __future__ import annotations

from bisect import bisect_left
from typing import Dict, List, Optional

from src.core.config import settings
from src.engine.ledger import RequestLedger


def select_top_terms(counts: Dict[str, int], limit: int) -> List[str]:
    """개수 내림차순으로 최대 limit개 선택

    동률은 사전순. 개수가 0인 항목은 선택하지 않습니다.
    """
    if limit <= 0:
        return []
    ranked = sorted(
        ((term, count) for term, count in counts.items() if count > 0),
        key=lambda item: (-item[1], item[0]),
    )
    return [term for term, _ in ranked[:limit]]


class StatsEngine:
    """RequestLedger 위의 읽기 전용 통계"""

    def __init__(self, ledger: RequestLedger, window_seconds: Optional[int] = None):
        self.ledger = ledger
        self.window_seconds = window_seconds or settings.stats_window_seconds

    def zeitgeist(self, limit: int) -> List[str]:
        """전체 기간 동안 가장 많이 사용된 검색어

        Args:
            limit: 최대 반환 개수 (0 이하이면 빈 목록)

        Returns:
            List[str]: 사용 횟수 비증가 순 검색어
        """
        if limit <= 0:
            return []
        return select_top_terms(self.ledger.term_counts(), limit)

    def trending(self, limit: int, now: Optional[float] = None) -> List[str]:
        """최근 window_seconds 동안 가장 많이 사용된 검색어"""
        if limit <= 0:
            return []
        now = self.ledger.now() if now is None else now
        since = now - self.window_seconds
        return select_top_terms(self.ledger.term_counts(since=since), limit)

    def peak_load(self, now: Optional[float] = None) -> int:
        """임의의 [t, t+window) 구간에서 관측된 최대 호출 수

        t는 시작 시각부터 1초 단위로 증가합니다. 시작 후 window-1초가
        지나지 않았다면 전체 호출 수를 반환합니다.
        """
        now = self.ledger.now() if now is None else now
        timestamps = self.ledger.invocation_timestamps()
        start = self.ledger.start_time
        last_window_start = now - (self.window_seconds - 1)

        if last_window_start <= start:
            return len(timestamps)

        peak = 0
        window_start = start
        while window_start <= last_window_start:
            lo = bisect_left(timestamps, window_start)
            hi = bisect_left(timestamps, window_start + self.window_seconds)
            peak = max(peak, hi - lo)
            window_start += 1.0
        return peak
