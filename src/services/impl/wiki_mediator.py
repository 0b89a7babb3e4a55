"""Wiki Mediator - 클라이언트와 콘텐츠 소스 사이의 중계 서비스

모든 공개 진입점은 먼저 자기 호출을 원장에 기록한 뒤(무조건, 업무 로직보다 먼저)
ContentFacade(캐시 → 소스), PathFinder, QueryEngine, StatsEngine으로 위임합니다.
"""

from __future__ import annotations

from typing import List, Optional, Set

from src.core.exceptions import CacheException
from src.core.logging import logger, sanitize_for_log
from src.crawlers.content_source import ContentSource
from src.engine.budget import BudgetConfig
from src.engine.ledger import RequestLedger
from src.engine.path_finder import PathFinder
from src.engine.result import PathResult
from src.engine.stats import StatsEngine
from src.query.evaluator import QueryEngine


class WikiMediator:
    """Wikipedia 중계자

    스레드 안전성:
    - 원장(RequestLedger)은 네임스페이스/키 단위 잠금으로 보호
    - 캐시는 구조 변경(삽입/제거)만 직렬화
    - PathFinder/QueryEngine은 호출마다 지역 상태만 사용
    """

    def __init__(
        self,
        source: ContentSource,
        cache,
        ledger: Optional[RequestLedger] = None,
        budget_config: Optional[BudgetConfig] = None,
        window_seconds: Optional[int] = None,
    ):
        """
        Args:
            source: 콘텐츠 소스 (ContentSource 프로토콜)
            cache: 페이지 캐시 (get/put)
            ledger: 텔레메트리 원장 (없으면 새로 생성)
            budget_config: getPath 시간 예산 (기본값: 설정의 5분)
            window_seconds: 통계 윈도우 (기본값: 30초)
        """
        if source is None:
            raise ValueError("source must not be None")
        if cache is None:
            raise ValueError("cache must not be None")

        self.source = source
        self.cache = cache
        self.ledger = ledger or RequestLedger()
        self.stats = StatsEngine(self.ledger, window_seconds)
        self.path_finder = PathFinder(source, budget_config)
        self.query_engine = QueryEngine(source)

    # ------------------------------------------------------------------
    # ContentFacade
    # ------------------------------------------------------------------

    def search(self, query: str, limit: int) -> List[str]:
        """검색어로 페이지 제목 검색

        Args:
            query: 검색어
            limit: 최대 결과 수 (0 이하이면 소스를 호출하지 않고 빈 목록)

        Returns:
            List[str]: limit개 이하의 페이지 제목
        """
        self.ledger.record_invocation("search")
        self.ledger.record_term(query)

        if limit <= 0:
            return []
        return self.source.search(query, limit)[:limit]

    def get_page(self, title: str) -> str:
        """페이지 본문 (캐시 우선)

        캐시 미스 시 소스에서 한 번 가져와 캐시에 넣습니다. 같은 제목의 동시
        미스는 각각 가져올 수 있습니다. 존재하지 않는 페이지는 소스의 관례를
        그대로 따릅니다.
        """
        self.ledger.record_invocation("get_page")
        self.ledger.record_term(title)

        cached = self._cache_get(title)
        if cached is not None:
            return cached

        text = self.source.get_page_text(title)
        self._cache_put(title, text)
        return text

    def get_connected_pages(self, title: str, hops: int) -> List[str]:
        """hops 이내의 링크로 도달 가능한 페이지 (시작 페이지 포함, 정렬, 중복 없음)"""
        self.ledger.record_invocation("get_connected_pages")

        reached: Set[str] = {title}
        level = [title]
        for _ in range(max(0, hops)):
            next_level: List[str] = []
            for page in level:
                for link in self.source.links_on_page(page):
                    if link not in reached:
                        reached.add(link)
                        next_level.append(link)
            if not next_level:
                break
            level = next_level

        return sorted(reached)

    def _cache_get(self, title: str) -> Optional[str]:
        try:
            return self.cache.get(title)
        except CacheException as e:
            logger.warning(f"[Cache] read failed, falling back to source: {e.error_code}")
            return None

    def _cache_put(self, title: str, text: str) -> None:
        try:
            self.cache.put(title, text)
        except CacheException as e:
            logger.warning(f"[Cache] write failed for '{sanitize_for_log(title)}': {e.error_code}")

    # ------------------------------------------------------------------
    # 통계
    # ------------------------------------------------------------------

    def zeitgeist(self, limit: int) -> List[str]:
        """전체 기간 인기 검색어 (사용 횟수 비증가 순)"""
        self.ledger.record_invocation("zeitgeist")
        return self.stats.zeitgeist(limit)

    def trending(self, limit: int) -> List[str]:
        """최근 30초 인기 검색어"""
        self.ledger.record_invocation("trending")
        return self.stats.trending(limit)

    def peak_load_30s(self) -> int:
        """임의의 30초 구간 최대 요청 수 (이 호출 포함, 항상 1 이상)"""
        self.ledger.record_invocation("peak_load_30s")
        return self.stats.peak_load()

    # ------------------------------------------------------------------
    # 경로 / 쿼리
    # ------------------------------------------------------------------

    def find_path(self, start: str, stop: str) -> PathResult:
        """get_path와 같지만 종료 상태까지 반환"""
        self.ledger.record_invocation("get_path")
        return self.path_finder.find(start, stop)

    def get_path(self, start: str, stop: str) -> List[str]:
        """start → stop 최단 홉 경로 (도달 불가/시간 초과 시 빈 목록)"""
        return self.find_path(start, stop).path

    def execute_query(self, query: str) -> List[str]:
        """쿼리 언어 실행 (문법 오류 시 빈 목록)"""
        self.ledger.record_invocation("execute_query")
        return self.query_engine.execute(query)
