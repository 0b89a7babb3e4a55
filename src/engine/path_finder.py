"""Path Finder - Breadth-first search over page links

상태: searching → found | frontier_exhausted | deadline_exceeded

- start == stop 이면 탐색 없이 [start]
- 링크 관계(links_on_page)로 BFS, 새로 발견한 페이지는 한 번만 큐에 넣음
- 현재 페이지의 링크에서 stop을 발견하는 즉시 종료 (최단 홉 경로)
- 매 dequeue 전에 마감 시각과 빈 큐를 확인
"""

from __future__ import annotations

from collections import deque
from typing import Callable, Deque, Dict, List, Optional

from src.core.logging import logger, sanitize_for_log
from src.crawlers.content_source import ContentSource

from .budget import BudgetConfig, BudgetManager
from .result import PathResult


class PathFinder:
    """링크 그래프 위의 BFS 경로 탐색기

    호출마다 frontier/parent map을 새로 만들기 때문에 여러 스레드에서
    같은 인스턴스를 공유해도 됩니다.
    """

    def __init__(
        self,
        source: ContentSource,
        budget_config: Optional[BudgetConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        if source is None:
            raise ValueError("source must not be None")
        self.source = source
        self.budget_config = budget_config or BudgetConfig.from_settings()
        self._clock = clock

    def _new_budget(self) -> BudgetManager:
        if self._clock is None:
            return BudgetManager(self.budget_config)
        return BudgetManager(self.budget_config, clock=self._clock)

    def find(self, start: str, stop: str) -> PathResult:
        """start에서 stop까지의 최단 홉 경로 탐색

        Args:
            start: 시작 페이지 제목
            stop: 목표 페이지 제목

        Returns:
            PathResult: 종료 상태와 경로
        """
        if start == stop:
            return PathResult.same_page(start)

        budget = self._new_budget()
        budget.start()

        frontier: Deque[str] = deque([start])
        parents: Dict[str, str] = {start: start}
        expanded = 0

        logger.info(f"[Path] search started: '{sanitize_for_log(start)}' -> '{sanitize_for_log(stop)}'")

        while True:
            if budget.is_exhausted():
                budget.checkpoint("deadline")
                logger.warning(
                    f"[Path] deadline exceeded after {expanded} pages "
                    f"({budget.config.total_budget}s budget)"
                )
                return PathResult.deadline_exceeded(
                    start, stop, expanded, budget.elapsed() * 1000, budget.get_report()
                )

            if not frontier:
                logger.info(f"[Path] frontier exhausted after {expanded} pages")
                return PathResult.frontier_exhausted(start, stop, expanded, budget.elapsed() * 1000)

            page = frontier.popleft()
            links = self.source.links_on_page(page)
            expanded += 1

            for link in links:
                if link not in parents:
                    parents[link] = page
                    frontier.append(link)
                if link == stop:
                    path = self._reconstruct(parents, start, stop)
                    logger.info(f"[Path] found: {len(path) - 1} hops, {expanded} pages expanded")
                    return PathResult.found(start, stop, path, expanded, budget.elapsed() * 1000)

    @staticmethod
    def _reconstruct(parents: Dict[str, str], start: str, stop: str) -> List[str]:
        """parent 포인터를 stop에서 start까지 따라간 뒤 뒤집기"""
        path = [stop]
        node = stop
        while node != start:
            node = parents[node]
            path.append(node)
        path.reverse()
        return path
