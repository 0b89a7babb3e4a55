"""Path Result - Standardized path search result

getPath의 종료 상태를 구분해서 담습니다. 호출자에게는 frontier_exhausted와
deadline_exceeded 모두 빈 경로로 보이지만, 내부/테스트에서는 구분됩니다.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class PathStatus(str, Enum):
    """경로 탐색 상태"""

    SAME_PAGE = "same_page"  # start == stop, 탐색 없음
    FOUND = "found"  # 경로 발견
    FRONTIER_EXHAUSTED = "frontier_exhausted"  # 큐가 비어 도달 불가
    DEADLINE_EXCEEDED = "deadline_exceeded"  # 시간 예산 소진


@dataclass
class PathResult:
    """경로 탐색 결과

    Attributes:
        status: 종료 상태
        start: 시작 페이지
        stop: 목표 페이지
        path: start → stop 페이지 목록 (실패 시 빈 목록)
        expanded: 링크를 조회한 페이지 수
        elapsed_ms: 소요 시간 (밀리초)
        budget_report: 예산 사용 리포트
    """

    status: PathStatus
    start: str
    stop: str
    path: List[str] = field(default_factory=list)
    expanded: int = 0
    elapsed_ms: Optional[float] = None
    budget_report: Optional[dict] = None

    @property
    def is_success(self) -> bool:
        return self.status in (PathStatus.FOUND, PathStatus.SAME_PAGE)

    @property
    def hops(self) -> int:
        return max(0, len(self.path) - 1)

    @classmethod
    def same_page(cls, page: str) -> "PathResult":
        return cls(status=PathStatus.SAME_PAGE, start=page, stop=page, path=[page], elapsed_ms=0.0)

    @classmethod
    def found(
        cls, start: str, stop: str, path: List[str], expanded: int, elapsed_ms: float
    ) -> "PathResult":
        return cls(
            status=PathStatus.FOUND,
            start=start,
            stop=stop,
            path=path,
            expanded=expanded,
            elapsed_ms=elapsed_ms,
        )

    @classmethod
    def frontier_exhausted(
        cls, start: str, stop: str, expanded: int, elapsed_ms: float
    ) -> "PathResult":
        return cls(
            status=PathStatus.FRONTIER_EXHAUSTED,
            start=start,
            stop=stop,
            expanded=expanded,
            elapsed_ms=elapsed_ms,
        )

    @classmethod
    def deadline_exceeded(
        cls, start: str, stop: str, expanded: int, elapsed_ms: float, budget_report: dict
    ) -> "PathResult":
        return cls(
            status=PathStatus.DEADLINE_EXCEEDED,
            start=start,
            stop=stop,
            expanded=expanded,
            elapsed_ms=elapsed_ms,
            budget_report=budget_report,
        )
