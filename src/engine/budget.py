"""Budget Manager - Wall-clock deadline management

getPath 탐색은 호출 시점부터 고정된 시간 예산(기본 5분) 안에서만 진행됩니다.
예산은 매 반복(dequeue 전)마다 확인하며, 외부 취소 신호는 없습니다.
"""

from dataclasses import dataclass
from time import monotonic
from typing import Callable, Optional

from src.core.config import settings


@dataclass
class BudgetConfig:
    """예산 설정"""

    total_budget: float = 300.0  # 전체 예산 (초)

    def __post_init__(self):
        """설정 검증"""
        if self.total_budget <= 0:
            raise ValueError(f"total_budget must be positive (got {self.total_budget}s)")

    @classmethod
    def from_settings(cls) -> "BudgetConfig":
        return cls(total_budget=settings.path_search_timeout_s)


class BudgetManager:
    """시간 예산 관리자

    Usage:
        manager = BudgetManager(BudgetConfig(total_budget=300.0))
        manager.start()

        while not manager.is_exhausted():
            ...
            manager.checkpoint("expanded")

        report = manager.get_report()
    """

    def __init__(
        self,
        config: Optional[BudgetConfig] = None,
        clock: Callable[[], float] = monotonic,
    ):
        self.config = config or BudgetConfig()
        self._clock = clock
        self.start_time: Optional[float] = None
        self._checkpoints: dict[str, float] = {}

    def start(self) -> None:
        """예산 측정 시작"""
        self.start_time = self._clock()
        self._checkpoints.clear()

    def checkpoint(self, name: str) -> None:
        """체크포인트 기록

        Raises:
            RuntimeError: start()가 호출되지 않은 경우
        """
        if self.start_time is None:
            raise RuntimeError("Budget not started. Call start() first.")
        self._checkpoints[name] = self._clock() - self.start_time

    def elapsed(self) -> float:
        """경과 시간 (초). start() 전에는 0.0"""
        if self.start_time is None:
            return 0.0
        return self._clock() - self.start_time

    def remaining(self) -> float:
        """남은 예산 (초). 음수가 되지 않음"""
        return max(0.0, self.config.total_budget - self.elapsed())

    def is_exhausted(self) -> bool:
        """마감 시각 도달 여부"""
        return self.elapsed() >= self.config.total_budget

    def get_report(self) -> dict:
        """예산 사용 리포트"""
        return {
            "total_budget": self.config.total_budget,
            "elapsed": self.elapsed(),
            "remaining": self.remaining(),
            "checkpoints": self._checkpoints.copy(),
            "is_exhausted": self.is_exhausted(),
        }
