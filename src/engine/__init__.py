"""Engine Layer - Telemetry, statistics and link traversal

This module provides the core engine layer for the mediator, implementing:
- RequestLedger: Thread-safe telemetry of method invocations and search terms
- StatsEngine: zeitgeist / trending / peak load over the ledger
- PathFinder: Breadth-first path search with a wall-clock deadline
- BudgetManager: Deadline bookkeeping for the path search
- PathResult: Standardized path search result
"""

from .budget import BudgetConfig, BudgetManager
from .ledger import METHOD_KEYS, RequestLedger, TimeSeries
from .path_finder import PathFinder
from .result import PathResult, PathStatus
from .stats import StatsEngine, select_top_terms

__all__ = [
    "RequestLedger",
    "TimeSeries",
    "METHOD_KEYS",
    "StatsEngine",
    "select_top_terms",
    "PathFinder",
    "PathResult",
    "PathStatus",
    "BudgetManager",
    "BudgetConfig",
]
