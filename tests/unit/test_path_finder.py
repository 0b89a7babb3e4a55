"""PathFinder 유닛 테스트"""
import pytest

from src.engine.budget import BudgetConfig
from src.engine.path_finder import PathFinder
from src.engine.result import PathStatus
from tests.conftest import FakeContentSource


def test_shortest_path_abd(abd_source):
    result = PathFinder(abd_source).find("A", "D")
    assert result.status is PathStatus.FOUND
    assert result.path == ["A", "B", "D"]
    assert result.hops == 2


def test_same_page_does_not_traverse(abd_source):
    result = PathFinder(abd_source).find("X", "X")
    assert result.status is PathStatus.SAME_PAGE
    assert result.path == ["X"]
    assert abd_source.calls == {}


def test_unreachable_is_frontier_exhausted(abd_source):
    result = PathFinder(abd_source).find("D", "A")
    assert result.status is PathStatus.FRONTIER_EXHAUSTED
    assert result.path == []
    assert not result.is_success


def test_stops_as_soon_as_stop_is_seen():
    source = FakeContentSource(links={"A": ["B", "C"], "B": ["C"], "C": ["Z"]})
    result = PathFinder(source).find("A", "C")
    assert result.path == ["A", "C"]
    assert source.calls["links_on_page"] == 1


def test_prefers_fewest_hops():
    source = FakeContentSource(
        links={"A": ["B", "E"], "B": ["C"], "C": ["D"], "E": ["D"]}
    )
    assert PathFinder(source).find("A", "D").path == ["A", "E", "D"]


def test_deadline_exceeded(fake_clock):
    class SlowSource(FakeContentSource):
        def links_on_page(self, title):
            fake_clock.advance(2)
            return [f"{title}+"]

    finder = PathFinder(SlowSource(), BudgetConfig(total_budget=5.0), clock=fake_clock)
    result = finder.find("A", "never")

    assert result.status is PathStatus.DEADLINE_EXCEEDED
    assert result.path == []
    assert result.expanded == 3
    assert result.budget_report["is_exhausted"] is True


def test_none_source_rejected():
    with pytest.raises(ValueError):
        PathFinder(None)
