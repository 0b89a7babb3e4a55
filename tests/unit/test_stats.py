"""StatsEngine 유닛 테스트"""
from src.engine.ledger import RequestLedger
from src.engine.stats import StatsEngine, select_top_terms


def _ledger_with_terms(clock, terms):
    ledger = RequestLedger(clock=clock)
    for term in terms:
        ledger.record_term(term)
    return ledger


class TestSelectTopTerms:
    def test_ties_break_lexicographically(self):
        assert select_top_terms({"b": 2, "a": 2, "c": 3}, 3) == ["c", "a", "b"]

    def test_zero_counts_are_dropped(self):
        assert select_top_terms({"a": 0, "b": 1}, 5) == ["b"]

    def test_non_positive_limit(self):
        assert select_top_terms({"a": 1}, 0) == []
        assert select_top_terms({"a": 1}, -1) == []


class TestZeitgeist:
    def test_most_used_first(self, fake_clock):
        ledger = _ledger_with_terms(fake_clock, ["x", "y", "y", "z", "z", "z"])
        stats = StatsEngine(ledger, window_seconds=30)
        assert stats.zeitgeist(2) == ["z", "y"]
        assert stats.zeitgeist(10) == ["z", "y", "x"]

    def test_zero_limit(self, fake_clock):
        ledger = _ledger_with_terms(fake_clock, ["x"])
        assert StatsEngine(ledger, window_seconds=30).zeitgeist(0) == []


class TestTrending:
    def test_only_recent_window_counts(self, fake_clock):
        ledger = RequestLedger(clock=fake_clock)
        for _ in range(5):
            ledger.record_term("old")
        fake_clock.advance(60)
        ledger.record_term("new")
        stats = StatsEngine(ledger, window_seconds=30)

        assert stats.zeitgeist(1) == ["old"]
        assert stats.trending(5) == ["new"]

    def test_zero_limit(self, fake_clock):
        ledger = _ledger_with_terms(fake_clock, ["x"])
        assert StatsEngine(ledger, window_seconds=30).trending(0) == []


class TestPeakLoad:
    def test_early_returns_total_count(self, fake_clock):
        ledger = RequestLedger(clock=fake_clock)
        for _ in range(4):
            ledger.record_invocation("search")
            fake_clock.advance(1)
        assert StatsEngine(ledger, window_seconds=30).peak_load() == 4

    def test_max_over_sliding_windows(self, fake_clock):
        ledger = RequestLedger(clock=fake_clock)
        # 0~4초에 5번, 100초 뒤에 2번
        for _ in range(5):
            ledger.record_invocation("search")
            fake_clock.advance(1)
        fake_clock.advance(100)
        ledger.record_invocation("trending")
        ledger.record_invocation("peak_load_30s")
        assert StatsEngine(ledger, window_seconds=30).peak_load() == 5

    def test_includes_current_call(self, fake_clock):
        ledger = RequestLedger(clock=fake_clock)
        fake_clock.advance(60)
        ledger.record_invocation("peak_load_30s")
        assert StatsEngine(ledger, window_seconds=30).peak_load() == 1
