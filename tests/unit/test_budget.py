"""BudgetManager 유닛 테스트"""
import pytest

from src.engine.budget import BudgetConfig, BudgetManager


def test_config_rejects_non_positive_budget():
    with pytest.raises(ValueError):
        BudgetConfig(total_budget=0)


def test_default_budget_is_five_minutes():
    assert BudgetConfig().total_budget == 300.0


def test_elapsed_and_exhaustion(fake_clock):
    manager = BudgetManager(BudgetConfig(total_budget=10.0), clock=fake_clock)
    assert manager.elapsed() == 0.0

    manager.start()
    fake_clock.advance(4)
    assert manager.elapsed() == 4
    assert manager.remaining() == 6
    assert not manager.is_exhausted()

    fake_clock.advance(6)
    assert manager.is_exhausted()
    assert manager.remaining() == 0.0


def test_checkpoint_requires_start(fake_clock):
    manager = BudgetManager(clock=fake_clock)
    with pytest.raises(RuntimeError):
        manager.checkpoint("too early")


def test_report(fake_clock):
    manager = BudgetManager(BudgetConfig(total_budget=5.0), clock=fake_clock)
    manager.start()
    fake_clock.advance(2)
    manager.checkpoint("expanded")
    report = manager.get_report()
    assert report["checkpoints"] == {"expanded": 2}
    assert report["is_exhausted"] is False
