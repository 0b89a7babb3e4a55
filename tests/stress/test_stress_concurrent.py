"""스트레스 테스트 - 높은 동시성 환경 검증

여러 스레드가 동시에 원장/캐시/중계자를 사용해도 기록이 유실되지 않고
캐시 구조가 깨지지 않는지 검증합니다.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from src.engine.ledger import RequestLedger
from src.services.impl.cache_service import PageCache
from src.services.impl.wiki_mediator import WikiMediator
from tests.conftest import FakeContentSource


def _run_concurrently(worker, workers: int, per_worker: int) -> None:
    barrier = threading.Barrier(workers)

    def task(worker_id: int) -> None:
        barrier.wait()
        for i in range(per_worker):
            worker(worker_id, i)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        for future in [pool.submit(task, w) for w in range(workers)]:
            future.result()


def test_no_lost_term_updates_on_shared_key():
    """같은 검색어를 16개 스레드가 동시에 기록"""
    ledger = RequestLedger()
    _run_concurrently(lambda w, i: ledger.record_term("hot"), workers=16, per_worker=500)
    assert ledger.term_counts() == {"hot": 16 * 500}


def test_no_lost_updates_across_new_keys():
    """처음 등장하는 키를 여러 스레드가 동시에 생성"""
    ledger = RequestLedger()
    _run_concurrently(lambda w, i: ledger.record_term(f"term-{i % 50}"), workers=8, per_worker=400)
    counts = ledger.term_counts()
    assert len(counts) == 50
    assert sum(counts.values()) == 8 * 400
    assert all(count == 8 * 8 for count in counts.values())


def test_concurrent_invocations_and_stats_reads():
    """기록과 통계 읽기가 섞여도 최종 개수는 정확"""
    source = FakeContentSource(search_results={"q": ["Q"]})
    mediator = WikiMediator(source, PageCache(capacity=16, ttl_seconds=60), ledger=RequestLedger())

    def worker(worker_id: int, i: int) -> None:
        if worker_id % 2 == 0:
            mediator.search("q", 1)
        else:
            mediator.zeitgeist(3)
            mediator.peak_load_30s()

    _run_concurrently(worker, workers=8, per_worker=100)

    counts = mediator.ledger.invocation_counts()
    assert counts["search"] == 4 * 100
    assert counts["zeitgeist"] == 4 * 100
    assert counts["peak_load_30s"] == 4 * 100
    assert mediator.zeitgeist(1) == ["q"]


def test_cache_capacity_holds_under_concurrency():
    """동시 삽입 후에도 용량을 넘지 않음"""
    cache = PageCache(capacity=32, ttl_seconds=60)

    def worker(worker_id: int, i: int) -> None:
        title = f"page-{(worker_id * 1000 + i) % 200}"
        cache.put(title, title.upper())
        text = cache.get(title)
        assert text is None or text == title.upper()

    _run_concurrently(worker, workers=8, per_worker=300)
    assert len(cache) <= 32


def test_concurrent_path_searches_share_one_finder():
    """PathFinder는 호출별 상태만 사용"""
    source = FakeContentSource(links={"A": ["B", "C"], "B": ["D"], "C": [], "D": []})
    mediator = WikiMediator(source, PageCache(), ledger=RequestLedger())
    results = []
    lock = threading.Lock()

    def worker(worker_id: int, i: int) -> None:
        path = mediator.get_path("A", "D")
        with lock:
            results.append(path)

    _run_concurrently(worker, workers=8, per_worker=50)
    assert len(results) == 400
    assert all(path == ["A", "B", "D"] for path in results)
