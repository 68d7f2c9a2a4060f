from __future__ import annotations

import logging
import threading
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

import pytest

from catalog_resolver.config import ResolverSettings
from catalog_resolver.errors import SourceUnavailable
from catalog_resolver.models import CandidateRecord
from catalog_resolver.schema import SearchOptions
from catalog_resolver.steps.index import CandidateIndex, IndexSnapshot, StaticIndex, WeightedSearchIndex


class CountingSource:
    def __init__(self, records: Sequence[CandidateRecord], delay: float = 0.0) -> None:
        self.records = list(records)
        self.delay = delay
        self.calls = 0
        self.fail_with: Exception | None = None
        self._lock = threading.Lock()

    def fetch_all(self) -> list[CandidateRecord]:
        with self._lock:
            self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with
        return list(self.records)


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def test_get_within_ttl_returns_same_snapshot(nike_records: list[CandidateRecord]) -> None:
    source = CountingSource(nike_records)
    clock = FakeClock()
    index = CandidateIndex(source, ttl_seconds=60, clock=clock)

    first = index.get()
    clock.advance(59)
    second = index.get()

    assert first is second
    assert source.calls == 1


def test_get_after_ttl_rebuilds(nike_records: list[CandidateRecord]) -> None:
    source = CountingSource(nike_records)
    clock = FakeClock()
    index = CandidateIndex(source, ttl_seconds=60, clock=clock)

    first = index.get()
    clock.advance(60)
    second = index.get()

    assert second is not first
    assert source.calls == 2
    assert second.built_at == clock.now


def test_concurrent_callers_after_expiry_trigger_one_fetch(nike_records: list[CandidateRecord]) -> None:
    source = CountingSource(nike_records)
    clock = FakeClock()
    index = CandidateIndex(source, ttl_seconds=60, clock=clock)
    index.get()
    clock.advance(120)
    source.delay = 0.05

    with ThreadPoolExecutor(max_workers=16) as pool:
        snapshots = list(pool.map(lambda _: index.get(), range(32)))

    assert source.calls == 2
    assert len({id(snapshot) for snapshot in snapshots}) == 1


def test_concurrent_cold_start_triggers_one_fetch(nike_records: list[CandidateRecord]) -> None:
    source = CountingSource(nike_records, delay=0.05)
    index = CandidateIndex(source)

    with ThreadPoolExecutor(max_workers=8) as pool:
        snapshots = list(pool.map(lambda _: index.get(), range(16)))

    assert source.calls == 1
    assert all(snapshot is snapshots[0] for snapshot in snapshots)


def test_failure_without_snapshot_raises(nike_records: list[CandidateRecord]) -> None:
    source = CountingSource(nike_records)
    source.fail_with = SourceUnavailable("brands", "connection refused")
    index = CandidateIndex(source, name="brands")

    with pytest.raises(SourceUnavailable):
        index.get()


def test_unexpected_fetch_error_is_wrapped(nike_records: list[CandidateRecord]) -> None:
    source = CountingSource(nike_records)
    source.fail_with = ConnectionError("reset by peer")
    index = CandidateIndex(source, name="brands")

    with pytest.raises(SourceUnavailable) as excinfo:
        index.get()

    assert excinfo.value.source == "brands"
    assert isinstance(excinfo.value.__cause__, ConnectionError)


def test_failure_with_snapshot_serves_stale(
    nike_records: list[CandidateRecord], caplog: pytest.LogCaptureFixture
) -> None:
    source = CountingSource(nike_records)
    clock = FakeClock()
    index = CandidateIndex(source, ttl_seconds=60, clock=clock, name="brands")
    previous = index.get()

    clock.advance(61)
    source.fail_with = SourceUnavailable("brands", "timeout")
    with caplog.at_level(logging.WARNING, logger="catalog_resolver.steps.index"):
        served = index.get()

    assert served is previous
    assert any("serving stale snapshot" in record.getMessage() for record in caplog.records)


def test_recovers_after_failure(nike_records: list[CandidateRecord]) -> None:
    source = CountingSource(nike_records)
    clock = FakeClock()
    index = CandidateIndex(source, ttl_seconds=60, clock=clock)
    previous = index.get()

    clock.advance(61)
    source.fail_with = SourceUnavailable("brands", "timeout")
    assert index.get() is previous

    source.fail_with = None
    fresh = index.get()
    assert fresh is not previous
    assert source.calls == 3


def test_clear_and_refresh(nike_records: list[CandidateRecord]) -> None:
    source = CountingSource(nike_records)
    clock = FakeClock()
    index = CandidateIndex(source, ttl_seconds=60, clock=clock)

    assert index.is_stale()
    assert index.age() is None

    refreshed = index.refresh()
    assert source.calls == 1
    assert not index.is_stale()
    clock.advance(10)
    assert index.age() == 10

    index.clear()
    assert index.is_stale()
    assert index.get() is not refreshed
    assert source.calls == 2


def test_from_settings_uses_ttl(nike_records: list[CandidateRecord]) -> None:
    source = CountingSource(nike_records)
    clock = FakeClock()
    index = CandidateIndex.from_settings(source, ResolverSettings(cache_ttl_seconds=5), clock=clock)

    index.get()
    clock.advance(5)
    index.get()

    assert source.calls == 2


def test_exact_lookup_is_case_insensitive_and_first_wins() -> None:
    records = [
        CandidateRecord(id="a", name="Petit Bateau"),
        CandidateRecord(id="b", name="Bateau", aliases=("petit bateau",)),
    ]
    snapshot = IndexSnapshot.build(records, built_at=0.0)

    assert snapshot.exact("  PETIT   bateau ").id == "a"
    assert snapshot.exact("bateau").id == "b"
    assert snapshot.exact("bato") is None


def test_search_applies_alias_weight() -> None:
    records = [CandidateRecord(id="sezane", name="Sézane Paris", aliases=("Sezane",))]
    search = WeightedSearchIndex(records)

    hits = search.search("sezane")

    # the alias is an exact fold match but only carries 0.8 weight
    assert len(hits) == 1
    assert hits[0].score == pytest.approx(0.8)


def test_search_skips_short_labels_and_queries() -> None:
    records = [CandidateRecord(id="x", name="X"), CandidateRecord(id="zara", name="Zara")]
    search = WeightedSearchIndex(records, SearchOptions.from_mapping({"name": 1.0}, min_match_length=2))

    assert search.search("x") == []
    assert [hit.record.id for hit in search.search("zarra")] == ["zara"]


def test_search_respects_distance_threshold() -> None:
    search = WeightedSearchIndex([CandidateRecord(id="nike", name="Nike")])

    assert search.search("completely different") == []


def test_static_index_never_rebuilds() -> None:
    provider = StaticIndex([CandidateRecord(id="noir", name="Noir")])

    assert provider.get() is provider.get()
    assert provider.get().exact("noir").id == "noir"


def _get_all_at_once(index: CandidateIndex, callers: int) -> list[IndexSnapshot | Exception]:
    barrier = threading.Barrier(callers)

    def call(_: int) -> IndexSnapshot | Exception:
        barrier.wait()
        try:
            return index.get()
        except SourceUnavailable as exc:
            return exc

    with ThreadPoolExecutor(max_workers=callers) as pool:
        return list(pool.map(call, range(callers)))


def test_concurrent_cold_start_failure_is_shared(nike_records: list[CandidateRecord]) -> None:
    source = CountingSource(nike_records, delay=0.2)
    failure = SourceUnavailable("brands", "connection refused")
    source.fail_with = failure
    index = CandidateIndex(source, name="brands")

    outcomes = _get_all_at_once(index, 16)

    assert source.calls == 1
    assert all(isinstance(outcome, SourceUnavailable) for outcome in outcomes)
    # each waiter gets its own error object chained to the stored failure
    assert len({id(outcome) for outcome in outcomes}) == 16
    assert all(outcome.source == "brands" and outcome.reason == "connection refused" for outcome in outcomes)
    waiters = [outcome for outcome in outcomes if outcome is not failure]
    assert len(waiters) == 15
    assert all(waiter.__cause__ is failure for waiter in waiters)


def test_concurrent_failure_with_snapshot_serves_stale_to_all(nike_records: list[CandidateRecord]) -> None:
    source = CountingSource(nike_records)
    clock = FakeClock()
    index = CandidateIndex(source, ttl_seconds=60, clock=clock, name="brands")
    previous = index.get()

    clock.advance(61)
    source.delay = 0.2
    source.fail_with = SourceUnavailable("brands", "timeout")
    outcomes = _get_all_at_once(index, 16)

    assert source.calls == 2
    assert all(outcome is previous for outcome in outcomes)
