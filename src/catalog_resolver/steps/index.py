"""Cached, TTL-bounded searchable snapshots over candidate entities.

A snapshot is built completely (records plus the weighted search structure)
before it is published with a single reference assignment, so readers never
see a half-built index. Rebuilds are single-flight: concurrent callers that
find the snapshot expired queue on one lock and reuse the outcome of the
rebuild that ran while they waited.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from rapidfuzz import fuzz, process

from catalog_resolver.config import ResolverSettings
from catalog_resolver.errors import SourceUnavailable
from catalog_resolver.interfaces import CandidateSource
from catalog_resolver.models import CandidateRecord
from catalog_resolver.schema import DEFAULT_SEARCH_OPTIONS, SearchOptions
from catalog_resolver.text import casefold_label, fold_label

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SearchHit:
    record: CandidateRecord
    score: float


class WeightedSearchIndex:
    """Approximate lookup over names and aliases with per-field weights.

    Each label is scored with rapidfuzz ``token_sort_ratio``. A label is a hit when
    its normalized distance (1 - similarity) is within ``distance_threshold``;
    a record's score is its best ``similarity * field_weight``.
    """

    def __init__(self, records: Sequence[CandidateRecord], options: SearchOptions = DEFAULT_SEARCH_OPTIONS) -> None:
        self._records = tuple(records)
        self._options = options
        self._exact: dict[str, int] = {}
        self._labels: list[str] = []
        self._owners: list[tuple[int, float]] = []

        name_weight = options.weight_for("name")
        alias_weight = options.weight_for("aliases")
        for position, record in enumerate(self._records):
            for label in record.labels():
                key = casefold_label(label)
                if key:
                    self._exact.setdefault(key, position)
            self._add_label(record.name, position, name_weight)
            for alias in record.aliases:
                self._add_label(alias, position, alias_weight)

    def _add_label(self, label: str, position: int, weight: float) -> None:
        folded = fold_label(label)
        if len(folded) < self._options.min_match_length or weight <= 0:
            return
        self._labels.append(folded)
        self._owners.append((position, weight))

    def __len__(self) -> int:
        return len(self._records)

    def exact(self, query: str) -> CandidateRecord | None:
        position = self._exact.get(casefold_label(query))
        if position is None:
            return None
        return self._records[position]

    def search(self, query: str) -> list[SearchHit]:
        """Return hits in source order; callers rank them."""

        folded = fold_label(query)
        if len(folded) < self._options.min_match_length or not self._labels:
            return []

        cutoff = (1.0 - self._options.distance_threshold) * 100.0
        matches = process.extract(
            folded,
            self._labels,
            scorer=fuzz.token_sort_ratio,
            score_cutoff=cutoff,
            limit=None,
        )

        best: dict[int, float] = {}
        for _label, raw_score, label_idx in matches:
            position, weight = self._owners[label_idx]
            weighted = (raw_score / 100.0) * weight
            if weighted > best.get(position, -1.0):
                best[position] = weighted

        return [SearchHit(record=self._records[pos], score=min(1.0, best[pos])) for pos in sorted(best)]


@dataclass(frozen=True, slots=True)
class IndexSnapshot:
    records: tuple[CandidateRecord, ...]
    built_at: float
    search_index: WeightedSearchIndex

    @classmethod
    def build(
        cls,
        records: Sequence[CandidateRecord],
        built_at: float,
        options: SearchOptions = DEFAULT_SEARCH_OPTIONS,
    ) -> "IndexSnapshot":
        frozen = tuple(records)
        return cls(records=frozen, built_at=built_at, search_index=WeightedSearchIndex(frozen, options))

    def exact(self, query: str) -> CandidateRecord | None:
        return self.search_index.exact(query)

    def search(self, query: str) -> list[SearchHit]:
        return self.search_index.search(query)


class StaticIndex:
    """Snapshot provider over a fixed reference table; built once, never expires."""

    def __init__(self, records: Sequence[CandidateRecord], options: SearchOptions = DEFAULT_SEARCH_OPTIONS) -> None:
        self._snapshot = IndexSnapshot.build(records, built_at=0.0, options=options)

    def get(self) -> IndexSnapshot:
        return self._snapshot


class CandidateIndex:
    def __init__(
        self,
        source: CandidateSource,
        *,
        ttl_seconds: float = 3600.0,
        options: SearchOptions = DEFAULT_SEARCH_OPTIONS,
        clock: Callable[[], float] = time.monotonic,
        name: str = "candidates",
    ) -> None:
        self._source = source
        self._ttl_seconds = ttl_seconds
        self._options = options
        self._clock = clock
        self.name = name

        self._snapshot: IndexSnapshot | None = None
        self._lock = threading.Lock()
        self._attempts = 0
        self._last_error: SourceUnavailable | None = None

    @classmethod
    def from_settings(
        cls,
        source: CandidateSource,
        settings: ResolverSettings,
        *,
        clock: Callable[[], float] = time.monotonic,
        name: str = "candidates",
    ) -> "CandidateIndex":
        return cls(
            source,
            ttl_seconds=settings.cache_ttl_seconds,
            options=SearchOptions.from_settings(settings),
            clock=clock,
            name=name,
        )

    def get(self) -> IndexSnapshot:
        snapshot = self._snapshot
        if snapshot is not None and self._is_fresh(snapshot):
            _LOGGER.debug("[%s] using cached snapshot (%d records)", self.name, len(snapshot.records))
            return snapshot

        observed_attempts = self._attempts
        with self._lock:
            snapshot = self._snapshot
            if snapshot is not None and self._is_fresh(snapshot):
                return snapshot
            if self._attempts != observed_attempts:
                # A rebuild finished while we were waiting: share its outcome.
                if snapshot is not None:
                    return snapshot
                if self._last_error is not None:
                    failed = self._last_error
                    raise SourceUnavailable(failed.source, failed.reason) from failed
            return self._rebuild_locked()

    def refresh(self) -> IndexSnapshot:
        """Force a rebuild now (e.g. to preload ahead of a request burst)."""

        with self._lock:
            return self._rebuild_locked()

    def clear(self) -> None:
        with self._lock:
            self._snapshot = None
            self._last_error = None

    def age(self) -> float | None:
        snapshot = self._snapshot
        if snapshot is None:
            return None
        return self._clock() - snapshot.built_at

    def is_stale(self) -> bool:
        snapshot = self._snapshot
        return snapshot is None or not self._is_fresh(snapshot)

    def _is_fresh(self, snapshot: IndexSnapshot) -> bool:
        return self._clock() - snapshot.built_at < self._ttl_seconds

    def _rebuild_locked(self) -> IndexSnapshot:
        previous = self._snapshot
        try:
            snapshot = self._build()
        except SourceUnavailable as exc:
            self._attempts += 1
            self._last_error = exc
            if previous is None:
                _LOGGER.error("[%s] rebuild failed with no cached snapshot: %s", self.name, exc)
                raise
            _LOGGER.warning(
                "[%s] rebuild failed, serving stale snapshot (%d records, age %.0fs): %s",
                self.name,
                len(previous.records),
                self._clock() - previous.built_at,
                exc,
            )
            return previous

        self._snapshot = snapshot
        self._last_error = None
        self._attempts += 1
        return snapshot

    def _build(self) -> IndexSnapshot:
        load_start = time.perf_counter()
        try:
            records = tuple(self._source.fetch_all())
        except SourceUnavailable:
            raise
        except Exception as exc:
            raise SourceUnavailable(self.name, str(exc)) from exc
        fetch_ms = (time.perf_counter() - load_start) * 1000

        build_start = time.perf_counter()
        snapshot = IndexSnapshot.build(records, built_at=self._clock(), options=self._options)
        build_ms = (time.perf_counter() - build_start) * 1000

        _LOGGER.info(
            "[%s] loaded %d records (fetch: %.0fms, search index: %.0fms)",
            self.name,
            len(records),
            fetch_ms,
            build_ms,
        )
        return snapshot
