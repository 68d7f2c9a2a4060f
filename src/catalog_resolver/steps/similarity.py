"""Cosine ranking of candidate embeddings against one query embedding.

Vectors whose length differs from the query are not comparable and are skipped
rather than reported as errors. Hydration is a separate step that only touches
the ids that survived ranking.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence

import numpy as np

from catalog_resolver.config import DEFAULT_SETTINGS, ResolverSettings
from catalog_resolver.interfaces import EmbeddingSource, MetadataSource
from catalog_resolver.models import HydratedResult, SimilarityResult

_LOGGER = logging.getLogger(__name__)

DEFAULT_MIN_SCORE = 0.5
DEFAULT_LIMIT = 20

Candidates = Mapping[str, Sequence[float]] | Iterable[tuple[str, Sequence[float]]]


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    if len(a) != len(b) or len(a) == 0:
        return 0.0
    left = np.asarray(a, dtype=np.float64)
    right = np.asarray(b, dtype=np.float64)
    denominator = float(np.linalg.norm(left) * np.linalg.norm(right))
    if denominator == 0.0 or not math.isfinite(denominator):
        return 0.0
    score = float(np.dot(left, right)) / denominator
    if not math.isfinite(score):
        return 0.0
    return max(-1.0, min(1.0, score))


class SimilarityRanker:
    def __init__(self, settings: ResolverSettings = DEFAULT_SETTINGS) -> None:
        self._hard_cap = settings.similarity_hard_cap

    def rank(
        self,
        query: Sequence[float],
        candidates: Candidates,
        min_score: float = DEFAULT_MIN_SCORE,
        limit: int = DEFAULT_LIMIT,
    ) -> list[SimilarityResult]:
        cap = min(limit, self._hard_cap)
        dimensions = len(query)
        if cap <= 0 or dimensions == 0:
            return []

        pairs = candidates.items() if isinstance(candidates, Mapping) else candidates
        ids: list[str] = []
        rows: list[Sequence[float]] = []
        skipped = 0
        for candidate_id, vector in pairs:
            if len(vector) != dimensions:
                skipped += 1
                continue
            ids.append(candidate_id)
            rows.append(vector)
        if skipped:
            _LOGGER.debug("skipped %d candidates with dimension != %d", skipped, dimensions)
        if not ids:
            return []

        scores = _cosine_scores(np.asarray(query, dtype=np.float64), np.asarray(rows, dtype=np.float64))
        results = [
            SimilarityResult(id=candidate_id, score=float(score))
            for candidate_id, score in zip(ids, scores)
            if score >= min_score
        ]
        # sort() is stable, so ties keep insertion order
        results.sort(key=lambda result: -result.score)
        return results[:cap]

    def rank_key(
        self,
        query_key: str,
        source: EmbeddingSource,
        min_score: float = DEFAULT_MIN_SCORE,
        limit: int = DEFAULT_LIMIT,
    ) -> list[SimilarityResult]:
        query = source.vector_for(query_key)
        if query is None or len(query) == 0:
            _LOGGER.debug("no embedding for query key %r", query_key)
            return []
        return self.rank(query, source.candidates(), min_score=min_score, limit=limit)

    def similar_to(
        self,
        item_id: str,
        source: EmbeddingSource,
        min_score: float = DEFAULT_MIN_SCORE,
        limit: int = DEFAULT_LIMIT,
    ) -> list[SimilarityResult]:
        """Rank other items against ``item_id``'s own vector; the item itself is excluded."""

        query = source.vector_for(item_id)
        if query is None or len(query) == 0:
            _LOGGER.debug("no embedding for item %r", item_id)
            return []
        others = ((candidate_id, vector) for candidate_id, vector in source.candidates() if candidate_id != item_id)
        return self.rank(query, others, min_score=min_score, limit=limit)

    def hydrate(self, results: Sequence[SimilarityResult], metadata: MetadataSource) -> list[HydratedResult]:
        if not results:
            return []
        documents = metadata.lookup([result.id for result in results])
        hydrated: list[HydratedResult] = []
        for result in results:
            document = documents.get(result.id)
            if document is None:
                _LOGGER.debug("skipping %r: no metadata", result.id)
                continue
            hydrated.append(HydratedResult(id=result.id, score=result.score, metadata=dict(document)))
        return hydrated


def _cosine_scores(query: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    query_norm = np.linalg.norm(query)
    norms = np.linalg.norm(matrix, axis=1)
    denominators = norms * query_norm
    dots = matrix @ query
    with np.errstate(divide="ignore", invalid="ignore"):
        scores = np.where(denominators > 0, dots / denominators, 0.0)
    scores = np.nan_to_num(scores, nan=0.0, posinf=0.0, neginf=0.0)
    return np.clip(scores, -1.0, 1.0)
