from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from catalog_resolver.config import DEFAULT_SETTINGS, ResolverSettings
from catalog_resolver.interfaces import CandidateSource, EmbeddingSource, MetadataSource
from catalog_resolver.models import HydratedResult, MatchResult, NormalizedProduct, RawAttributes, SimilarityResult
from catalog_resolver.steps.fuzzy import FuzzyMatcher
from catalog_resolver.steps.index import CandidateIndex
from catalog_resolver.steps.normalize import AttributeNormalizer
from catalog_resolver.steps.similarity import DEFAULT_LIMIT, DEFAULT_MIN_SCORE, SimilarityRanker


class LocalResolverPipeline:
    """In-process wiring of the brand index, normalizer and similarity ranker.

    Owns the single ``CandidateIndex`` for brands; everything else is stateless.
    """

    def __init__(
        self,
        brand_source: CandidateSource,
        settings: ResolverSettings = DEFAULT_SETTINGS,
        *,
        brand_index: CandidateIndex | None = None,
    ) -> None:
        self.settings = settings
        self.brand_index = brand_index or CandidateIndex.from_settings(brand_source, settings, name="brands")
        self.matcher = FuzzyMatcher(settings)
        self.normalizer = AttributeNormalizer(self.brand_index, matcher=self.matcher, settings=settings)
        self.ranker = SimilarityRanker(settings)

    def match_brand(self, query: str) -> MatchResult:
        return self.matcher.match(query, self.brand_index)

    def normalize(self, raw: RawAttributes | Mapping[str, Any]) -> NormalizedProduct:
        return self.normalizer.normalize(raw)

    def recommend(
        self,
        embeddings: EmbeddingSource,
        *,
        query_key: str | None = None,
        similar_to: str | None = None,
        metadata: MetadataSource | None = None,
        min_score: float = DEFAULT_MIN_SCORE,
        limit: int = DEFAULT_LIMIT,
    ) -> list[SimilarityResult] | list[HydratedResult]:
        if (query_key is None) == (similar_to is None):
            raise ValueError("pass exactly one of query_key or similar_to")

        if similar_to is not None:
            results = self.ranker.similar_to(similar_to, embeddings, min_score=min_score, limit=limit)
        else:
            results = self.ranker.rank_key(query_key, embeddings, min_score=min_score, limit=limit)

        if metadata is None:
            return results
        return self.ranker.hydrate(results, metadata)
