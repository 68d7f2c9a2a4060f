"""Attribute resolution and similarity ranking for marketplace listings."""

from catalog_resolver.config import ResolverSettings
from catalog_resolver.confidence import ConfidenceScale
from catalog_resolver.errors import CatalogResolverError, SourceUnavailable
from catalog_resolver.models import (
    CandidateRecord,
    HydratedResult,
    MatchResult,
    NormalizedAttribute,
    NormalizedCategory,
    NormalizedColor,
    NormalizedProduct,
    RawAttributes,
    SimilarityResult,
    Suggestion,
)
from catalog_resolver.schema import ConfidenceTier, MatchType

__all__ = [
    "ResolverSettings",
    "ConfidenceScale",
    "CatalogResolverError",
    "SourceUnavailable",
    "CandidateRecord",
    "HydratedResult",
    "MatchResult",
    "NormalizedAttribute",
    "NormalizedCategory",
    "NormalizedColor",
    "NormalizedProduct",
    "RawAttributes",
    "SimilarityResult",
    "Suggestion",
    "ConfidenceTier",
    "MatchType",
]
