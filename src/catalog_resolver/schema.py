from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:
    from catalog_resolver.config import ResolverSettings


class MatchType(StrEnum):
    EXACT = "exact"
    FUZZY = "fuzzy"
    NONE = "none"


class ConfidenceTier(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class SearchOptions:
    """Knobs for the weighted search structure built over candidate names and aliases."""

    field_weights: Mapping[str, float]
    min_match_length: int = 2
    distance_threshold: float = 0.4

    @classmethod
    def from_mapping(
        cls,
        weights: Mapping[str, float],
        min_match_length: int = 2,
        distance_threshold: float = 0.4,
    ) -> "SearchOptions":
        frozen = {field: float(weight) for field, weight in weights.items()}
        return cls(
            field_weights=frozen,
            min_match_length=min_match_length,
            distance_threshold=distance_threshold,
        )

    @classmethod
    def from_settings(cls, settings: "ResolverSettings") -> "SearchOptions":
        return cls.from_mapping(
            {"name": settings.name_weight, "aliases": settings.alias_weight},
            min_match_length=settings.min_match_length,
            distance_threshold=settings.fuzzy_distance_threshold,
        )

    def weight_for(self, field: str) -> float:
        return self.field_weights.get(field, 0.0)


DEFAULT_SEARCH_OPTIONS = SearchOptions.from_mapping({"name": 1.0, "aliases": 0.8})
