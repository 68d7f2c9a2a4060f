from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

from catalog_resolver.confidence import ConfidenceScale, clamp_confidence
from catalog_resolver.schema import ConfidenceTier, MatchType

DEFAULT_CATEGORY_ICON = "📦"
DEFAULT_COLOR_HEX = "#808080"


@dataclass(frozen=True, slots=True)
class CandidateRecord:
    """One named entity (a brand, a color, a category label) eligible for matching."""

    id: str
    name: str
    aliases: tuple[str, ...] = ()
    popularity: float = 0.0

    @classmethod
    def from_mapping(cls, record_id: str, data: Mapping[str, Any]) -> "CandidateRecord":
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            name = record_id

        raw_aliases = data.get("aliases")
        aliases: tuple[str, ...] = ()
        if isinstance(raw_aliases, (list, tuple)):
            aliases = tuple(a.strip() for a in raw_aliases if isinstance(a, str) and a.strip())

        popularity = as_float(data.get("popularity"), 0.0)
        return cls(id=record_id, name=name.strip(), aliases=aliases, popularity=popularity)

    def labels(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)


@dataclass(slots=True)
class Suggestion:
    candidate_id: str
    candidate_name: str
    score: float


@dataclass(slots=True)
class MatchResult:
    """Outcome of resolving one free-text query against a candidate snapshot."""

    candidate_id: str | None
    candidate_name: str | None
    confidence: float
    match_type: MatchType
    needs_confirmation: bool
    suggestions: list[Suggestion] = field(default_factory=list)

    @classmethod
    def none(cls) -> "MatchResult":
        return cls(
            candidate_id=None,
            candidate_name=None,
            confidence=0.0,
            match_type=MatchType.NONE,
            needs_confirmation=False,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class NormalizedAttribute:
    id: str
    display_name: str
    confidence: float
    validated: bool
    tier: ConfidenceTier = field(init=False)

    def __post_init__(self) -> None:
        self.confidence = clamp_confidence(self.confidence)
        self.tier = ConfidenceScale.tier_of(self.confidence)

    @classmethod
    def empty(cls) -> "NormalizedAttribute":
        return cls(id="", display_name="", confidence=0.0, validated=False)


@dataclass(slots=True)
class NormalizedColor(NormalizedAttribute):
    hex: str = DEFAULT_COLOR_HEX


@dataclass(slots=True)
class NormalizedCategory(NormalizedAttribute):
    path: list[str] = field(default_factory=list)
    full_label: str = ""
    icon: str = DEFAULT_CATEGORY_ICON


@dataclass(slots=True)
class RawAttributes:
    """Attribute bag as handed over by the upstream producer, coerced at the boundary."""

    genre: str = ""
    category: str = ""
    color: str = ""
    material: str = ""
    brand: str = ""
    condition: str = ""
    confidence: float = 0.7

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default_confidence: float = 0.7) -> "RawAttributes":
        return cls(
            genre=_as_text(data.get("genre")),
            category=_as_text(data.get("category")),
            color=_as_text(data.get("color")),
            material=_as_text(data.get("material")),
            brand=_as_text(data.get("brand")),
            condition=_as_text(data.get("condition")),
            confidence=clamp_confidence(as_float(data.get("confidence"), default_confidence)),
        )


@dataclass(slots=True)
class NormalizedProduct:
    category: NormalizedCategory
    color: NormalizedColor
    material: NormalizedAttribute
    brand: NormalizedAttribute
    condition: NormalizedAttribute
    brand_match: MatchResult
    top_level: str
    confidence: float
    raw: RawAttributes

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class SimilarityResult:
    id: str
    score: float

    @property
    def similarity_percent(self) -> int:
        return round(self.score * 100)


@dataclass(slots=True)
class HydratedResult:
    id: str
    score: float
    metadata: dict[str, Any] = field(default_factory=dict)


def _as_text(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def as_float(value: Any, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return default
    try:
        number = float(value)
    except ValueError:
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number
