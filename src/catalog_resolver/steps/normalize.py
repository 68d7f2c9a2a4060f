"""Best-effort normalization of one raw attribute bag into taxonomy-bound values.

Every field is resolved independently: a field that cannot be validated keeps its
raw label with a penalized confidence instead of failing the whole product. The
only escalated failure is ``SourceUnavailable`` from the brand index.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from catalog_resolver.config import DEFAULT_SETTINGS, ResolverSettings
from catalog_resolver.datasets import (
    COLOR_HEX,
    COLOR_RECORDS,
    CONDITION_ALIASES,
    CONDITION_LABELS,
    DEFAULT_CONDITION,
    DEFAULT_TAXONOMY,
    GENRE_TO_TOP_LEVEL,
    MATERIAL_RECORDS,
)
from catalog_resolver.interfaces import SnapshotProvider
from catalog_resolver.models import (
    DEFAULT_COLOR_HEX,
    CandidateRecord,
    MatchResult,
    NormalizedAttribute,
    NormalizedCategory,
    NormalizedColor,
    NormalizedProduct,
    RawAttributes,
)
from catalog_resolver.schema import MatchType, SearchOptions
from catalog_resolver.steps.fuzzy import FuzzyMatcher
from catalog_resolver.steps.index import StaticIndex
from catalog_resolver.taxonomy import FlatCategory, Taxonomy
from catalog_resolver.text import casefold_label

_LOGGER = logging.getLogger(__name__)


class AttributeNormalizer:
    def __init__(
        self,
        brand_index: SnapshotProvider,
        *,
        matcher: FuzzyMatcher | None = None,
        taxonomy: Taxonomy | None = None,
        colors: Sequence[CandidateRecord] | None = None,
        color_hex: Mapping[str, str] | None = None,
        materials: Sequence[CandidateRecord] | None = None,
        genres: Mapping[str, str] | None = None,
        settings: ResolverSettings | None = None,
    ) -> None:
        self._settings = settings or DEFAULT_SETTINGS
        self._brand_index = brand_index
        self._matcher = matcher or FuzzyMatcher(self._settings)
        self._taxonomy = taxonomy or DEFAULT_TAXONOMY
        self._genres = {casefold_label(key): value for key, value in (genres or GENRE_TO_TOP_LEVEL).items()}
        self._penalty = self._settings.unvalidated_penalty

        options = SearchOptions.from_settings(self._settings)
        self._colors = StaticIndex(COLOR_RECORDS if colors is None else colors, options)
        self._color_hex = dict(COLOR_HEX if color_hex is None else color_hex)
        self._materials = StaticIndex(MATERIAL_RECORDS if materials is None else materials, options)

        # One label index per scope; "" is the unscoped index over every leaf.
        self._category_indexes: dict[str, StaticIndex] = {}
        for scope in ("", *self._taxonomy.top_level_ids):
            leaves = self._taxonomy.leaves(scope)
            self._category_indexes[scope] = StaticIndex(
                [CandidateRecord(id=leaf.id, name=leaf.label) for leaf in leaves],
                options,
            )

    def normalize(self, raw: RawAttributes | Mapping[str, Any]) -> NormalizedProduct:
        if not isinstance(raw, RawAttributes):
            raw = RawAttributes.from_mapping(raw, default_confidence=self._settings.default_confidence)

        top_level = self.resolve_top_level(raw.genre)
        brand_match = self._matcher.match(raw.brand, self._brand_index)

        return NormalizedProduct(
            category=self.normalize_category(raw.category, top_level, raw.confidence),
            color=self.normalize_color(raw.color, raw.confidence),
            material=self.normalize_material(raw.material, raw.confidence),
            brand=self.brand_attribute(raw.brand, brand_match),
            condition=self.normalize_condition(raw.condition, raw.confidence),
            brand_match=brand_match,
            top_level=top_level,
            confidence=raw.confidence,
            raw=raw,
        )

    def resolve_top_level(self, genre: str) -> str:
        key = casefold_label(genre)
        if not key:
            return ""
        top_level = self._genres.get(key, key)
        if top_level not in self._taxonomy.top_level_ids:
            _LOGGER.debug("unknown genre %r, category lookup is unscoped", genre)
            return ""
        return top_level

    def normalize_category(self, label: str, top_level: str, confidence: float) -> NormalizedCategory:
        if not label.strip():
            return NormalizedCategory.empty()

        leaf = self._taxonomy.find_leaf_by_label(label, top_level)
        if leaf is not None:
            return self._category_from_leaf(leaf, confidence)

        index = self._category_indexes.get(top_level, self._category_indexes[""])
        match = self._matcher.match(label, index)
        if match.match_type is not MatchType.NONE and match.candidate_id:
            leaf = self._taxonomy.find_by_id(match.candidate_id)
            if leaf is not None:
                return self._category_from_leaf(leaf, confidence * match.confidence)

        _LOGGER.warning("category %r not found under %r, keeping raw label", label, top_level or "*")
        return NormalizedCategory(
            id="",
            display_name=label,
            confidence=confidence * self._penalty,
            validated=False,
        )

    def _category_from_leaf(self, leaf: FlatCategory, confidence: float) -> NormalizedCategory:
        return NormalizedCategory(
            id=leaf.id,
            display_name=leaf.label,
            confidence=confidence,
            validated=True,
            path=list(leaf.path),
            full_label=leaf.full_label,
            icon=self._taxonomy.icon_for(leaf.path),
        )

    def normalize_color(self, label: str, confidence: float) -> NormalizedColor:
        if not label.strip():
            return NormalizedColor.empty()

        match = self._matcher.match(label, self._colors)
        if _is_validated(match):
            return NormalizedColor(
                id=match.candidate_id,
                display_name=match.candidate_name,
                confidence=confidence * match.confidence,
                validated=True,
                hex=self._color_hex.get(match.candidate_id, DEFAULT_COLOR_HEX),
            )
        return NormalizedColor(id="", display_name=label, confidence=confidence * self._penalty, validated=False)

    def normalize_material(self, label: str, confidence: float) -> NormalizedAttribute:
        if not label.strip():
            return NormalizedAttribute.empty()

        match = self._matcher.match(label, self._materials)
        if _is_validated(match):
            return NormalizedAttribute(
                id=match.candidate_id,
                display_name=match.candidate_name,
                confidence=confidence * match.confidence,
                validated=True,
            )
        return NormalizedAttribute(id="", display_name=label, confidence=confidence * self._penalty, validated=False)

    def brand_attribute(self, label: str, match: MatchResult) -> NormalizedAttribute:
        if not _is_validated(match):
            return NormalizedAttribute(id="", display_name=label, confidence=match.confidence, validated=False)
        return NormalizedAttribute(
            id=match.candidate_id,
            display_name=match.candidate_name or label,
            confidence=match.confidence,
            validated=True,
        )

    def normalize_condition(self, label: str, confidence: float) -> NormalizedAttribute:
        condition_id = CONDITION_ALIASES.get(casefold_label(label))
        if condition_id is None:
            return NormalizedAttribute(
                id=DEFAULT_CONDITION,
                display_name=CONDITION_LABELS[DEFAULT_CONDITION],
                confidence=confidence * self._penalty,
                validated=False,
            )
        return NormalizedAttribute(
            id=condition_id,
            display_name=CONDITION_LABELS[condition_id],
            confidence=confidence,
            validated=True,
        )


def _is_validated(match: MatchResult) -> bool:
    return match.match_type is not MatchType.NONE and match.candidate_id is not None
