from __future__ import annotations

from dataclasses import dataclass

from catalog_resolver.config import ResolverSettings
from catalog_resolver.schema import ConfidenceTier

HIGH_TIER_MIN = 0.7
MEDIUM_TIER_MIN = 0.4


@dataclass(frozen=True)
class ConfidenceScale:
    """Maps numeric confidence to presentation tiers and matching decisions."""

    AUTO_SELECT = 0.90
    STRONG = 0.75
    SUGGESTION = 0.50

    auto_select: float = AUTO_SELECT
    strong: float = STRONG
    suggestion: float = SUGGESTION

    @classmethod
    def from_settings(cls, settings: ResolverSettings) -> "ConfidenceScale":
        return cls(
            auto_select=settings.auto_select_threshold,
            strong=settings.strong_threshold,
            suggestion=settings.suggestion_threshold,
        )

    @staticmethod
    def tier_of(score: float) -> ConfidenceTier:
        if score >= HIGH_TIER_MIN:
            return ConfidenceTier.HIGH
        if score >= MEDIUM_TIER_MIN:
            return ConfidenceTier.MEDIUM
        return ConfidenceTier.LOW

    def is_auto_select(self, score: float) -> bool:
        return score >= self.auto_select

    def is_strong(self, score: float) -> bool:
        return score >= self.strong

    def is_suggestion(self, score: float) -> bool:
        return score >= self.suggestion

    def needs_confirmation(self, score: float) -> bool:
        return self.is_strong(score) and not self.is_auto_select(score)


def clamp_confidence(value: float) -> float:
    return min(1.0, max(0.0, float(value)))
