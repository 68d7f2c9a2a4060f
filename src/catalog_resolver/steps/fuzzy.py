from __future__ import annotations

from catalog_resolver.confidence import ConfidenceScale, clamp_confidence
from catalog_resolver.config import DEFAULT_SETTINGS, ResolverSettings
from catalog_resolver.interfaces import SnapshotProvider
from catalog_resolver.models import MatchResult, Suggestion
from catalog_resolver.schema import MatchType
from catalog_resolver.steps.index import IndexSnapshot


class FuzzyMatcher:
    """Exact-then-approximate resolution of a free-text query against a snapshot."""

    def __init__(self, settings: ResolverSettings = DEFAULT_SETTINGS) -> None:
        self._scale = ConfidenceScale.from_settings(settings)
        self._max_suggestions = settings.max_suggestions

    def match(self, query: str | None, index: SnapshotProvider) -> MatchResult:
        if not query or not query.strip():
            return MatchResult.none()
        return self.match_snapshot(query, index.get())

    def match_snapshot(self, query: str | None, snapshot: IndexSnapshot) -> MatchResult:
        if not query or not query.strip():
            return MatchResult.none()

        exact = snapshot.exact(query)
        if exact is not None:
            return MatchResult(
                candidate_id=exact.id,
                candidate_name=exact.name,
                confidence=1.0,
                match_type=MatchType.EXACT,
                needs_confirmation=False,
            )

        hits = [hit for hit in snapshot.search(query) if self._scale.is_suggestion(hit.score)]
        if not hits:
            return MatchResult.none()

        # sorted() is stable, so equal scores keep source order
        ranked = sorted(hits, key=lambda hit: -hit.score)
        top = ranked[0]
        suggestions = [
            Suggestion(candidate_id=hit.record.id, candidate_name=hit.record.name, score=clamp_confidence(hit.score))
            for hit in ranked[: self._max_suggestions]
        ]

        confidence = clamp_confidence(top.score)
        is_strong = self._scale.is_strong(confidence)
        return MatchResult(
            candidate_id=top.record.id if is_strong else None,
            candidate_name=top.record.name if is_strong else None,
            confidence=confidence,
            match_type=MatchType.FUZZY if is_strong else MatchType.NONE,
            needs_confirmation=self._scale.needs_confirmation(confidence),
            suggestions=suggestions,
        )
