from __future__ import annotations

import pytest

from catalog_resolver.config import ResolverSettings
from catalog_resolver.models import CandidateRecord
from catalog_resolver.schema import MatchType
from catalog_resolver.sources import InMemoryCandidateSource
from catalog_resolver.steps.fuzzy import FuzzyMatcher
from catalog_resolver.steps.index import CandidateIndex, StaticIndex


def test_exact_name_match(nike_records: list[CandidateRecord]) -> None:
    result = FuzzyMatcher().match("nike", StaticIndex(nike_records))

    assert result.candidate_id == "nike"
    assert result.confidence == 1.0
    assert result.match_type is MatchType.EXACT
    assert result.needs_confirmation is False


def test_exact_alias_match(nike_records: list[CandidateRecord]) -> None:
    result = FuzzyMatcher().match("JUST DO IT", StaticIndex(nike_records))

    assert result.candidate_id == "nike"
    assert result.match_type is MatchType.EXACT


def test_typo_is_a_strong_fuzzy_match_needing_confirmation(nike_records: list[CandidateRecord]) -> None:
    result = FuzzyMatcher().match("Nke", StaticIndex(nike_records))

    assert result.match_type is MatchType.FUZZY
    assert result.candidate_id == "nike"
    assert result.candidate_name == "Nike"
    assert 0.75 <= result.confidence < 0.90
    assert result.needs_confirmation is True
    assert [s.candidate_id for s in result.suggestions] == ["nike"]


@pytest.mark.parametrize("query", ["", "   ", None])
def test_blank_query_returns_none(nike_records: list[CandidateRecord], query: str | None) -> None:
    result = FuzzyMatcher().match(query, StaticIndex(nike_records))

    assert result.match_type is MatchType.NONE
    assert result.confidence == 0
    assert result.candidate_id is None
    assert result.suggestions == []
    assert result.needs_confirmation is False


def test_blank_query_does_not_touch_index() -> None:
    class ExplodingIndex:
        def get(self):
            raise AssertionError("index should not be read")

    assert FuzzyMatcher().match("", ExplodingIndex()).match_type is MatchType.NONE


def test_no_hits_returns_none(nike_records: list[CandidateRecord]) -> None:
    result = FuzzyMatcher().match("Balenciaga", StaticIndex(nike_records))

    assert result == result.none()


def test_weak_match_only_suggests() -> None:
    records = [CandidateRecord(id="sandro", name="Sandro")]
    # "sandrine" vs "sandro": similarity ~0.71, between suggestion and strong
    result = FuzzyMatcher().match("sandrine", StaticIndex(records))

    assert result.match_type is MatchType.NONE
    assert result.candidate_id is None
    assert result.candidate_name is None
    assert 0.5 <= result.confidence < 0.75
    assert result.needs_confirmation is False
    assert [s.candidate_id for s in result.suggestions] == ["sandro"]


def test_high_similarity_is_auto_selected() -> None:
    records = [CandidateRecord(id="lacoste", name="Lacoste Paris")]
    result = FuzzyMatcher().match("lacoste pariss", StaticIndex(records))

    assert result.match_type is MatchType.FUZZY
    assert result.confidence >= 0.90
    assert result.needs_confirmation is False


def test_suggestions_are_bounded_and_sorted() -> None:
    records = [CandidateRecord(id=f"b{i}", name=f"Brand{i}") for i in range(20)]
    result = FuzzyMatcher().match("brand", StaticIndex(records))

    scores = [s.score for s in result.suggestions]
    assert 0 < len(result.suggestions) <= 5
    assert scores == sorted(scores, reverse=True)
    assert all(0.0 <= score <= 1.0 for score in scores)


def test_suggestion_ties_keep_source_order() -> None:
    records = [CandidateRecord(id=f"b{i}", name=f"Brand{i}") for i in range(3)]
    result = FuzzyMatcher().match("brand", StaticIndex(records))

    assert [s.candidate_id for s in result.suggestions] == ["b0", "b1", "b2"]


def test_max_suggestions_is_configurable() -> None:
    records = [CandidateRecord(id=f"b{i}", name=f"Brand{i}") for i in range(10)]
    result = FuzzyMatcher(ResolverSettings(max_suggestions=2)).match("brand", StaticIndex(records))

    assert len(result.suggestions) == 2


@pytest.mark.parametrize("query", ["nike", "Nke", "Nikee", "adiddas", "zzz", "Sezane", "sandro pari"])
def test_confirmation_iff_strong_but_not_auto(brand_source: InMemoryCandidateSource, query: str) -> None:
    result = FuzzyMatcher().match(query, CandidateIndex(brand_source))

    assert 0.0 <= result.confidence <= 1.0
    assert result.needs_confirmation == (0.75 <= result.confidence < 0.90)


def test_accent_insensitive_fuzzy_match(brand_source: InMemoryCandidateSource) -> None:
    result = FuzzyMatcher().match("Sézanne", CandidateIndex(brand_source))

    assert result.candidate_id == "sezane"
    assert result.match_type is MatchType.FUZZY


def test_to_dict_uses_plain_values(nike_records: list[CandidateRecord]) -> None:
    payload = FuzzyMatcher().match("Nke", StaticIndex(nike_records)).to_dict()

    assert payload["match_type"] == "fuzzy"
    assert payload["suggestions"][0]["candidate_id"] == "nike"
