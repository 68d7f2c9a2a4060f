from __future__ import annotations

import pytest

from catalog_resolver.models import CandidateRecord
from catalog_resolver.sources import InMemoryCandidateSource


@pytest.fixture
def nike_records() -> list[CandidateRecord]:
    return [CandidateRecord(id="nike", name="Nike", aliases=("Just Do It",))]


@pytest.fixture
def brand_records() -> list[CandidateRecord]:
    return [
        CandidateRecord(id="nike", name="Nike", aliases=("Just Do It",), popularity=95),
        CandidateRecord(id="adidas", name="Adidas", aliases=("Three Stripes",), popularity=90),
        CandidateRecord(id="zara", name="Zara", popularity=88),
        CandidateRecord(id="sandro", name="Sandro", aliases=("Sandro Paris",), popularity=60),
        CandidateRecord(id="maje", name="Maje", popularity=58),
        CandidateRecord(id="sezane", name="Sézane", aliases=("Sezane",), popularity=70),
    ]


@pytest.fixture
def brand_source(brand_records: list[CandidateRecord]) -> InMemoryCandidateSource:
    return InMemoryCandidateSource(brand_records, name="brands")
