from __future__ import annotations

import json
from pathlib import Path

import pytest

from catalog_resolver.errors import SourceUnavailable
from catalog_resolver.models import CandidateRecord
from catalog_resolver.sources import (
    CsvCandidateSource,
    InMemoryCandidateSource,
    InMemoryMetadataSource,
    JsonEmbeddingSource,
)


def test_csv_source_reads_aliases_and_defaults(tmp_path: Path) -> None:
    path = tmp_path / "brands.csv"
    path.write_text(
        "id,name,aliases,popularity\n"
        "nike,Nike,Just Do It|Swoosh,95\n"
        "cos,,,\n"
        ",Orphan,,\n",
        encoding="utf-8",
    )

    records = CsvCandidateSource(path).fetch_all()

    assert records == [
        CandidateRecord(id="nike", name="Nike", aliases=("Just Do It", "Swoosh"), popularity=95.0),
        CandidateRecord(id="cos", name="cos", aliases=(), popularity=0.0),
    ]


def test_csv_source_missing_file_is_unavailable(tmp_path: Path) -> None:
    with pytest.raises(SourceUnavailable):
        CsvCandidateSource(tmp_path / "missing.csv").fetch_all()


def test_candidate_from_mapping_defaults() -> None:
    source = InMemoryCandidateSource.from_mappings(
        {
            "maje": {"name": "Maje", "aliases": ["MAJE Paris", 3, " "], "popularity": "high"},
            "ba-sh": {},
        }
    )

    maje, bash = source.fetch_all()
    assert maje.aliases == ("MAJE Paris",)
    assert maje.popularity == 0.0
    assert bash.name == "ba-sh"


def test_json_embedding_source_drops_bad_vectors(tmp_path: Path) -> None:
    path = tmp_path / "embeddings.json"
    path.write_text(json.dumps({"a": [1, 0.5], "b": "nope", "c": [1, "x"], "d": [0.1, 0.2]}), encoding="utf-8")

    source = JsonEmbeddingSource(path)

    assert source.vector_for("a") == [1.0, 0.5]
    assert source.vector_for("b") is None
    assert [key for key, _ in source.candidates()] == ["a", "d"]


@pytest.mark.parametrize("content", ["not json", "[1, 2]"])
def test_json_embedding_source_rejects_bad_files(tmp_path: Path, content: str) -> None:
    path = tmp_path / "embeddings.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(SourceUnavailable):
        JsonEmbeddingSource(path)


def test_metadata_lookup_omits_unknown_ids(tmp_path: Path) -> None:
    path = tmp_path / "metadata.json"
    path.write_text(json.dumps({"a": {"title": "Jupe"}, "b": "skip"}), encoding="utf-8")

    metadata = InMemoryMetadataSource.from_json(path)

    assert metadata.lookup(["a", "b", "zz"]) == {"a": {"title": "Jupe"}}
