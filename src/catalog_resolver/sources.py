"""File-backed and in-memory implementations of the external source interfaces."""

from __future__ import annotations

import csv
import json
import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from catalog_resolver.errors import SourceUnavailable
from catalog_resolver.models import CandidateRecord, as_float

_LOGGER = logging.getLogger(__name__)

ALIAS_SEPARATOR = "|"


class InMemoryCandidateSource:
    def __init__(self, records: Iterable[CandidateRecord], name: str = "memory") -> None:
        self._records = list(records)
        self.name = name

    @classmethod
    def from_mappings(cls, documents: Mapping[str, Mapping[str, Any]], name: str = "memory") -> "InMemoryCandidateSource":
        return cls((CandidateRecord.from_mapping(record_id, doc) for record_id, doc in documents.items()), name=name)

    def fetch_all(self) -> list[CandidateRecord]:
        return list(self._records)


class CsvCandidateSource:
    """Reads ``id,name,aliases,popularity`` rows; aliases are ``|``-separated.

    The file is re-read on every ``fetch_all`` so an index rebuild picks up edits.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    def fetch_all(self) -> list[CandidateRecord]:
        records: list[CandidateRecord] = []
        try:
            with self._path.open("r", newline="", encoding="utf-8") as handle:
                reader = csv.DictReader(handle)
                for row in reader:
                    record_id = (row.get("id") or "").strip()
                    if not record_id:
                        continue
                    aliases = (row.get("aliases") or "").split(ALIAS_SEPARATOR)
                    records.append(
                        CandidateRecord.from_mapping(
                            record_id,
                            {"name": row.get("name"), "aliases": aliases, "popularity": row.get("popularity")},
                        )
                    )
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            raise SourceUnavailable(str(self._path), str(exc)) from exc

        _LOGGER.debug("read %d candidate rows from %s", len(records), self._path)
        return records


class InMemoryEmbeddingSource:
    def __init__(self, vectors: Mapping[str, Sequence[float]]) -> None:
        self._vectors = {key: list(vector) for key, vector in vectors.items()}

    def vector_for(self, key: str) -> list[float] | None:
        return self._vectors.get(key)

    def candidates(self) -> list[tuple[str, list[float]]]:
        return list(self._vectors.items())


class JsonEmbeddingSource(InMemoryEmbeddingSource):
    """Loads ``{"id": [floats], ...}`` once at construction; bad entries are dropped."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, ValueError) as exc:
            raise SourceUnavailable(str(self._path), str(exc)) from exc

        if not isinstance(payload, dict):
            raise SourceUnavailable(str(self._path), "expected a JSON object of id -> vector")

        vectors: dict[str, list[float]] = {}
        for key, raw in payload.items():
            vector = _coerce_vector(raw)
            if vector is None:
                _LOGGER.warning("skipping malformed embedding for %r in %s", key, self._path)
                continue
            vectors[str(key)] = vector
        super().__init__(vectors)


class InMemoryMetadataSource:
    def __init__(self, documents: Mapping[str, Mapping[str, Any]]) -> None:
        self._documents = {key: dict(doc) for key, doc in documents.items()}

    @classmethod
    def from_json(cls, path: Path | str) -> "InMemoryMetadataSource":
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, ValueError) as exc:
            raise SourceUnavailable(str(path), str(exc)) from exc
        if not isinstance(payload, dict):
            raise SourceUnavailable(str(path), "expected a JSON object of id -> document")
        return cls({str(key): doc for key, doc in payload.items() if isinstance(doc, dict)})

    def lookup(self, ids: Sequence[str]) -> dict[str, dict[str, Any]]:
        return {item_id: self._documents[item_id] for item_id in ids if item_id in self._documents}


def _coerce_vector(raw: Any) -> list[float] | None:
    if not isinstance(raw, list):
        return None
    vector: list[float] = []
    for value in raw:
        number = as_float(value, math.nan)
        if math.isnan(number):
            return None
        vector.append(number)
    return vector
