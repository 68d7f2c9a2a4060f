from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Mapping, Protocol, Sequence

from catalog_resolver.models import CandidateRecord

if TYPE_CHECKING:
    from catalog_resolver.steps.index import IndexSnapshot


class CandidateSource(Protocol):
    """Full candidate set for one domain (brands, labels, ...).

    Implementations raise ``SourceUnavailable`` on transport or storage errors.
    """

    def fetch_all(self) -> Sequence[CandidateRecord]:
        ...


class EmbeddingSource(Protocol):
    """Opaque producer of embedding vectors for query keys and candidate ids."""

    def vector_for(self, key: str) -> Sequence[float] | None:
        ...

    def candidates(self) -> Iterable[tuple[str, Sequence[float]]]:
        ...


class MetadataSource(Protocol):
    """Resolves ranked ids to display data; unknown ids are simply absent."""

    def lookup(self, ids: Sequence[str]) -> Mapping[str, Mapping[str, Any]]:
        ...


class SnapshotProvider(Protocol):
    """Anything that can hand out a consistent, searchable candidate snapshot."""

    def get(self) -> IndexSnapshot:
        ...


class TextEmbedder(Protocol):
    """Maps texts into embedding vectors (used by local embedding sources)."""

    def embed(self, texts: Sequence[str]) -> list[list[float]]:
        ...
