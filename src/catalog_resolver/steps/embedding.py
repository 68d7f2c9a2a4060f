from __future__ import annotations

import zlib
from collections.abc import Mapping, Sequence
from math import sqrt
from typing import Any

from catalog_resolver.interfaces import TextEmbedder
from catalog_resolver.text import fold_label


class HashingTextEmbedder:
    """Hashing-based baseline embedder for local runs and tests.

    Tokens are hashed with crc32 so vectors are stable across processes.
    Replace with a production model adapter (sentence-transformers, hosted APIs, etc).
    """

    def __init__(self, dimensions: int = 64) -> None:
        self._dimensions = dimensions

    def embed(self, texts: Sequence[str]) -> list[list[float]]:
        vectors: list[list[float]] = []
        for text in texts:
            vector = [0.0] * self._dimensions
            for token in fold_label(text).split():
                idx = zlib.crc32(token.encode("utf-8")) % self._dimensions
                vector[idx] += 1.0
            vectors.append(_l2_normalize(vector))
        return vectors


class SbertTextEmbedder:
    """Listing texts through a sentence-transformers model; vectors come back unit-length."""

    def __init__(self, model_name: str = "all-MiniLM-L6-v2", batch_size: int = 64) -> None:
        self.model_name = model_name
        self._batch_size = batch_size
        self._model = _load_sentence_transformer(model_name)

    def embed(self, texts: Sequence[str]) -> list[list[float]]:
        if not texts:
            return []
        matrix = self._model.encode(
            [fold_label(text) for text in texts],
            batch_size=self._batch_size,
            normalize_embeddings=True,
            convert_to_numpy=True,
            show_progress_bar=False,
        )
        return [[float(value) for value in row] for row in matrix]


class TextEmbeddingSource:
    """Exposes a fixed set of embedded texts as an ``EmbeddingSource``.

    Texts are embedded once, in one batch, at construction.
    """

    def __init__(self, texts_by_id: Mapping[str, str], embedder: TextEmbedder) -> None:
        ids = list(texts_by_id)
        vectors = embedder.embed([texts_by_id[item_id] for item_id in ids]) if ids else []
        self._vectors = dict(zip(ids, vectors))

    def vector_for(self, key: str) -> list[float] | None:
        return self._vectors.get(key)

    def candidates(self) -> list[tuple[str, list[float]]]:
        return list(self._vectors.items())


def build_text_embedder(backend: str, *, model_name: str = "all-MiniLM-L6-v2", dimensions: int = 256) -> TextEmbedder:
    if backend == "sbert":
        return SbertTextEmbedder(model_name=model_name)
    if backend == "hash":
        return HashingTextEmbedder(dimensions=dimensions)
    raise ValueError(f"unknown embedder backend: {backend!r}")


def _load_sentence_transformer(model_name: str) -> Any:
    try:
        from sentence_transformers import SentenceTransformer
    except ImportError as exc:
        raise ImportError(
            "The sbert embedder needs sentence-transformers. "
            "Install with: pip install 'catalog-resolver[sbert]'"
        ) from exc
    return SentenceTransformer(model_name)


def _l2_normalize(vector: Sequence[float]) -> list[float]:
    norm = sqrt(sum(v * v for v in vector))
    if norm == 0:
        return [0.0] * len(vector)
    return [v / norm for v in vector]
