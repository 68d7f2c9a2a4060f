from catalog_resolver.steps.embedding import (
    HashingTextEmbedder,
    SbertTextEmbedder,
    TextEmbeddingSource,
    build_text_embedder,
)
from catalog_resolver.steps.fuzzy import FuzzyMatcher
from catalog_resolver.steps.index import CandidateIndex, IndexSnapshot, SearchHit, StaticIndex, WeightedSearchIndex
from catalog_resolver.steps.normalize import AttributeNormalizer
from catalog_resolver.steps.similarity import SimilarityRanker, cosine_similarity

__all__ = [
    "HashingTextEmbedder",
    "SbertTextEmbedder",
    "TextEmbeddingSource",
    "build_text_embedder",
    "FuzzyMatcher",
    "CandidateIndex",
    "IndexSnapshot",
    "SearchHit",
    "StaticIndex",
    "WeightedSearchIndex",
    "AttributeNormalizer",
    "SimilarityRanker",
    "cosine_similarity",
]
