from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from catalog_resolver.config import ResolverSettings
from catalog_resolver.errors import CatalogResolverError, SourceUnavailable
from catalog_resolver.interfaces import EmbeddingSource
from catalog_resolver.runners import LocalResolverPipeline
from catalog_resolver.sources import CsvCandidateSource, InMemoryMetadataSource, JsonEmbeddingSource
from catalog_resolver.steps.embedding import TextEmbeddingSource, build_text_embedder
from catalog_resolver.steps.similarity import DEFAULT_LIMIT, DEFAULT_MIN_SCORE, SimilarityRanker

_LOGGER = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 2

    settings = ResolverSettings.from_env()
    try:
        if args.command == "match":
            payload = run_match(args.query, brands=args.brands, settings=settings)
        elif args.command == "normalize":
            payload = run_normalize(args.input, brands=args.brands, settings=settings)
        else:
            payload = run_rank(
                _embedding_source(args),
                query_key=args.query_key,
                similar_to=args.similar_to,
                metadata_path=args.metadata,
                min_score=args.min_score,
                limit=args.limit,
                settings=settings,
            )
    except CatalogResolverError as exc:
        _LOGGER.error("%s", exc)
        return 1

    _write_json(payload)
    return 0


def run_match(query: str, *, brands: Path, settings: ResolverSettings) -> dict[str, Any]:
    pipeline = LocalResolverPipeline(CsvCandidateSource(brands), settings)
    return pipeline.match_brand(query).to_dict()


def run_normalize(input_path: Path, *, brands: Path, settings: ResolverSettings) -> dict[str, Any]:
    pipeline = LocalResolverPipeline(CsvCandidateSource(brands), settings)
    return pipeline.normalize(_read_json_object(input_path)).to_dict()


def run_rank(
    embeddings: EmbeddingSource,
    *,
    query_key: str | None,
    similar_to: str | None,
    metadata_path: Path | None,
    min_score: float,
    limit: int,
    settings: ResolverSettings,
) -> list[dict[str, Any]]:
    ranker = SimilarityRanker(settings)
    if similar_to is not None:
        results = ranker.similar_to(similar_to, embeddings, min_score=min_score, limit=limit)
    else:
        results = ranker.rank_key(query_key, embeddings, min_score=min_score, limit=limit)

    if metadata_path is None:
        return [{**asdict(result), "similarity_percent": result.similarity_percent} for result in results]
    hydrated = ranker.hydrate(results, InMemoryMetadataSource.from_json(metadata_path))
    return [asdict(result) for result in hydrated]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="catalog-resolver", description="Catalog attribute resolver CLI")
    parser.add_argument("--log-level", choices=["debug", "info", "warning", "error"], default="warning")
    subparsers = parser.add_subparsers(dest="command")

    match_parser = subparsers.add_parser("match", help="Resolve one brand query against a brand CSV")
    match_parser.add_argument("query")
    match_parser.add_argument("--brands", type=Path, required=True, help="CSV with id,name,aliases,popularity")

    normalize_parser = subparsers.add_parser("normalize", help="Normalize a raw attribute bag (JSON object)")
    normalize_parser.add_argument("--input", type=Path, required=True)
    normalize_parser.add_argument("--brands", type=Path, required=True, help="CSV with id,name,aliases,popularity")

    rank_parser = subparsers.add_parser("rank", help="Rank embeddings by cosine similarity")
    vectors = rank_parser.add_mutually_exclusive_group(required=True)
    vectors.add_argument("--embeddings", type=Path, default=None, help='JSON object {"id": [floats]}')
    vectors.add_argument("--texts", type=Path, default=None, help='JSON object {"id": "listing text"}, embedded locally')
    rank_parser.add_argument("--embedder", choices=["hash", "sbert"], default="hash")
    rank_parser.add_argument("--sbert-model", type=str, default="all-MiniLM-L6-v2")
    target = rank_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--query-key", type=str, default=None)
    target.add_argument("--similar-to", type=str, default=None)
    rank_parser.add_argument("--min-score", type=float, default=DEFAULT_MIN_SCORE)
    rank_parser.add_argument("--limit", type=int, default=DEFAULT_LIMIT)
    rank_parser.add_argument("--metadata", type=Path, default=None, help='JSON object {"id": {...}}')

    return parser


def _embedding_source(args: argparse.Namespace) -> EmbeddingSource:
    if args.embeddings is not None:
        return JsonEmbeddingSource(args.embeddings)
    texts = _read_json_object(args.texts)
    embedder = build_text_embedder(args.embedder, model_name=args.sbert_model)
    return TextEmbeddingSource({str(key): str(value) for key, value in texts.items()}, embedder)


def _read_json_object(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, ValueError) as exc:
        raise SourceUnavailable(str(path), str(exc)) from exc
    if not isinstance(payload, dict):
        raise SourceUnavailable(str(path), "expected a JSON object")
    return payload


def _write_json(payload: object) -> None:
    json.dump(payload, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


if __name__ == "__main__":
    sys.exit(main())
