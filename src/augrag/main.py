"""Application entry point and composition root."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import pydantic

from augrag import __version__
from augrag.application.dto.chunking_config import ChunkingConfig
from augrag.application.dto.retrieval_config import RetrievalConfig
from augrag.application.ports import (
    CompletionProvider,
    EmbeddingProvider,
    ExternalSearchProvider,
    VectorStore,
)
from augrag.application.use_cases.document.ingest_document import IngestDocumentUseCase
from augrag.application.use_cases.search.retriever import Retriever
from augrag.config import Settings, get_settings
from augrag.domain.exceptions import AugRAGError
from augrag.infrastructure.chunking.semantic_chunker import SemanticChunker
from augrag.infrastructure.completion.openai_provider import OpenAICompletionProvider
from augrag.infrastructure.document_parsers import parse_file
from augrag.infrastructure.embedding.openai_provider import OpenAIEmbeddingProvider
from augrag.infrastructure.persistence.sqlite.vector_store import SqliteVectorStore
from augrag.infrastructure.resilience import (
    ResilientCompletionProvider,
    ResilientEmbeddingProvider,
    ResilientSearchProvider,
    RetryPolicy,
    SlidingWindowRateLimiter,
)
from augrag.infrastructure.search.perplexity_provider import PerplexitySearchProvider
from augrag.logger import configure_logging

logger = logging.getLogger(__name__)


def _retry_policy(settings: Settings) -> RetryPolicy:
    return RetryPolicy(
        max_attempts=settings.retry_max_attempts,
        initial_delay=settings.retry_initial_delay,
        max_delay=settings.retry_max_delay,
    )


def build_rate_limiter(settings: Settings) -> SlidingWindowRateLimiter | None:
    """One limiter shared by all OpenAI calls, or None when unlimited."""
    if not settings.requests_per_minute:
        return None
    return SlidingWindowRateLimiter(max_requests=settings.requests_per_minute, window=60.0)


def build_vector_store(settings: Settings) -> SqliteVectorStore:
    """Vector store for the configured database file (not yet initialized)."""
    return SqliteVectorStore(settings.database_path, dimensions=settings.embedding_dimensions)


def build_embedding_provider(
    settings: Settings, rate_limiter: SlidingWindowRateLimiter | None = None
) -> EmbeddingProvider:
    """OpenAI embedding provider wrapped with retry and rate limiting."""
    provider = OpenAIEmbeddingProvider(
        base_url=settings.embedding_api_url,
        api_key=settings.embedding_api_key,
        model=settings.embedding_model,
        batch_size=settings.embedding_batch_size,
        timeout=settings.request_timeout,
    )
    return ResilientEmbeddingProvider(provider, _retry_policy(settings), rate_limiter)


def build_completion_provider(
    settings: Settings, rate_limiter: SlidingWindowRateLimiter | None = None
) -> CompletionProvider:
    """OpenAI completion provider wrapped with retry and rate limiting."""
    provider = OpenAICompletionProvider(
        base_url=settings.completion_api_url,
        api_key=settings.completion_api_key or settings.embedding_api_key,
        model=settings.completion_model,
        temperature=settings.completion_temperature,
        timeout=settings.request_timeout,
    )
    return ResilientCompletionProvider(provider, _retry_policy(settings), rate_limiter)


def build_search_provider(settings: Settings) -> ExternalSearchProvider | None:
    """Perplexity search provider, or None when no API key is configured."""
    if not settings.search_api_key:
        return None
    provider = PerplexitySearchProvider(
        api_key=settings.search_api_key,
        base_url=settings.search_api_url,
        max_results=settings.search_max_results,
        timeout=settings.request_timeout,
    )
    return ResilientSearchProvider(provider, _retry_policy(settings))


def build_retriever(settings: Settings, vector_store: VectorStore) -> Retriever:
    """Composition root for the query path."""
    rate_limiter = build_rate_limiter(settings)
    return Retriever(
        embedding_provider=build_embedding_provider(settings, rate_limiter),
        vector_store=vector_store,
        config=RetrievalConfig(
            relevance_threshold=settings.relevance_threshold,
            top_k=settings.retrieval_top_k,
            fetch_k=settings.retrieval_fetch_k,
            quote_max_length=settings.quote_max_length,
            external_on_irrelevant=settings.external_on_irrelevant,
        ),
        completion_provider=build_completion_provider(settings, rate_limiter),
        search_provider=build_search_provider(settings),
    )


def build_ingest_use_case(settings: Settings, vector_store: VectorStore) -> IngestDocumentUseCase:
    """Composition root for the ingestion path."""
    return IngestDocumentUseCase(
        vector_store=vector_store,
        chunker=SemanticChunker(),
        embedding_provider=build_embedding_provider(settings, build_rate_limiter(settings)),
        chunking_config=ChunkingConfig(
            target_size=settings.chunk_size,
            overlap_percent=settings.chunk_overlap_percent,
        ),
    )


async def _ingest(settings: Settings, path: Path, label: str | None) -> None:
    parsed = parse_file(path.read_bytes(), filename=path.name)
    async with build_vector_store(settings) as store:
        use_case = build_ingest_use_case(settings, store)
        result = await use_case.execute(label or path.name, parsed.text)
    print(f"Ingested {result.label!r} as document {result.document_id} ({result.chunk_count} chunks)")
    print(
        f"Store: {result.stats.document_count} documents, "
        f"{result.stats.chunk_count} chunks, {result.stats.vector_count} vectors"
    )


async def _ask(settings: Settings, query: str) -> None:
    async with build_vector_store(settings) as store:
        output = await build_retriever(settings, store).answer(query)
    if not output.found:
        print(output.message)
        return
    print(output.answer)
    if output.source:
        print(f"\nSource ({output.source.source_type}): {output.source.label}")
        if output.source.url:
            print(output.source.url)
        print(f'"{output.source.quote}"')
    diagnostics = output.diagnostics
    print(
        f"\n[{diagnostics.provenance}: {diagnostics.passed_threshold}/"
        f"{diagnostics.total_candidates} candidates within distance {diagnostics.relevance_threshold}]"
    )


async def _stats(settings: Settings) -> None:
    async with build_vector_store(settings) as store:
        stats = await store.get_stats()
    print(f"documents={stats.document_count} chunks={stats.chunk_count} vectors={stats.vector_count}")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="augrag", description="Self-augmenting RAG knowledge base")
    parser.add_argument("--version", action="version", version=f"AugRAG v{__version__}")
    commands = parser.add_subparsers(dest="command", required=True)

    ingest = commands.add_parser("ingest", help="Chunk, embed and store a .txt/.md/.html file")
    ingest.add_argument("path", type=Path)
    ingest.add_argument("--label", help="Document label (defaults to the file name)")

    ask = commands.add_parser("ask", help="Answer a question from the knowledge base")
    ask.add_argument("query")

    commands.add_parser("stats", help="Show document, chunk and vector counts")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = _parser().parse_args(argv)
    configure_logging()
    try:
        settings = get_settings()
    except pydantic.ValidationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1
    configure_logging(settings.log_level)

    if args.command == "ingest":
        coro = _ingest(settings, args.path, args.label)
    elif args.command == "ask":
        coro = _ask(settings, args.query)
    else:
        coro = _stats(settings)

    try:
        asyncio.run(coro)
    except (AugRAGError, OSError) as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
