"""Pytest fixtures for AugRAG tests."""

from __future__ import annotations

import math
from collections.abc import AsyncIterator, Sequence
from datetime import UTC, datetime

import pytest
import pytest_asyncio

from augrag.application.dto.chunking_config import ChunkingConfig
from augrag.application.dto.retrieval_config import RetrievalConfig
from augrag.application.ports import ExternalSearchResult
from augrag.domain.entities import Document, SearchResult
from augrag.domain.exceptions import ChunkVectorMismatch, StoreNotInitialized
from augrag.domain.value_objects import StoreStats, TextChunk
from augrag.infrastructure.persistence.sqlite.vector_store import SqliteVectorStore

DIMENSIONS = 4


# --- Fake providers ---


class FakeEmbeddingProvider:
    """Embedding provider returning preset vectors per text.

    Unknown texts get the default vector. Every call is recorded.
    """

    def __init__(
        self,
        vectors: dict[str, list[float]] | None = None,
        default: list[float] | None = None,
    ) -> None:
        self.vectors = dict(vectors or {})
        self.default = default or [0.0] * DIMENSIONS
        self.calls: list[str] = []
        self.batch_calls: list[list[str]] = []

    def _vector(self, text: str) -> list[float]:
        return list(self.vectors.get(text, self.default))

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        return self._vector(text)

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        self.batch_calls.append(list(texts))
        return [self._vector(t) for t in texts]


class FakeCompletionProvider:
    """Completion provider echoing its inputs."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    async def answer(self, query: str, context: str) -> str:
        self.calls.append((query, context))
        return f"answer to {query}"


class FakeSearchProvider:
    """External search provider returning preset results."""

    def __init__(self, results: list[ExternalSearchResult] | None = None) -> None:
        self.results = list(results or [])
        self.calls: list[str] = []

    async def search(self, query: str) -> list[ExternalSearchResult]:
        self.calls.append(query)
        return list(self.results)


# --- Fake vector store ---


class FakeVectorStore:
    """In-memory vector store with exact L2 search, ties in insertion order."""

    def __init__(self) -> None:
        self._initialized = False
        self._next_document_id = 1
        self._next_chunk_id = 1
        self.documents: dict[int, Document] = {}
        # chunk_id -> (document_id, index, text, vector)
        self.chunks: dict[int, tuple[int, int, str, list[float]]] = {}
        self.saved_labels: list[str] = []

    async def initialize(self) -> None:
        self._initialized = True

    async def close(self) -> None:
        self._initialized = False

    def _check(self) -> None:
        if not self._initialized:
            raise StoreNotInitialized("Vector store is not initialized")

    async def save_document(
        self,
        label: str,
        chunks: Sequence[TextChunk],
        vectors: Sequence[Sequence[float]],
    ) -> int:
        self._check()
        if len(chunks) != len(vectors):
            raise ChunkVectorMismatch(f"Got {len(chunks)} chunks but {len(vectors)} vectors")
        for doc_id in [d.id for d in self.documents.values() if d.label == label]:
            del self.documents[doc_id]
            for chunk_id in [c for c, v in self.chunks.items() if v[0] == doc_id]:
                del self.chunks[chunk_id]
        doc_id = self._next_document_id
        self._next_document_id += 1
        self.documents[doc_id] = Document(id=doc_id, label=label, created_at=datetime.now(UTC))
        for i, (chunk, vector) in enumerate(zip(chunks, vectors, strict=True)):
            self.chunks[self._next_chunk_id] = (doc_id, i, chunk.text, list(vector))
            self._next_chunk_id += 1
        self.saved_labels.append(label)
        return doc_id

    async def search(self, query_vector: Sequence[float], k: int) -> list[SearchResult]:
        self._check()
        scored = [
            SearchResult(
                text=text,
                distance=math.dist(query_vector, vector),
                label=self.documents[doc_id].label,
                chunk_id=chunk_id,
                document_id=doc_id,
                chunk_index=index,
            )
            for chunk_id, (doc_id, index, text, vector) in self.chunks.items()
        ]
        scored.sort(key=lambda r: (r.distance, r.chunk_id))
        return scored[:k]

    async def get_stats(self) -> StoreStats:
        self._check()
        return StoreStats(
            document_count=len(self.documents),
            chunk_count=len(self.chunks),
            vector_count=len(self.chunks),
        )


# --- Fixtures ---


@pytest.fixture
def fake_store() -> FakeVectorStore:
    """Fresh initialized in-memory vector store."""
    store = FakeVectorStore()
    store._initialized = True
    return store


@pytest_asyncio.fixture
async def sqlite_store(tmp_path) -> AsyncIterator[SqliteVectorStore]:
    """SQLite + sqlite-vec store in a temporary file, 4-dimensional."""
    store = SqliteVectorStore(str(tmp_path / "vectors.db"), dimensions=DIMENSIONS)
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture
def embedding_provider() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider()


@pytest.fixture
def completion_provider() -> FakeCompletionProvider:
    return FakeCompletionProvider()


@pytest.fixture
def search_provider() -> FakeSearchProvider:
    return FakeSearchProvider(
        [
            ExternalSearchResult(
                title="PostgreSQL VACUUM",
                url="https://example.org/vacuum",
                snippet="VACUUM reclaims storage occupied by dead tuples.",
            ),
            ExternalSearchResult(
                title="Second hit",
                url="https://example.org/second",
                snippet="Less relevant.",
            ),
        ]
    )


@pytest.fixture
def chunking_config() -> ChunkingConfig:
    """Default chunking config for SemanticChunker tests."""
    return ChunkingConfig(target_size=100, overlap_percent=20)


@pytest.fixture
def retrieval_config() -> RetrievalConfig:
    return RetrievalConfig(relevance_threshold=1.0, top_k=3, fetch_k=10, heartbeat_interval=0.01)


def make_chunks(*texts: str) -> list[TextChunk]:
    """TextChunks indexed in order."""
    return [TextChunk(index=i, text=t, size=len(t)) for i, t in enumerate(texts)]
