"""Vector store port - persisted documents, chunks and vectors."""

from collections.abc import Sequence
from typing import Protocol

from augrag.domain.entities import SearchResult
from augrag.domain.value_objects import StoreStats, TextChunk


class VectorStore(Protocol):
    """Port for chunk vector persistence and nearest-neighbour search."""

    async def initialize(self) -> None: ...

    async def save_document(
        self,
        label: str,
        chunks: Sequence[TextChunk],
        vectors: Sequence[Sequence[float]],
    ) -> int: ...

    async def search(self, query_vector: Sequence[float], k: int) -> list[SearchResult]: ...

    async def get_stats(self) -> StoreStats: ...

    async def close(self) -> None: ...
