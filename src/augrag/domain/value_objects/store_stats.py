"""Vector store row counts."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StoreStats:
    """Read-only diagnostic counts of a vector store."""

    document_count: int
    chunk_count: int
    vector_count: int
