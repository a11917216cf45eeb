"""Chunk entity - stored passage of a document."""

from dataclasses import dataclass


@dataclass
class Chunk:
    """Chunk - passage text with a reference to its stored vector."""

    id: int
    document_id: int
    index: int
    text: str
    size: int
    vector_rowid: int
