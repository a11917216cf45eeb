"""Search result - transient projection of a matched chunk."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchResult:
    """Matched chunk with its L2 distance to the query and owning document label.

    Smaller distance means more similar.
    """

    text: str
    distance: float
    label: str
    chunk_id: int
    document_id: int
    chunk_index: int
