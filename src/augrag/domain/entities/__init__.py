"""Domain entities."""

from augrag.domain.entities.chunk import Chunk
from augrag.domain.entities.document import Document
from augrag.domain.entities.search_result import SearchResult

__all__ = [
    "Chunk",
    "Document",
    "SearchResult",
]
