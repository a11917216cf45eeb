"""Domain value objects."""

from augrag.domain.value_objects.provenance import Provenance, SourceType
from augrag.domain.value_objects.store_stats import StoreStats
from augrag.domain.value_objects.text_chunk import TextChunk

__all__ = [
    "Provenance",
    "SourceType",
    "StoreStats",
    "TextChunk",
]
