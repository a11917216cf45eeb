"""Ingestion DTOs."""

from dataclasses import dataclass

from augrag.domain.value_objects import StoreStats


@dataclass
class IngestOutput:
    """Output of ingesting one document."""

    document_id: int
    label: str
    chunk_count: int
    stats: StoreStats
