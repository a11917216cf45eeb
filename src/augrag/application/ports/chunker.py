"""Chunker port - text splitting strategies."""

from typing import Protocol

from augrag.application.dto.chunking_config import ChunkingConfig
from augrag.domain.value_objects import TextChunk


class Chunker(Protocol):
    """Port for splitting text into chunks."""

    def chunk(self, text: str, config: ChunkingConfig) -> list[TextChunk]: ...
