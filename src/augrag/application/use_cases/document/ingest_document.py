"""Ingest document use case."""

import logging

from augrag.application.dto.chunking_config import ChunkingConfig
from augrag.application.dto.ingest_dto import IngestOutput
from augrag.application.ports import Chunker, EmbeddingProvider, VectorStore
from augrag.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)


class IngestDocumentUseCase:
    """Ingest a document: chunking, batched embedding, atomic save."""

    def __init__(
        self,
        vector_store: VectorStore,
        chunker: Chunker,
        embedding_provider: EmbeddingProvider,
        chunking_config: ChunkingConfig,
    ) -> None:
        self._vector_store = vector_store
        self._chunker = chunker
        self._embedding_provider = embedding_provider
        self._chunking_config = chunking_config

    async def execute(self, label: str, text: str) -> IngestOutput:
        """Chunk, embed and store text under label, replacing a same-label document."""
        if not label.strip():
            raise ValidationError("Document label must not be empty")
        chunks = self._chunker.chunk(text, self._chunking_config)
        if not chunks:
            raise ValidationError(f"Document {label!r} has no text to ingest")

        logger.info("Embedding %d chunks of %r", len(chunks), label)
        vectors = await self._embedding_provider.embed_batch([c.text for c in chunks])

        document_id = await self._vector_store.save_document(label, chunks, vectors)
        stats = await self._vector_store.get_stats()
        logger.info(
            "Ingested %r as document %s (%d documents, %d chunks in store)",
            label,
            document_id,
            stats.document_count,
            stats.chunk_count,
        )
        return IngestOutput(
            document_id=document_id,
            label=label,
            chunk_count=len(chunks),
            stats=stats,
        )
