"""Application ports - interfaces for external adapters."""

from augrag.application.ports.chunker import Chunker
from augrag.application.ports.completion_provider import CompletionProvider
from augrag.application.ports.embedding_provider import EmbeddingProvider
from augrag.application.ports.external_search_provider import (
    ExternalSearchProvider,
    ExternalSearchResult,
)
from augrag.application.ports.vector_store import VectorStore

__all__ = [
    "Chunker",
    "CompletionProvider",
    "EmbeddingProvider",
    "ExternalSearchProvider",
    "ExternalSearchResult",
    "VectorStore",
]
