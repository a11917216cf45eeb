"""Retrieval configuration DTO."""

from dataclasses import dataclass

from augrag.domain.exceptions import ValidationError


@dataclass
class RetrievalConfig:
    """Relevance filtering and fallback settings for the retriever.

    relevance_threshold is an L2 distance: candidates must be strictly closer
    than it. It depends on the embedding model, so it has no default.
    """

    relevance_threshold: float
    top_k: int = 3
    fetch_k: int = 10
    quote_max_length: int = 300
    external_label_prefix: str = "external:"
    external_on_irrelevant: bool = False
    heartbeat_interval: float = 4.0

    def __post_init__(self) -> None:
        if self.relevance_threshold <= 0:
            raise ValidationError("relevance_threshold must be positive")
        if self.top_k <= 0:
            raise ValidationError("top_k must be positive")
        if self.fetch_k < self.top_k:
            self.fetch_k = self.top_k
