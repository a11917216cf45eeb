"""Domain exceptions."""


class AugRAGError(Exception):
    """Base exception for AugRAG."""

    pass


class ProviderError(AugRAGError):
    """An external provider (embedding, completion, search) call failed."""

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        retryable: bool = False,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.retryable = retryable
        self.retry_after = retry_after


class SchemaError(AugRAGError):
    """Vector store used in a state or with data that violates its schema."""

    pass


class StoreNotInitialized(SchemaError):
    """Vector store used before initialize() or after close()."""

    pass


class ChunkVectorMismatch(SchemaError):
    """Number of chunks and vectors passed to save_document differ."""

    pass


class NotFound(AugRAGError):
    """Requested resource was not found."""

    pass


class ValidationError(AugRAGError):
    """Validation failed for input data."""

    pass
