"""Application configuration from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Vector store
    database_path: str = Field(
        default="data/embeddings.db",
        description="SQLite database file (':memory:' for a transient store)",
    )

    # Embedding API (OpenAI compatible)
    embedding_api_url: str = Field(
        default="https://api.openai.com/v1",
        description="OpenAI-compatible embedding API URL",
    )
    embedding_api_key: str = Field(default="", description="Embedding API key")
    embedding_model: str = Field(
        default="text-embedding-3-small",
        description="Embedding model name",
    )
    embedding_dimensions: int = Field(default=1536, gt=0, description="Embedding vector size")
    embedding_batch_size: int = Field(
        default=500, gt=0, description="Maximum texts per embedding request"
    )

    # Completion API (OpenAI compatible)
    completion_api_url: str = Field(
        default="https://api.openai.com/v1",
        description="OpenAI-compatible chat completion API URL",
    )
    completion_api_key: str = Field(default="", description="Completion API key")
    completion_model: str = Field(default="gpt-4o-mini", description="Chat model name")
    completion_temperature: float = Field(default=0.1, ge=0.0, le=2.0)

    # External search (Perplexity)
    search_api_url: str = Field(
        default="https://api.perplexity.ai",
        description="Perplexity API URL",
    )
    search_api_key: str = Field(
        default="",
        description="Perplexity API key; external fallback is disabled when empty",
    )
    search_max_results: int = Field(default=5, gt=0)

    # Retrieval
    relevance_threshold: float = Field(
        gt=0.0,
        description="Maximum L2 distance of a relevant chunk; tune per embedding model",
    )
    retrieval_top_k: int = Field(default=3, gt=0, description="Chunks used for an answer")
    retrieval_fetch_k: int = Field(
        default=10, gt=0, description="Candidates fetched before threshold filtering"
    )
    quote_max_length: int = Field(default=300, gt=0)
    external_on_irrelevant: bool = Field(
        default=False,
        description="Also query external search when no candidate passes the threshold",
    )

    # Chunking
    chunk_size: int = Field(default=2000, gt=0, description="Target chunk size in characters")
    chunk_overlap_percent: int = Field(
        default=15, ge=0, lt=100, description="Overlap as percent of chunk_size"
    )

    # Provider resilience
    request_timeout: float = Field(default=60.0, gt=0.0, description="Provider request timeout (s)")
    retry_max_attempts: int = Field(default=3, gt=0)
    retry_initial_delay: float = Field(default=1.0, ge=0.0)
    retry_max_delay: float = Field(default=30.0, ge=0.0)
    requests_per_minute: int = Field(
        default=0,
        ge=0,
        description="Request limit per minute shared by embedding and completion calls, 0 = unlimited",
    )

    # Application
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment name",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Debug mode")

    @model_validator(mode="after")
    def validate_fetch_k(self) -> "Settings":
        """fetch_k must be at least top_k, otherwise filtering has nothing to work with."""
        if self.retrieval_fetch_k < self.retrieval_top_k:
            self.retrieval_fetch_k = self.retrieval_top_k
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
