"""Retry and rate limiting wrappers for provider ports."""

from augrag.infrastructure.resilience.providers import (
    ResilientCompletionProvider,
    ResilientEmbeddingProvider,
    ResilientSearchProvider,
)
from augrag.infrastructure.resilience.rate_limiter import SlidingWindowRateLimiter
from augrag.infrastructure.resilience.retry import RetryPolicy

__all__ = [
    "ResilientCompletionProvider",
    "ResilientEmbeddingProvider",
    "ResilientSearchProvider",
    "RetryPolicy",
    "SlidingWindowRateLimiter",
]
