"""Port decorators adding retry and rate limiting to providers."""

from augrag.application.ports import (
    CompletionProvider,
    EmbeddingProvider,
    ExternalSearchProvider,
    ExternalSearchResult,
)
from augrag.infrastructure.resilience.rate_limiter import SlidingWindowRateLimiter
from augrag.infrastructure.resilience.retry import RetryPolicy


class _Resilient:
    def __init__(
        self,
        retry_policy: RetryPolicy,
        rate_limiter: SlidingWindowRateLimiter | None = None,
    ) -> None:
        self._retry_policy = retry_policy
        self._rate_limiter = rate_limiter

    async def _call(self, fn, *args):
        async def attempt():
            if self._rate_limiter is not None:
                await self._rate_limiter.acquire()
            return await fn(*args)

        return await self._retry_policy.call(attempt)


class ResilientEmbeddingProvider(_Resilient):
    """EmbeddingProvider with retry and optional rate limiting."""

    def __init__(
        self,
        inner: EmbeddingProvider,
        retry_policy: RetryPolicy,
        rate_limiter: SlidingWindowRateLimiter | None = None,
    ) -> None:
        super().__init__(retry_policy, rate_limiter)
        self._inner = inner

    async def embed(self, text: str) -> list[float]:
        return await self._call(self._inner.embed, text)

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        return await self._call(self._inner.embed_batch, texts)


class ResilientCompletionProvider(_Resilient):
    """CompletionProvider with retry and optional rate limiting."""

    def __init__(
        self,
        inner: CompletionProvider,
        retry_policy: RetryPolicy,
        rate_limiter: SlidingWindowRateLimiter | None = None,
    ) -> None:
        super().__init__(retry_policy, rate_limiter)
        self._inner = inner

    async def answer(self, query: str, context: str) -> str:
        return await self._call(self._inner.answer, query, context)


class ResilientSearchProvider(_Resilient):
    """ExternalSearchProvider with retry and optional rate limiting."""

    def __init__(
        self,
        inner: ExternalSearchProvider,
        retry_policy: RetryPolicy,
        rate_limiter: SlidingWindowRateLimiter | None = None,
    ) -> None:
        super().__init__(retry_policy, rate_limiter)
        self._inner = inner

    async def search(self, query: str) -> list[ExternalSearchResult]:
        return await self._call(self._inner.search, query)
