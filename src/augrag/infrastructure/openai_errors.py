"""Mapping of OpenAI SDK errors to provider errors."""

import openai

from augrag.domain.exceptions import ProviderError

_RETRYABLE = (
    openai.RateLimitError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.InternalServerError,
)


def to_provider_error(exc: openai.OpenAIError, provider: str) -> ProviderError:
    """Wrap an OpenAI SDK error, marking transient failures as retryable."""
    retry_after: float | None = None
    if isinstance(exc, openai.APIStatusError):
        header = exc.response.headers.get("retry-after")
        if header:
            try:
                retry_after = float(header)
            except ValueError:
                retry_after = None
    return ProviderError(
        str(exc),
        provider=provider,
        retryable=isinstance(exc, _RETRYABLE),
        retry_after=retry_after,
    )
