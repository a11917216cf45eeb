"""OpenAI-compatible embedding provider."""

import logging
import time

import openai
from openai import AsyncOpenAI

from augrag.domain.exceptions import ProviderError
from augrag.infrastructure.openai_errors import to_provider_error

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 500


class OpenAIEmbeddingProvider:
    """Embedding provider using OpenAI-compatible API.

    Batches are sent one after another, never concurrently, to stay within
    provider rate limits.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        batch_size: int = DEFAULT_BATCH_SIZE,
        timeout: float = 60.0,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._client = AsyncOpenAI(base_url=base_url, api_key=api_key, timeout=timeout)
        self._model = model
        self._batch_size = batch_size

    async def embed(self, text: str) -> list[float]:
        """Generate the embedding of a single text."""
        vectors = await self._embed_batch([text])
        return vectors[0]

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for texts, preserving order."""
        if not texts:
            return []
        batches = [
            texts[i : i + self._batch_size] for i in range(0, len(texts), self._batch_size)
        ]
        if len(batches) > 1:
            logger.info(
                "Embedding %d texts in %d batches of up to %d",
                len(texts),
                len(batches),
                self._batch_size,
            )
        vectors: list[list[float]] = []
        for number, batch in enumerate(batches, start=1):
            logger.debug("Embedding batch %d/%d (%d texts)", number, len(batches), len(batch))
            vectors.extend(await self._embed_batch(batch))
        return vectors

    async def _embed_batch(self, texts: list[str]) -> list[list[float]]:
        started = time.monotonic()
        try:
            response = await self._client.embeddings.create(
                model=self._model,
                input=texts,
            )
        except openai.OpenAIError as exc:
            raise to_provider_error(exc, provider="openai-embeddings") from exc
        data = sorted(response.data, key=lambda d: d.index)
        if len(data) != len(texts):
            raise ProviderError(
                f"Expected {len(texts)} embeddings, got {len(data)}",
                provider="openai-embeddings",
            )
        logger.debug(
            "Got %d embeddings from %s in %.0fms",
            len(data),
            self._model,
            (time.monotonic() - started) * 1000,
        )
        return [d.embedding for d in data]
