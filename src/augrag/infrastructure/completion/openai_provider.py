"""OpenAI-compatible chat completion provider for grounded answers."""

import logging

import openai
from openai import AsyncOpenAI

from augrag.domain.exceptions import ProviderError
from augrag.infrastructure.openai_errors import to_provider_error

logger = logging.getLogger(__name__)

INSUFFICIENT_CONTEXT_REPLY = "The provided context does not contain enough information to answer this question."

SYSTEM_PROMPT = f"""You are an assistant that answers questions from a knowledge base.

IMPORTANT:
- Use ONLY the information in the provided context fragments
- Answer the user's question clearly and completely based on that context
- Do NOT use your own knowledge or invent facts
- If the context is insufficient or does not match the question, reply exactly: "{INSUFFICIENT_CONTEXT_REPLY}\""""


class OpenAICompletionProvider:
    """Completion provider answering strictly from the supplied context."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        temperature: float = 0.1,
        timeout: float = 60.0,
    ) -> None:
        self._client = AsyncOpenAI(base_url=base_url, api_key=api_key, timeout=timeout)
        self._model = model
        self._temperature = temperature

    async def answer(self, query: str, context: str) -> str:
        """Answer query using only context."""
        try:
            completion = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": f'Question: "{query}"\n\nContext:\n{context}',
                    },
                ],
                temperature=self._temperature,
            )
        except openai.OpenAIError as exc:
            raise to_provider_error(exc, provider="openai-completions") from exc
        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise ProviderError("Completion returned no content", provider="openai-completions")
        logger.debug("Completion from %s: %d chars", self._model, len(content))
        return content.strip()
