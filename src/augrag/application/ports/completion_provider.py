"""Completion provider port - grounded answer generation."""

from typing import Protocol


class CompletionProvider(Protocol):
    """Port for answering a query from supplied context only.

    Implementations must instruct the model to use nothing but the context and
    to say so explicitly when the context does not answer the query.
    """

    async def answer(self, query: str, context: str) -> str: ...
