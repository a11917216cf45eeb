"""External web search provider port."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class ExternalSearchResult:
    """One web search hit."""

    title: str
    url: str
    snippet: str


class ExternalSearchProvider(Protocol):
    """Port for web search. Results are ordered best first."""

    async def search(self, query: str) -> list[ExternalSearchResult]: ...
