"""Perplexity web search provider."""

import logging

import httpx

from augrag.application.ports import ExternalSearchResult
from augrag.domain.exceptions import ProviderError

logger = logging.getLogger(__name__)

PROVIDER_NAME = "perplexity"


class PerplexitySearchProvider:
    """External search via the Perplexity Search API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.perplexity.ai",
        max_results: int = 5,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._max_results = max_results
        self._timeout = timeout
        self._client = client

    async def search(self, query: str) -> list[ExternalSearchResult]:
        """Search the web. Results are ordered best first."""
        payload = {"query": query, "max_results": self._max_results}
        headers = {"Authorization": f"Bearer {self._api_key}"}
        try:
            if self._client is not None:
                response = await self._client.post(
                    f"{self._base_url}/search", json=payload, headers=headers, timeout=self._timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(
                        f"{self._base_url}/search", json=payload, headers=headers
                    )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            retry_after = exc.response.headers.get("retry-after")
            raise ProviderError(
                f"Perplexity search failed with HTTP {status}",
                provider=PROVIDER_NAME,
                retryable=status == 429 or status >= 500,
                retry_after=float(retry_after) if retry_after and retry_after.isdigit() else None,
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderError(
                f"Perplexity search request failed: {exc}",
                provider=PROVIDER_NAME,
                retryable=isinstance(exc, httpx.TransportError),
            ) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise ProviderError(
                "Perplexity search returned a non-JSON body",
                provider=PROVIDER_NAME,
            ) from exc
        results = parse_results(body)
        logger.info("Perplexity returned %d results for %r", len(results), query)
        return results


def parse_results(body: object) -> list[ExternalSearchResult]:
    """Extract title/url/snippet triples from a search response body."""
    if not isinstance(body, dict):
        return []
    items = body.get("results") or []
    results: list[ExternalSearchResult] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        url = str(item.get("url") or "").strip()
        title = str(item.get("title") or "").strip()
        snippet = str(item.get("snippet") or "").strip()
        if not url or not (title or snippet):
            continue
        results.append(ExternalSearchResult(title=title or url, url=url, snippet=snippet))
    return results
