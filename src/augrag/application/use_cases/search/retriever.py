"""Retriever use case - relevance-filtered search with external fallback."""

import logging
from collections.abc import Awaitable, Callable

from augrag.application.dto.answer_dto import (
    CandidateSelection,
    RetrievalDiagnostics,
    RetrievalOutput,
    SourceAttribution,
)
from augrag.application.dto.retrieval_config import RetrievalConfig
from augrag.application.heartbeat import heartbeat as run_heartbeat
from augrag.application.ports import (
    CompletionProvider,
    EmbeddingProvider,
    ExternalSearchProvider,
    ExternalSearchResult,
    VectorStore,
)
from augrag.domain.entities import SearchResult
from augrag.domain.value_objects import Provenance, SourceType, TextChunk

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "No information found in the knowledge base"
NOT_FOUND_EXTERNAL_MESSAGE = "No information found in the knowledge base or via external search"


def make_quote(text: str, max_length: int) -> str:
    """First max_length characters of text, with '...' appended when cut."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def format_context(fragments: list[str]) -> str:
    """Number fragments for the completion prompt."""
    return "\n\n---\n\n".join(
        f"Fragment {i}:\n{fragment}" for i, fragment in enumerate(fragments, start=1)
    )


class Retriever:
    """Answers queries from the vector store, degrading and augmenting as needed.

    Relevance is an L2 distance strictly below config.relevance_threshold.
    When nothing passes, the best unfiltered candidates are used instead; when
    the store has no candidates at all, the external search provider is asked
    and its best hit is stored so the next equivalent query is served locally.
    """

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        vector_store: VectorStore,
        config: RetrievalConfig,
        completion_provider: CompletionProvider | None = None,
        search_provider: ExternalSearchProvider | None = None,
    ) -> None:
        self._embedding_provider = embedding_provider
        self._vector_store = vector_store
        self._config = config
        self._completion_provider = completion_provider
        self._search_provider = search_provider

    async def retrieve(self, query: str) -> CandidateSelection:
        """Embed query, over-fetch candidates and apply the relevance threshold."""
        query_vector = await self._embedding_provider.embed(query)
        candidates = await self._vector_store.search(query_vector, self._config.fetch_k)
        return self._select(candidates)

    def _select(self, candidates: list[SearchResult]) -> CandidateSelection:
        threshold = self._config.relevance_threshold
        top_k = self._config.top_k
        relevant = [c for c in candidates if c.distance < threshold]

        if relevant:
            provenance = Provenance.RELEVANT
            selected = relevant[:top_k]
            logger.info("%d of %d candidates within distance %s", len(relevant), len(candidates), threshold)
        elif candidates:
            provenance = Provenance.DEGRADED
            selected = candidates[:top_k]
            logger.info(
                "All %d candidates at distance >= %s, using top %d unfiltered",
                len(candidates),
                threshold,
                len(selected),
            )
        else:
            provenance = Provenance.NOT_FOUND
            selected = []
            logger.info("No candidates in vector store")

        for i, result in enumerate(selected, start=1):
            logger.debug("  %d. distance=%.4f from %r", i, result.distance, result.label)

        return CandidateSelection(
            selected=selected,
            diagnostics=RetrievalDiagnostics(
                provenance=provenance,
                total_candidates=len(candidates),
                passed_threshold=len(relevant),
                relevance_threshold=threshold,
            ),
        )

    async def answer(
        self,
        query: str,
        *,
        heartbeat: Callable[[], Awaitable[None]] | None = None,
    ) -> RetrievalOutput:
        """Answer query from local knowledge, falling back to external search.

        heartbeat, when given, is called periodically (e.g. to show a typing
        indicator) until the answer is ready or the query fails.
        """
        async with run_heartbeat(heartbeat, self._config.heartbeat_interval):
            return await self._answer(query)

    async def _answer(self, query: str) -> RetrievalOutput:
        logger.info("Answering query %r", query)
        selection = await self.retrieve(query)
        provenance = selection.diagnostics.provenance

        wants_external = provenance == Provenance.NOT_FOUND or (
            provenance == Provenance.DEGRADED and self._config.external_on_irrelevant
        )
        if wants_external and self._search_provider is not None:
            output = await self._answer_from_external(query, selection.diagnostics)
            if output.found or provenance == Provenance.NOT_FOUND:
                return output
        elif provenance == Provenance.NOT_FOUND:
            return RetrievalOutput(
                found=False,
                diagnostics=selection.diagnostics,
                message=NOT_FOUND_MESSAGE,
            )

        return await self._answer_from_store(query, selection)

    async def _answer_from_store(self, query: str, selection: CandidateSelection) -> RetrievalOutput:
        best = selection.best
        fragments = [r.text for r in selection.selected]
        answer = await self._complete(query, fragments)
        logger.info(
            "Answered from %r (%s, distance=%.4f)",
            best.label,
            selection.diagnostics.provenance,
            best.distance,
        )
        return RetrievalOutput(
            found=True,
            diagnostics=selection.diagnostics,
            answer=answer,
            source=SourceAttribution(
                label=best.label,
                quote=make_quote(best.text, self._config.quote_max_length),
                source_type=SourceType.DATABASE,
            ),
            context=fragments,
        )

    async def _answer_from_external(
        self, query: str, local: RetrievalDiagnostics
    ) -> RetrievalOutput:
        logger.info("Querying external search for %r", query)
        results = await self._search_provider.search(query)
        if not results:
            logger.info("External search returned nothing")
            return RetrievalOutput(
                found=False,
                diagnostics=local,
                message=NOT_FOUND_EXTERNAL_MESSAGE,
            )

        best = results[0]
        text = await self._augment(best)
        answer = await self._complete(query, [text])
        return RetrievalOutput(
            found=True,
            diagnostics=RetrievalDiagnostics(
                provenance=Provenance.EXTERNAL,
                total_candidates=local.total_candidates,
                passed_threshold=local.passed_threshold,
                relevance_threshold=local.relevance_threshold,
            ),
            answer=answer,
            source=SourceAttribution(
                label=best.title,
                quote=make_quote(best.snippet, self._config.quote_max_length),
                source_type=SourceType.EXTERNAL,
                url=best.url,
            ),
            context=[text],
        )

    async def _augment(self, result: ExternalSearchResult) -> str:
        """Store an external result as a one-chunk document and return its text."""
        text = f"{result.title}\n\n{result.snippet}".strip()
        vector = await self._embedding_provider.embed(text)
        label = f"{self._config.external_label_prefix}{result.url}"
        await self._vector_store.save_document(
            label,
            [TextChunk(index=0, text=text, size=len(text))],
            [vector],
        )
        logger.info("Stored external result %r as %r", result.title, label)
        return text

    async def _complete(self, query: str, fragments: list[str]) -> str:
        if self._completion_provider is None:
            return fragments[0]
        return await self._completion_provider.answer(query, format_context(fragments))
