"""Retrieval and answer DTOs."""

from dataclasses import dataclass, field

from augrag.domain.entities import SearchResult
from augrag.domain.value_objects import Provenance, SourceType


@dataclass
class RetrievalDiagnostics:
    """How the candidates for a query were selected."""

    provenance: Provenance
    total_candidates: int
    passed_threshold: int
    relevance_threshold: float


@dataclass
class CandidateSelection:
    """Local candidates chosen for answering, best first."""

    selected: list[SearchResult]
    diagnostics: RetrievalDiagnostics

    @property
    def best(self) -> SearchResult | None:
        return self.selected[0] if self.selected else None


@dataclass
class SourceAttribution:
    """Source of an answer: label plus a bounded literal quote."""

    label: str
    quote: str
    source_type: SourceType
    url: str | None = None


@dataclass
class RetrievalOutput:
    """Result of answering a query."""

    found: bool
    diagnostics: RetrievalDiagnostics
    answer: str | None = None
    source: SourceAttribution | None = None
    message: str | None = None
    context: list[str] = field(default_factory=list)
