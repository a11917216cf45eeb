"""Where an answer's evidence came from."""

from enum import StrEnum


class Provenance(StrEnum):
    """Outcome of candidate selection for a query."""

    RELEVANT = "relevant"
    DEGRADED = "degraded"
    EXTERNAL = "external"
    NOT_FOUND = "not_found"


class SourceType(StrEnum):
    """Origin of an attributed source."""

    DATABASE = "database"
    EXTERNAL = "external"
