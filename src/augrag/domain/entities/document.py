"""Document entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Document:
    """Document identified by its origin label."""

    id: int
    label: str
    created_at: datetime
