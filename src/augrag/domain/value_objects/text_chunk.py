"""Text chunk produced by a chunker, before it is stored."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TextChunk:
    """Passage with its ordinal index in the source text and character size."""

    index: int
    text: str
    size: int

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError("Chunk index must be non-negative")
        if not self.text:
            raise ValueError("Chunk text must not be empty")
