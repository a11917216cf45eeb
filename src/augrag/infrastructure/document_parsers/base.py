"""Base protocol for document parsers."""

from typing import Protocol


class ParseResult:
    """Result of parsing a file: extracted text and its source file type."""

    __slots__ = ("text", "source_type")

    def __init__(self, text: str, source_type: str) -> None:
        self.text = text
        self.source_type = source_type


class DocumentParser(Protocol):
    """Parser that extracts plain text from file bytes."""

    def __call__(self, data: bytes, filename: str | None = None) -> ParseResult:
        """Extract text. Raises on parse error."""
        ...
