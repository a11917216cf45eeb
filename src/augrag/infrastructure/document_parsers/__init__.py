"""Document parsers: extract text from files."""

from augrag.infrastructure.document_parsers.base import ParseResult
from augrag.infrastructure.document_parsers.registry import (
    parse_file,
    supported_extensions,
)

__all__ = ["ParseResult", "parse_file", "supported_extensions"]
