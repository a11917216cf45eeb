"""Parsers for plain text, markdown and HTML."""

import re
from html import unescape
from pathlib import Path

from augrag.infrastructure.document_parsers.base import ParseResult

_SCRIPT_STYLE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")


def decode_text(data: bytes) -> str:
    """Decode as UTF-8, falling back to cp1251, then UTF-8 with replacement."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        try:
            return data.decode("cp1251")
        except UnicodeDecodeError:
            return data.decode("utf-8", errors="replace")


def _source_type(filename: str | None, default: str) -> str:
    if filename:
        suffix = Path(filename).suffix.lstrip(".").lower()
        if suffix:
            return suffix
    return default


def parse_txt(data: bytes, filename: str | None = None) -> ParseResult:
    """Plain text (.txt)."""
    return ParseResult(text=decode_text(data), source_type=_source_type(filename, "txt"))


def parse_md(data: bytes, filename: str | None = None) -> ParseResult:
    """Markdown (.md) - kept as-is."""
    return ParseResult(text=decode_text(data), source_type=_source_type(filename, "md"))


def strip_html(markup: str) -> str:
    """Drop scripts, styles and tags, unescape entities, collapse whitespace."""
    text = _SCRIPT_STYLE.sub(" ", markup)
    text = _TAG.sub(" ", text)
    text = unescape(text)
    return _WHITESPACE.sub(" ", text).strip()


def parse_html(data: bytes, filename: str | None = None) -> ParseResult:
    """HTML (.html, .htm) reduced to its visible text."""
    return ParseResult(
        text=strip_html(decode_text(data)),
        source_type=_source_type(filename, "html"),
    )
