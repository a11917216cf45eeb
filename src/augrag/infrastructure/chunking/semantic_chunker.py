"""Sentence-aware text chunker with overlap."""

import logging
import re

from augrag.application.dto.chunking_config import ChunkingConfig
from augrag.domain.exceptions import ValidationError
from augrag.domain.value_objects import TextChunk

logger = logging.getLogger(__name__)

# Terminal punctuation run, optional closing quote, then whitespace or end of text.
_SENTENCE_END = re.compile(r"([.!?]+[\"']?)(?:\s+|$)")
_SENTENCE_BOUNDARY = re.compile(r"[.!?]\s+")


def split_into_sentences(text: str) -> list[str]:
    """Split text into sentences, keeping their trailing punctuation.

    Text after the last terminator (a sentence without final punctuation)
    is returned as the last sentence.
    """
    sentences: list[str] = []
    start = 0
    for match in _SENTENCE_END.finditer(text):
        sentence = text[start : match.end(1)].strip()
        if sentence:
            sentences.append(sentence)
        start = match.end()
    tail = text[start:].strip()
    if tail:
        sentences.append(tail)
    return sentences


class SemanticChunker:
    """Chunker that groups whole sentences up to a target size.

    Consecutive chunks overlap by roughly overlap_percent of the target size;
    the overlap starts at a sentence when the tail contains a boundary.
    """

    def chunk(self, text: str, config: ChunkingConfig) -> list[TextChunk]:
        """Split text into ordered, overlapping chunks."""
        if config.target_size <= 0:
            raise ValidationError("target_size must be positive")
        if not 0 <= config.overlap_percent < 100:
            raise ValidationError("overlap_percent must be in [0, 100)")

        text = text.strip()
        if not text:
            return []

        sentences = split_into_sentences(text)
        logger.debug("Split text into %d sentences", len(sentences))

        passages = self._group(sentences, config)
        chunks = [
            TextChunk(index=i, text=passage, size=len(passage))
            for i, passage in enumerate(passages)
        ]
        sizes = [c.size for c in chunks]
        logger.info(
            "Created %d chunks (target=%d, overlap=%d%%, min=%d, avg=%d, max=%d)",
            len(chunks),
            config.target_size,
            config.overlap_percent,
            min(sizes),
            sum(sizes) // len(sizes),
            max(sizes),
        )
        return chunks

    def _group(self, sentences: list[str], config: ChunkingConfig) -> list[str]:
        passages: list[str] = []
        buffer = ""
        # False while the buffer holds only the overlap carried from the previous chunk
        has_new = False
        for sentence in sentences:
            if has_new and len(buffer) + 1 + len(sentence) > config.target_size:
                passages.append(buffer)
                buffer = overlap_tail(buffer, config.overlap_size)
                has_new = False
            buffer = f"{buffer} {sentence}" if buffer else sentence
            has_new = True
        if has_new and buffer.strip():
            passages.append(buffer.strip())
        return passages


def overlap_tail(passage: str, overlap_size: int) -> str:
    """Return the last overlap_size characters, starting at a sentence if possible."""
    if overlap_size <= 0:
        return ""
    if len(passage) <= overlap_size:
        return passage
    tail = passage[-overlap_size:]
    boundary = _SENTENCE_BOUNDARY.search(tail)
    if boundary:
        return tail[boundary.end() :].strip()
    return tail.strip()
