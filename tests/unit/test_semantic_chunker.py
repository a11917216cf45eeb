"""Unit tests for SemanticChunker."""

import pytest

from augrag.application.dto.chunking_config import ChunkingConfig
from augrag.domain.exceptions import ValidationError
from augrag.infrastructure.chunking.semantic_chunker import (
    SemanticChunker,
    overlap_tail,
    split_into_sentences,
)

LONG_TEXT = (
    "Retrieval augmented generation grounds answers in documents. "
    "Documents are split into chunks before embedding. "
    "Each chunk is embedded into a vector. "
    "Vectors are stored in an index for nearest neighbour search! "
    "Queries are embedded with the same model. "
    "Is the nearest chunk close enough? "
    "A threshold on the distance decides. "
    "Otherwise the best candidates are used anyway. "
    "External search fills the gaps when the store is empty. "
    "New knowledge is saved for next time."
)


class TestSplitIntoSentences:
    """Tests for split_into_sentences."""

    def test_keeps_trailing_punctuation(self) -> None:
        assert split_into_sentences("One. Two! Three?") == ["One.", "Two!", "Three?"]

    def test_closing_quote_stays_with_sentence(self) -> None:
        sentences = split_into_sentences('He said "Stop!" Then he left.')
        assert sentences == ['He said "Stop!"', "Then he left."]

    def test_decimal_point_is_not_a_boundary(self) -> None:
        assert split_into_sentences("Pi is 3.14 roughly. Yes.") == ["Pi is 3.14 roughly.", "Yes."]

    def test_unterminated_tail_is_kept(self) -> None:
        assert split_into_sentences("Done. Not finished") == ["Done.", "Not finished"]


def test_three_sentences_overlap() -> None:
    """Second chunk starts with the last sentence of the first."""
    chunker = SemanticChunker()
    config = ChunkingConfig(target_size=25, overlap_percent=50)
    chunks = chunker.chunk("A happened. B happened. C happened.", config)

    assert [c.text for c in chunks] == ["A happened. B happened.", "B happened. C happened."]
    assert chunks[0].text.endswith("B happened.")
    assert chunks[1].text.startswith("B happened.")


def test_chunks_are_indexed_sized_and_trimmed(chunking_config: ChunkingConfig) -> None:
    chunks = SemanticChunker().chunk(LONG_TEXT, chunking_config)
    assert len(chunks) > 1
    assert [c.index for c in chunks] == list(range(len(chunks)))
    for c in chunks:
        assert c.text == c.text.strip()
        assert c.text
        assert c.size == len(c.text)


def test_every_sentence_is_covered(chunking_config: ChunkingConfig) -> None:
    """No sentence of the input is lost between chunks."""
    chunks = SemanticChunker().chunk(LONG_TEXT, chunking_config)
    joined = " ".join(c.text for c in chunks)
    for sentence in split_into_sentences(LONG_TEXT):
        assert sentence in joined


def test_each_chunk_holds_a_full_sentence() -> None:
    """A chunk never consists of overlap text alone."""
    text = "Alpha beta gamma. Delta epsilon zeta eta. Theta."
    sentences = split_into_sentences(text)
    chunks = SemanticChunker().chunk(text, ChunkingConfig(target_size=20, overlap_percent=50))
    assert len(chunks) == 3
    for c in chunks:
        assert any(s in c.text for s in sentences)
    assert chunks[1].text == "eta gamma. Delta epsilon zeta eta."


def test_only_single_oversized_sentence_exceeds_target() -> None:
    text = "This sentence is definitely longer than ten characters. Short."
    chunks = SemanticChunker().chunk(text, ChunkingConfig(target_size=10, overlap_percent=0))
    assert [c.text for c in chunks] == [
        "This sentence is definitely longer than ten characters.",
        "Short.",
    ]
    assert chunks[0].size > 10
    assert chunks[1].size <= 10


def test_chunks_within_target_unless_single_sentence() -> None:
    chunks = SemanticChunker().chunk(LONG_TEXT, ChunkingConfig(target_size=120, overlap_percent=0))
    sentences = split_into_sentences(LONG_TEXT)
    for c in chunks:
        assert c.size <= 120 or c.text in sentences


def test_overlap_starts_at_sentence_boundary() -> None:
    text = "One two three. Four five six. Seven eight nine."
    chunks = SemanticChunker().chunk(text, ChunkingConfig(target_size=40, overlap_percent=50))
    assert [c.text for c in chunks] == [
        "One two three. Four five six.",
        "Four five six. Seven eight nine.",
    ]


def test_zero_overlap_produces_disjoint_chunks() -> None:
    chunks = SemanticChunker().chunk(
        "A happened. B happened. C happened.", ChunkingConfig(target_size=15, overlap_percent=0)
    )
    assert [c.text for c in chunks] == ["A happened.", "B happened.", "C happened."]


def test_short_text_single_chunk(chunking_config: ChunkingConfig) -> None:
    chunks = SemanticChunker().chunk("  short text without period  ", chunking_config)
    assert len(chunks) == 1
    assert chunks[0].text == "short text without period"
    assert chunks[0].index == 0


def test_empty_text_returns_empty_list(chunking_config: ChunkingConfig) -> None:
    chunker = SemanticChunker()
    assert chunker.chunk("", chunking_config) == []
    assert chunker.chunk("   ", chunking_config) == []
    assert chunker.chunk("\n\t  ", chunking_config) == []


@pytest.mark.parametrize(
    ("target_size", "overlap_percent"),
    [(0, 10), (-5, 10), (100, 100), (100, -1)],
)
def test_invalid_config_raises(target_size: int, overlap_percent: int) -> None:
    config = ChunkingConfig(target_size=target_size, overlap_percent=overlap_percent)
    with pytest.raises(ValidationError):
        SemanticChunker().chunk("Some text.", config)


class TestOverlapTail:
    """Tests for overlap_tail."""

    def test_zero_size_is_empty(self) -> None:
        assert overlap_tail("Anything. At all.", 0) == ""

    def test_short_passage_returned_whole(self) -> None:
        assert overlap_tail("Tiny.", 50) == "Tiny."

    def test_mid_sentence_tail_without_boundary(self) -> None:
        assert overlap_tail("A happened. B happened.", 12) == "B happened."
