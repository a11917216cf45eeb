"""Chunking configuration DTO."""

from dataclasses import dataclass


@dataclass
class ChunkingConfig:
    """Configuration for sentence-aware text chunking."""

    target_size: int
    overlap_percent: int

    @property
    def overlap_size(self) -> int:
        """Overlap length in characters, as a share of the target size."""
        return self.target_size * self.overlap_percent // 100
