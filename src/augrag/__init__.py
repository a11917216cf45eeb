"""AugRAG - self-augmenting retrieval-augmented answering core."""

__version__ = "0.1.0"
