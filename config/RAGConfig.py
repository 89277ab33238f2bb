# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-22
# Description: RAGConfig
# -----------------------------------------------------------------------------
from dataclasses import dataclass


@dataclass(frozen=True)
class RAGConfig:
    """
    Tuning knobs for chunking, retrieval and answer generation.
    Built once (usually from settings.RAG_DEFAULTS) and injected into the
    chunker and the RAG service.
    """

    chunk_size: int = 1000
    chunk_overlap: int = 200
    top_k_default: int = 5
    min_similarity_default: float = 0.0
    history_limit: int = 20
    default_language: str = "de"
    temperature: float = 0.3
    max_tokens: int = 1500
    preview_chars: int = 200
    similar_min_similarity: float = 0.6
    collection_name: str = "voice-embeddings"

    @staticmethod
    def from_settings() -> "RAGConfig":
        # settings raises on malformed env vars, so import lazily
        from settings import RAG_DEFAULTS

        return RAGConfig(**RAG_DEFAULTS)

    def __post_init__(self):
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be > 0, got {self.chunk_size}")
        if self.top_k_default <= 0:
            raise ValueError(f"top_k_default must be > 0, got {self.top_k_default}")
        if self.history_limit < 0:
            raise ValueError(f"history_limit must be >= 0, got {self.history_limit}")
        if self.default_language not in ("de", "en"):
            raise ValueError(f"default_language must be 'de' or 'en', got {self.default_language!r}")
