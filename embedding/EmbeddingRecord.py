# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-24
# Description: EmbeddingRecord
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from sources.SourceType import SourceType


@dataclass(frozen=True)
class EmbeddingRecord:
    """One persisted chunk: embedded text + vector + provenance."""
    id: str
    source_type: SourceType
    source_id: str
    chunk_index: int
    total_chunks: int
    content: str
    model: str
    dimensions: int
    created_at: datetime
    updated_at: datetime
    embedding: Optional[List[float]] = None  # omitted when read back without vectors

    def to_metadata(self) -> Dict[str, Any]:
        """
        Flat metadata for Chroma. Content and vector are stored in their own
        columns; None is never written.
        """
        return {
            "source_type": self.source_type.value,
            "source_id": self.source_id,
            "chunk_index": self.chunk_index,
            "total_chunks": self.total_chunks,
            "model": self.model,
            "dimensions": self.dimensions,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_metadata(
        cls,
        record_id: str,
        content: str,
        metadata: Dict[str, Any],
        embedding: Optional[List[float]] = None,
    ) -> "EmbeddingRecord":
        return cls(
            id=record_id,
            source_type=SourceType.parse(metadata["source_type"]),
            source_id=str(metadata["source_id"]),
            chunk_index=int(metadata["chunk_index"]),
            total_chunks=int(metadata["total_chunks"]),
            content=content,
            model=str(metadata.get("model", "")),
            dimensions=int(metadata.get("dimensions", 0)),
            created_at=datetime.fromisoformat(metadata["created_at"]),
            updated_at=datetime.fromisoformat(metadata["updated_at"]),
            embedding=embedding,
        )

    def short_preview(self, n: int = 120) -> str:
        """Return a compact text preview for logging/debugging."""
        clean = " ".join(self.content.split())
        preview = (clean[:n] + "...") if len(clean) > n else clean
        return f"[{self.source_type.value}:{self.source_id} #{self.chunk_index + 1}/{self.total_chunks}] {preview}"
