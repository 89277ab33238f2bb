# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-25
# Description: RetrievalHit
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sources.SourceType import SourceType
from sources.types import SourceOwner


@dataclass(frozen=True)
class RetrievalHit:
    """
    A stored chunk ranked against one query, joined with its owning recording.
    Owner fields are None when the owner could not be resolved.
    """
    id: str
    source_type: SourceType
    source_id: str
    chunk_index: int
    total_chunks: int
    content: str
    similarity: float
    distance: float
    model: Optional[str] = None
    dimensions: Optional[int] = None

    # owner join
    transcription_id: Optional[str] = None
    recording_id: Optional[str] = None
    recording_filename: Optional[str] = None
    recording_created_at: Optional[datetime] = None

    def with_owner(self, owner: Optional[SourceOwner]) -> "RetrievalHit":
        if owner is None:
            return self
        return RetrievalHit(
            id=self.id,
            source_type=self.source_type,
            source_id=self.source_id,
            chunk_index=self.chunk_index,
            total_chunks=self.total_chunks,
            content=self.content,
            similarity=self.similarity,
            distance=self.distance,
            model=self.model,
            dimensions=self.dimensions,
            transcription_id=owner.transcription_id,
            recording_id=owner.recording_id,
            recording_filename=owner.recording_filename,
            recording_created_at=owner.recording_created_at,
        )
