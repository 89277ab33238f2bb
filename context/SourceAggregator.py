# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-27
# Description: SourceAggregator
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from sources.SourceType import SourceType
from vectorstore.RetrievalHit import RetrievalHit


@dataclass
class SourceChunk:
    content: str  # preview, not the full chunk
    similarity: float
    type: SourceType


@dataclass
class GroupedSource:
    recording_id: str
    transcription_id: Optional[str]
    filename: Optional[str]
    date: Optional[datetime]
    max_similarity: float
    chunks: List[SourceChunk] = field(default_factory=list)


def preview(text: str, n: int = 200) -> str:
    return text[:n] + ("..." if len(text) > n else "")


class SourceAggregator:
    """
    Groups chunk hits by recording for citation: one entry per recording,
    best match first. Hits without a recording cannot be cited and are dropped.
    """

    def __init__(self, *, preview_chars: int = 200) -> None:
        self.preview_chars = preview_chars

    def format_sources(self, hits: Sequence[RetrievalHit]) -> List[GroupedSource]:
        grouped: Dict[str, GroupedSource] = {}

        for hit in hits:
            if not hit.recording_id:
                continue

            source = grouped.get(hit.recording_id)
            if source is None:
                source = GroupedSource(
                    recording_id=hit.recording_id,
                    transcription_id=hit.transcription_id,
                    filename=hit.recording_filename,
                    date=hit.recording_created_at,
                    max_similarity=hit.similarity,
                )
                grouped[hit.recording_id] = source

            source.chunks.append(
                SourceChunk(
                    content=preview(hit.content, self.preview_chars),
                    similarity=hit.similarity,
                    type=hit.source_type,
                )
            )
            source.max_similarity = max(source.max_similarity, hit.similarity)

        # ties keep first-seen order
        return sorted(grouped.values(), key=lambda s: s.max_similarity, reverse=True)
