# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-23
# Description: types.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class RecordingInfo:
    id: str
    filename: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class TranscriptionInfo:
    id: str
    recording_id: Optional[str]
    text: str
    language: Optional[str] = None


@dataclass(frozen=True)
class EnrichmentInfo:
    id: str
    transcription_id: Optional[str]
    content: str
    type: Optional[str] = None  # summary, notes, action_items, ...


@dataclass(frozen=True)
class SourceOwner:
    """Owner join result for a chunk: the transcription and (if known) its recording."""
    transcription_id: str
    recording_id: Optional[str] = None
    recording_filename: Optional[str] = None
    recording_created_at: Optional[datetime] = None
