# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-23
# Description: SourceCatalog
# -----------------------------------------------------------------------------

from typing import Protocol, Sequence, Optional, runtime_checkable

from sources.types import RecordingInfo, TranscriptionInfo, EnrichmentInfo


@runtime_checkable
class SourceCatalog(Protocol):
    """Read-only view of the recordings, transcriptions and enrichments owning embedded text."""

    def list_transcriptions(self) -> Sequence[TranscriptionInfo]:
        ...

    def list_enrichments(self) -> Sequence[EnrichmentInfo]:
        ...

    def get_transcription(self, transcription_id: str) -> Optional[TranscriptionInfo]:
        ...

    def get_enrichment(self, enrichment_id: str) -> Optional[EnrichmentInfo]:
        ...

    def get_recording(self, recording_id: str) -> Optional[RecordingInfo]:
        ...
