# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-23
# Description: SourceType
# -----------------------------------------------------------------------------
from enum import Enum
from typing import Iterable, List, Optional

from sources.SourceCatalog import SourceCatalog
from sources.types import SourceOwner, TranscriptionInfo
from utility.errors import InvalidInputError

_LABELS = {
    "transcription": {"de": "Transkription", "en": "Transcription"},
    "enrichment": {"de": "Anreicherung", "en": "Enrichment"},
}


class SourceType(str, Enum):
    """
    The two kinds of text that own embedded chunks.

    Each member knows how to walk from its own id to the owning recording:
      - transcription -> recording
      - enrichment    -> transcription -> recording
    """

    TRANSCRIPTION = "transcription"
    ENRICHMENT = "enrichment"

    @classmethod
    def parse(cls, value: "str | SourceType") -> "SourceType":
        if isinstance(value, SourceType):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            raise InvalidInputError(
                f"Invalid source type {value!r}. Must be one of {[m.value for m in cls]}"
            ) from None

    @classmethod
    def parse_many(cls, values: Optional[Iterable["str | SourceType"]]) -> List["SourceType"]:
        """None/empty means every source type; duplicates are dropped, order kept."""
        if not values:
            return list(cls)
        return list(dict.fromkeys(cls.parse(v) for v in values))

    def label(self, language: str = "de") -> str:
        labels = _LABELS[self.value]
        return labels.get(language, labels["en"])

    def resolve_owner(self, catalog: SourceCatalog, source_id: str) -> Optional[SourceOwner]:
        if self is SourceType.TRANSCRIPTION:
            transcription = catalog.get_transcription(source_id)
        else:
            enrichment = catalog.get_enrichment(source_id)
            transcription = (
                catalog.get_transcription(enrichment.transcription_id)
                if enrichment is not None and enrichment.transcription_id
                else None
            )
        return _owner_from_transcription(catalog, transcription)


def _owner_from_transcription(
    catalog: SourceCatalog, transcription: Optional[TranscriptionInfo]
) -> Optional[SourceOwner]:
    if transcription is None:
        return None

    recording = catalog.get_recording(transcription.recording_id) if transcription.recording_id else None
    if recording is None:
        return SourceOwner(transcription_id=transcription.id)

    return SourceOwner(
        transcription_id=transcription.id,
        recording_id=recording.id,
        recording_filename=recording.filename,
        recording_created_at=recording.created_at,
    )
