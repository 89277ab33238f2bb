# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-23
# Description: InMemorySourceCatalog
# -----------------------------------------------------------------------------
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from sources.types import RecordingInfo, TranscriptionInfo, EnrichmentInfo
from utility.logging_utils import get_class_logger


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    text = str(value).strip()
    if not text:
        return None
    # fromisoformat does not accept a trailing "Z" before 3.11
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


class InMemorySourceCatalog:
    """
    Dict-backed SourceCatalog.

    Used by tests, by scripts/embed_all.py and by the API when it is pointed
    at a JSON export of the recordings database:

        {
          "recordings":     [{"id", "filename"|"original_filename", "created_at"}],
          "transcriptions": [{"id", "recording_id", "text", "language"}],
          "enrichments":    [{"id", "transcription_id", "type", "content"}]
        }
    """

    def __init__(
        self,
        *,
        recordings: Iterable[RecordingInfo] = (),
        transcriptions: Iterable[TranscriptionInfo] = (),
        enrichments: Iterable[EnrichmentInfo] = (),
        logger: logging.Logger | None = None,
    ) -> None:
        self.logger = logger or get_class_logger(self.__class__)
        self._recordings: Dict[str, RecordingInfo] = {r.id: r for r in recordings}
        self._transcriptions: Dict[str, TranscriptionInfo] = {t.id: t for t in transcriptions}
        self._enrichments: Dict[str, EnrichmentInfo] = {e.id: e for e in enrichments}

    @classmethod
    def from_json(cls, path: str | Path) -> "InMemorySourceCatalog":
        path = Path(path)
        with path.open("r", encoding="utf-8") as fh:
            payload: Dict[str, List[Dict[str, Any]]] = json.load(fh)

        recordings = [
            RecordingInfo(
                id=str(r["id"]),
                filename=r.get("filename") or r.get("original_filename"),
                created_at=_parse_datetime(r.get("created_at")),
            )
            for r in payload.get("recordings", [])
        ]
        transcriptions = [
            TranscriptionInfo(
                id=str(t["id"]),
                recording_id=str(t["recording_id"]) if t.get("recording_id") else None,
                text=t.get("text") or "",
                language=t.get("language"),
            )
            for t in payload.get("transcriptions", [])
        ]
        enrichments = [
            EnrichmentInfo(
                id=str(e["id"]),
                transcription_id=str(e["transcription_id"]) if e.get("transcription_id") else None,
                content=e.get("content") or "",
                type=e.get("type"),
            )
            for e in payload.get("enrichments", [])
        ]

        catalog = cls(recordings=recordings, transcriptions=transcriptions, enrichments=enrichments)
        catalog.logger.info(
            "Loaded source catalog from %s: recordings=%d transcriptions=%d enrichments=%d",
            path,
            len(recordings),
            len(transcriptions),
            len(enrichments),
        )
        return catalog

    # --- writes (catalog owners only; the RAG pipeline never calls these) ---

    def add_recording(self, recording: RecordingInfo) -> None:
        self._recordings[recording.id] = recording

    def add_transcription(self, transcription: TranscriptionInfo) -> None:
        self._transcriptions[transcription.id] = transcription

    def add_enrichment(self, enrichment: EnrichmentInfo) -> None:
        self._enrichments[enrichment.id] = enrichment

    # --- SourceCatalog ---

    def list_transcriptions(self) -> List[TranscriptionInfo]:
        return list(self._transcriptions.values())

    def list_enrichments(self) -> List[EnrichmentInfo]:
        return list(self._enrichments.values())

    def get_transcription(self, transcription_id: str) -> Optional[TranscriptionInfo]:
        return self._transcriptions.get(transcription_id)

    def get_enrichment(self, enrichment_id: str) -> Optional[EnrichmentInfo]:
        return self._enrichments.get(enrichment_id)

    def get_recording(self, recording_id: str) -> Optional[RecordingInfo]:
        return self._recordings.get(recording_id)
