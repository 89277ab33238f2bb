# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-27
# Description: ContextBuilder
# -----------------------------------------------------------------------------
import logging
from datetime import datetime
from typing import List, Optional, Sequence

from utility.logging_utils import get_class_logger
from vectorstore.RetrievalHit import RetrievalHit

_LABELS = {
    "de": {
        "source": "Quelle",
        "file": "Datei",
        "date": "Datum",
        "type": "Typ",
        "relevance": "Relevanz",
        "content": "Inhalt",
        "unknown_date": "Unbekannt",
        "unknown_file": "Unbekannte Aufnahme",
    },
    "en": {
        "source": "Source",
        "file": "File",
        "date": "Date",
        "type": "Type",
        "relevance": "Relevance",
        "content": "Content",
        "unknown_date": "Unknown",
        "unknown_file": "Unknown recording",
    },
}


def format_date(value: Optional[datetime], language: str) -> Optional[str]:
    """German D.M.YYYY, English M/D/YYYY (no zero padding)."""
    if value is None:
        return None
    if language == "de":
        return f"{value.day}.{value.month}.{value.year}"
    return f"{value.month}/{value.day}/{value.year}"


class ContextBuilder:
    """
    Renders ranked hits into the grounding block handed to the generator.
    One numbered block per hit, in ranked order. Callers bound the size via
    the retrieval limit.
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self.logger = logger or get_class_logger(self.__class__)

    def build_context(self, hits: Sequence[RetrievalHit], language: str = "de") -> str:
        labels = _LABELS.get(language, _LABELS["en"])
        parts: List[str] = []

        for i, hit in enumerate(hits, start=1):
            date = format_date(hit.recording_created_at, language) or labels["unknown_date"]
            filename = hit.recording_filename or labels["unknown_file"]

            parts.append(
                f"[{labels['source']} {i}]\n"
                f"{labels['file']}: {filename}\n"
                f"{labels['date']}: {date}\n"
                f"{labels['type']}: {hit.source_type.label(language)}\n"
                f"{labels['relevance']}: {hit.similarity * 100:.1f}%\n"
                f"\n"
                f"{labels['content']}:\n"
                f"{hit.content}\n"
                f"---"
            )

        context = "\n\n".join(parts)
        self.logger.debug("build_context: hits=%d context_chars=%d", len(parts), len(context))
        return context
