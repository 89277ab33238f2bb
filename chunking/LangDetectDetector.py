# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-26
# Description: LangDetectDetector
# -----------------------------------------------------------------------------
from typing import Optional, Tuple

from langdetect import DetectorFactory, detect_langs
from langdetect.lang_detect_exception import LangDetectException

# langdetect is non-deterministic unless seeded
DetectorFactory.seed = 0


class LangDetectDetector:
    def __init__(self, *, min_chars: int = 12, min_confidence: float = 0.5):
        self.min_chars = min_chars
        self.min_confidence = min_confidence

    def detect(self, text: str) -> Tuple[str, float]:
        if not text or len(text.strip()) < self.min_chars:
            return "und", 0.0

        try:
            detections = detect_langs(text)
        except LangDetectException:
            return "und", 0.0

        if not detections:
            return "und", 0.0

        top = detections[0]  # most probable language from detections list
        return top.lang, top.prob

    def answer_language(self, text: str, default: str) -> str:
        """
        Map a question onto one of the two answer languages.
        German -> "de", any other confident detection -> "en", otherwise `default`.
        """
        lang, confidence = self.detect(text)
        resolved: Optional[str] = None
        if lang != "und" and confidence >= self.min_confidence:
            resolved = "de" if lang == "de" else "en"
        return resolved or default
