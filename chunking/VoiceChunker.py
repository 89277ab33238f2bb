# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-24
# Description: VoiceChunker
# -----------------------------------------------------------------------------
import logging
from typing import List

from utility.logging_utils import get_class_logger

SENTENCE_END = (".", "?", "!")


class VoiceChunker:
    """
    Splits transcription / enrichment text into overlapping character windows.

    - text that fits in one window is returned unchanged as a single chunk
    - a window cut is snapped back to just after the last sentence end
      (. ? !) when that sentence end lies past the middle of the window;
      the search includes the character right after the window, so a chunk
      that ends on such a sentence end is chunk_size + 1 long
    - consecutive windows overlap by `chunk_overlap` characters
    - chunks are stripped; whitespace-only chunks are dropped
    """

    def __init__(
        self,
        *,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        logger: logging.Logger | None = None,
    ):
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.logger = logger or get_class_logger(self.__class__)

        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size ({self.chunk_size}) must be > 0")
        if self.chunk_overlap < 0:
            raise ValueError(f"chunk_overlap ({self.chunk_overlap}) must be >= 0")
        # a snapped cut can land just past the window midpoint; the next start
        # must still move forward from there
        if self.chunk_overlap > self.chunk_size // 2:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be <= chunk_size // 2 ({self.chunk_size // 2})"
            )

    def split(self, text: str) -> List[str]:
        if text is None:
            raise TypeError("text must be a str, got None")

        text_len = len(text)
        if text_len <= self.chunk_size:
            return [text]

        chunks: List[str] = []
        start = 0
        half = self.chunk_size / 2

        while start < text_len:
            end = start + self.chunk_size

            if end < text_len:
                # last sentence end at a position <= end
                best_break = max(text.rfind(p, 0, end + 1) for p in SENTENCE_END)
                if best_break > start + half:
                    end = best_break + 1

            chunk = text[start:end].strip()
            if chunk:
                chunks.append(chunk)

            start = end - self.chunk_overlap

        self.logger.debug(
            "Split %d chars into %d chunks (chunk_size=%d overlap=%d)",
            text_len,
            len(chunks),
            self.chunk_size,
            self.chunk_overlap,
        )
        return chunks
