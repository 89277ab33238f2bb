# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-23
# Description: errors.py
# -----------------------------------------------------------------------------


class RAGError(Exception):
    """Base class for failures raised by the RAG pipeline."""


class InvalidInputError(RAGError, ValueError):
    """Caller error: blank text/question or malformed chunk/vector input. Never retried."""


class ProviderError(RAGError, RuntimeError):
    """Embedding or generation provider failed (transport, auth, malformed response)."""


class StorageError(RAGError, RuntimeError):
    """Vector store operation failed. Always surfaced to the caller."""


class SourceNotFoundError(RAGError, KeyError):
    """A transcription/enrichment id could not be resolved in the source catalog."""

    def __str__(self) -> str:
        # KeyError repr()s its message; keep it readable
        return str(self.args[0]) if self.args else ""
