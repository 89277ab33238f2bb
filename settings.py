# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-22
# Updated: 2026-02-03
# Description: settings.py
# -----------------------------------------------------------------------------
import os
from typing import Any, Dict


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    v = _env(name, "")
    if v == "":
        return default
    v = v.lower()
    if v in ("1", "true", "t", "yes", "y", "on"):
        return True
    if v in ("0", "false", "f", "no", "n", "off"):
        return False
    raise RuntimeError(f"Env var {name} must be a boolean, got {v!r}")


# -----------------------------------------------------------------------------
# Vector storage (Chroma collection name)
# -----------------------------------------------------------------------------
VECTOR_COLLECTION_DEFAULT = _env("VOICE_VECTOR_COLLECTION", "voice-embeddings")


# -----------------------------------------------------------------------------
# Upstream sources
# -----------------------------------------------------------------------------
# JSON export of recordings / transcriptions / enrichments. Empty means the
# API starts with an empty catalog.
SOURCE_CATALOG_PATH = _env("VOICE_SOURCE_CATALOG", "")


# -----------------------------------------------------------------------------
# RAG defaults (env-controlled)
# -----------------------------------------------------------------------------
RAG_DEFAULTS: Dict[str, Any] = {
    "chunk_size": _env_int("VOICE_CHUNK_SIZE", 1000),
    "chunk_overlap": _env_int("VOICE_CHUNK_OVERLAP", 200),
    "top_k_default": _env_int("VOICE_DEFAULT_TOP_K", 5),
    # 0.0 means "rely on top-K ranking only"
    "min_similarity_default": _env_float("VOICE_DEFAULT_MIN_SIMILARITY", 0.0),
    "history_limit": _env_int("VOICE_HISTORY_LIMIT", 20),
    "default_language": _env("VOICE_DEFAULT_LANGUAGE", "de"),
    "temperature": _env_float("VOICE_DEFAULT_TEMPERATURE", 0.3),
    "max_tokens": _env_int("VOICE_DEFAULT_MAX_TOKENS", 1500),
    "preview_chars": _env_int("VOICE_PREVIEW_CHARS", 200),
    "similar_min_similarity": _env_float("VOICE_SIMILAR_MIN_SIMILARITY", 0.6),
    "collection_name": VECTOR_COLLECTION_DEFAULT,
}

# Optional: allow /rag/embed-all over HTTP (scripts/embed_all.py is always available)
ALLOW_HTTP_BACKFILL = _env_bool("VOICE_ALLOW_HTTP_BACKFILL", True)


# -----------------------------------------------------------------------------
# Sanity checks (tunable)
# -----------------------------------------------------------------------------
if not VECTOR_COLLECTION_DEFAULT:
    raise RuntimeError("VECTOR_COLLECTION_DEFAULT resolved to empty value")

if RAG_DEFAULTS["default_language"] not in ("de", "en"):
    raise RuntimeError(
        f"VOICE_DEFAULT_LANGUAGE must be 'de' or 'en', got {RAG_DEFAULTS['default_language']!r}"
    )
