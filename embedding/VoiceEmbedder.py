# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-24
# Description: VoiceEmbedder
# -----------------------------------------------------------------------------
from typing import Any, List, Optional, Sequence

import numpy as np
from openai import OpenAI

from config.Config import Config
from utility.errors import InvalidInputError, ProviderError
from utility.logging_utils import get_class_logger


class VoiceEmbedder:
    """
    Embedding gateway over the OpenAI embeddings API.

    Every vector it returns has exactly `self.dimensions` entries. Provider
    failures surface as ProviderError and are not retried here.
    """

    def __init__(
            self,
            cfg: Config,
            *,
            client: Optional[Any] = None,
            batch_size: int = 256,
            normalize: bool = True,
            logger=None,
    ):
        self.cfg = cfg
        self.batch_size = batch_size
        self.normalize = normalize
        self.logger = logger or get_class_logger(self.__class__)

        self.model = cfg.openai_embed_model
        self.dimensions = cfg.openai_embed_dimensions

        self.client = client or OpenAI(
            api_key=cfg.openai_api_key,
            base_url=cfg.openai_base_url or None,
        )
        self.logger.info(
            "OpenAI embedder initialised (model=%s, dimensions=%d)", self.model, self.dimensions
        )

    def _embed_batch(self, texts: List[str]) -> np.ndarray:
        try:
            resp = self.client.embeddings.create(
                model=self.model,
                input=texts,
                dimensions=self.dimensions,
            )
        except Exception as e:
            self.logger.error("Embedding request failed (batch=%d): %s", len(texts), e, exc_info=True)
            raise ProviderError(f"Embedding generation failed: {e}") from e

        data = list(resp.data or [])
        if len(data) != len(texts):
            raise ProviderError(
                f"Embedding response count mismatch: expected {len(texts)}, got {len(data)}"
            )

        # the API tags each item with its input position
        data.sort(key=lambda d: getattr(d, "index", 0))
        arr = np.asarray([d.embedding for d in data], dtype=np.float32)

        if arr.ndim != 2 or arr.shape[1] != self.dimensions:
            raise ProviderError(
                f"Embedding dimension mismatch: expected {self.dimensions}, got shape {arr.shape}"
            )

        # Normalize vectors (cosine-friendly)
        if self.normalize:
            norms = np.linalg.norm(arr, axis=1, keepdims=True) + 1e-12
            arr = arr / norms

        return arr

    def embed_one(self, text: str) -> np.ndarray:
        if not text or not text.strip():
            raise InvalidInputError("Text cannot be empty")

        return self._embed_batch([text.strip()])[0]

    def embed_many(self, texts: Sequence[str]) -> List[np.ndarray]:
        """
        Blank entries are dropped before the provider call, so the result can
        be shorter than `texts`. Order of the remaining entries is preserved.
        """
        items = [t.strip() for t in (texts or []) if t and t.strip()]
        if not items:
            return []

        self.logger.debug("Embedding %d texts (batch=%d)", len(items), self.batch_size)
        out: List[np.ndarray] = []
        for i in range(0, len(items), self.batch_size):
            out.extend(self._embed_batch(items[i:i + self.batch_size]))

        return out
