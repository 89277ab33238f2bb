# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-28
# Description: VoiceIngestService.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
from typing import List

from chunking.VoiceChunker import VoiceChunker
from config.RAGConfig import RAGConfig
from embedding.EmbeddingRecord import EmbeddingRecord
from embedding.VoiceEmbedder import VoiceEmbedder
from sources.SourceType import SourceType
from utility.SourceLocks import SourceLocks
from utility.errors import ProviderError
from utility.logging_utils import get_class_logger
from vectorstore.VoiceVectorStore import VoiceVectorStore


class VoiceIngestService:
    """
    Owns the indexing path for one source:
      - chunk the text
      - embed the chunks
      - replace the source's rows in the vector store
    Re-embeds of the same source are serialized; different sources run freely.
    """

    def __init__(
        self,
        *,
        store: VoiceVectorStore,
        embedder: VoiceEmbedder,
        chunker: VoiceChunker,
        locks: SourceLocks | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.embedder = embedder
        self.chunker = chunker
        self.locks = locks or SourceLocks()
        self.logger = logger or get_class_logger(self.__class__)

    @staticmethod
    def build_default_chunker(rag_cfg: RAGConfig) -> VoiceChunker:
        return VoiceChunker(
            chunk_size=rag_cfg.chunk_size,
            chunk_overlap=rag_cfg.chunk_overlap,
        )

    def index_source(
        self,
        source_type: SourceType | str,
        source_id: str,
        text: str,
    ) -> List[EmbeddingRecord]:
        source_type = SourceType.parse(source_type)

        if not text or not text.strip():
            self.logger.warning(
                "Empty content for %s:%s, skipping embedding", source_type.value, source_id
            )
            return []

        with self.locks.hold((source_type.value, source_id)):
            chunks = self.chunker.split(text)
            self.logger.info(
                "Indexing %s:%s chars=%d chunks=%d",
                source_type.value,
                source_id,
                len(text),
                len(chunks),
            )

            vectors = self.embedder.embed_many(chunks)
            if len(vectors) != len(chunks):
                # embed_many drops blank entries; the chunker never yields any
                raise ProviderError(
                    f"Embedding count mismatch for {source_type.value}:{source_id}: "
                    f"{len(vectors)} != {len(chunks)}"
                )

            records = self.store.upsert_chunks(
                source_type,
                source_id,
                chunks,
                vectors,
                model=self.embedder.model,
                dimensions=self.embedder.dimensions,
            )

        self.logger.info(
            "Indexed %s:%s -> %d embeddings", source_type.value, source_id, len(records)
        )
        if records:
            self.logger.debug("First chunk: %s", records[0].short_preview())
        return records
