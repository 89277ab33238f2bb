# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-27
# Description: VoiceQueryService
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from embedding.VoiceEmbedder import VoiceEmbedder
from sources.SourceType import SourceType
from utility.errors import InvalidInputError
from utility.logging_utils import get_class_logger
from vectorstore.RetrievalHit import RetrievalHit
from vectorstore.VoiceVectorStore import VoiceVectorStore


@dataclass
class VoiceQueryService:
    """
    Retriever: embeds the query, then delegates ranking and filtering to the
    vector store. Nothing is cached between calls.
    """

    store: VoiceVectorStore
    embedder: VoiceEmbedder
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    def search(
        self,
        query: str,
        limit: int = 5,
        min_similarity: Optional[float] = None,
        source_types: Optional[Sequence[SourceType | str]] = None,
    ) -> List[RetrievalHit]:
        if not query or not query.strip():
            raise InvalidInputError("query must not be empty")

        types = SourceType.parse_many(source_types)

        self.logger.info(
            "search: query=%r limit=%d min_similarity=%s types=%s (start)",
            query.strip()[:120],
            limit,
            min_similarity,
            [t.value for t in types],
        )

        query_vector = self.embedder.embed_one(query)
        hits = self.store.nearest_neighbors(
            query_vector,
            limit=limit,
            source_types=types,
            min_similarity=min_similarity,
        )

        self.logger.info("search: hits=%d (done)", len(hits))
        return hits
