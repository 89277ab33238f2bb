# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-25
# Description: VoiceVectorStore
# -----------------------------------------------------------------------------

from typing import Protocol, Sequence, Dict, Any, List, Optional, runtime_checkable

from embedding.EmbeddingRecord import EmbeddingRecord
from sources.SourceType import SourceType
from vectorstore.RetrievalHit import RetrievalHit


@runtime_checkable
class VoiceVectorStore(Protocol):
    def test_connection(self) -> bool:
        ...

    def upsert_chunks(
            self,
            source_type: SourceType,
            source_id: str,
            chunks: Sequence[str],
            vectors: Sequence[Sequence[float]],
            model: str,
            dimensions: int,
    ) -> List[EmbeddingRecord]:
        ...

    def delete_by_source(self, source_type: SourceType, source_id: str) -> int:
        ...

    def has_embeddings(self, source_type: SourceType, source_id: str) -> bool:
        ...

    def find_by_source(self, source_type: SourceType, source_id: str) -> List[EmbeddingRecord]:
        ...

    def nearest_neighbors(
            self,
            query_vector: Sequence[float],
            limit: int = 5,
            source_types: Optional[Sequence[SourceType]] = None,
            min_similarity: Optional[float] = None,
    ) -> List[RetrievalHit]:
        ...

    def stats(self) -> Dict[str, Any]:
        ...
