# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-25
# Description: ChromaVoiceVectorStore
# -----------------------------------------------------------------------------
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Sequence, Dict, Any, List, Optional, Iterator

import chromadb
from chromadb import ClientAPI
from chromadb.api.models.Collection import Collection

from config.Config import Config
from embedding.EmbeddingRecord import EmbeddingRecord
from sources.SourceCatalog import SourceCatalog
from sources.SourceType import SourceType
from utility.errors import InvalidInputError, RAGError, StorageError
from utility.logging_utils import get_class_logger
from vectorstore.RetrievalHit import RetrievalHit
from vectorstore.VoiceVectorStore import VoiceVectorStore


def _as_float_list(vec: Any) -> List[float]:
    if hasattr(vec, "tolist"):
        vec = vec.tolist()
    return [float(x) for x in vec]


def _source_where(source_type: SourceType, source_id: str) -> Dict[str, Any]:
    return {
        "$and": [
            {"source_type": {"$eq": source_type.value}},
            {"source_id": {"$eq": source_id}},
        ]
    }


@dataclass
class ChromaVoiceVectorStore(VoiceVectorStore):
    """
    Chunk embeddings in a Chroma collection (cosine space), keyed by
    (source_type, source_id, chunk_index).

    Hits are joined with their owning recording through the SourceCatalog
    at query time, so renamed/deleted recordings are reflected immediately.
    """

    catalog: SourceCatalog
    cfg: Optional[Config] = None
    client: Optional[ClientAPI] = None
    collection_name: str = "voice-embeddings"
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        if self.client is None:
            if self.cfg is None:
                raise ValueError("ChromaVoiceVectorStore needs either a Chroma client or a Config")
            self.client = self._build_client(self.cfg)

        self.collection: Collection = self.client.get_or_create_collection(
            name=self.collection_name,
            metadata={"hnsw:space": "cosine"},
            embedding_function=None,  # vectors always come from VoiceEmbedder
        )
        self.logger.info("Chroma collection ready: '%s'", self.collection_name)

    def _build_client(self, cfg: Config) -> ClientAPI:
        if cfg.uses_chroma_cloud:
            self.logger.info(
                "Initialising Chroma Cloud client (tenant=%s, database=%s)",
                cfg.chroma_tenant,
                cfg.chroma_database,
            )
            return chromadb.CloudClient(
                tenant=cfg.chroma_tenant,
                database=cfg.chroma_database,
                api_key=cfg.chroma_api_key,
            )

        self.logger.info("Initialising persistent Chroma client (path=%s)", cfg.chroma_path)
        return chromadb.PersistentClient(path=cfg.chroma_path)

    @contextmanager
    def _storage_op(self, op: str, **context: Any) -> Iterator[None]:
        try:
            yield
        except RAGError:
            raise
        except Exception as e:
            self.logger.error(
                "Chroma %s failed on collection '%s' (%s): %s",
                op,
                self.collection_name,
                context,
                e,
                exc_info=True,
            )
            raise StorageError(f"Vector store {op} failed: {e}") from e

    def test_connection(self) -> bool:
        """
        Simple health check: can we talk to Chroma and our collection?
        """
        try:
            # count() is cheap and exercises the connection + auth
            _ = self.collection.count()
            return True
        except Exception as e:
            self.logger.error("Chroma connection failed: %s", e)
            return False

    def _ids_for_source(self, source_type: SourceType, source_id: str) -> List[str]:
        with self._storage_op("get", source_type=source_type.value, source_id=source_id):
            res: Dict[str, Any] = self.collection.get(
                where=_source_where(source_type, source_id),
                include=[],  # we only care about ids
            )
        # preserves order while de-duplicating
        return list(dict.fromkeys(res.get("ids", []) or []))

    def upsert_chunks(
            self,
            source_type: SourceType,
            source_id: str,
            chunks: Sequence[str],
            vectors: Sequence[Sequence[float]],
            model: str,
            dimensions: int,
    ) -> List[EmbeddingRecord]:
        """
        Replace the chunk set of one source.

        New rows are added before the previous rows are deleted. A failed add
        leaves the previous chunk set untouched; a failed delete removes the
        rows just added, so either way the source keeps exactly the previous
        set. Readers may see both sets between the add and the delete.
        """
        source_type = SourceType.parse(source_type)
        if len(chunks) != len(vectors):
            raise InvalidInputError(
                f"chunks ({len(chunks)}) and vectors ({len(vectors)}) length mismatch"
            )

        embeddings = [_as_float_list(v) for v in vectors]
        for i, vec in enumerate(embeddings):
            if len(vec) != dimensions:
                raise InvalidInputError(
                    f"Vector {i} for {source_type.value}:{source_id} has {len(vec)} dims, expected {dimensions}"
                )

        prior_ids = self._ids_for_source(source_type, source_id)

        now = datetime.now(timezone.utc)
        total = len(chunks)
        records = [
            EmbeddingRecord(
                id=uuid.uuid4().hex,
                source_type=source_type,
                source_id=source_id,
                chunk_index=i,
                total_chunks=total,
                content=chunk,
                model=model,
                dimensions=dimensions,
                created_at=now,
                updated_at=now,
                embedding=vec,
            )
            for i, (chunk, vec) in enumerate(zip(chunks, embeddings))
        ]

        if records:
            with self._storage_op("add", source_type=source_type.value, source_id=source_id):
                self.collection.add(
                    ids=[r.id for r in records],
                    documents=[r.content for r in records],
                    embeddings=[r.embedding for r in records],
                    metadatas=[r.to_metadata() for r in records],
                )

        if prior_ids:
            try:
                with self._storage_op("delete", source_type=source_type.value, source_id=source_id):
                    self.collection.delete(ids=prior_ids)
            except StorageError:
                self._rollback_added(records, source_type, source_id)
                raise

        self.logger.info(
            "Stored %d chunks for %s:%s (replaced %d) in collection '%s'",
            total,
            source_type.value,
            source_id,
            len(prior_ids),
            self.collection_name,
        )
        return records

    def _rollback_added(
            self,
            records: Sequence[EmbeddingRecord],
            source_type: SourceType,
            source_id: str,
    ) -> None:
        if not records:
            return
        try:
            self.collection.delete(ids=[r.id for r in records])
        except Exception as e:
            self.logger.error(
                "Rollback of %d new chunks for %s:%s failed; source holds two chunk sets: %s",
                len(records),
                source_type.value,
                source_id,
                e,
                exc_info=True,
            )
            return
        self.logger.warning(
            "Replacement of %s:%s aborted; removed %d new chunks",
            source_type.value,
            source_id,
            len(records),
        )

    def delete_by_source(self, source_type: SourceType, source_id: str) -> int:
        """
        Delete all chunks that belong to the given source.
        Returns the number of chunks actually deleted (0 if none existed).
        """
        source_type = SourceType.parse(source_type)
        ids = self._ids_for_source(source_type, source_id)
        if not ids:
            self.logger.debug("No chunks found for %s:%s", source_type.value, source_id)
            return 0

        with self._storage_op("delete", source_type=source_type.value, source_id=source_id):
            self.collection.delete(ids=ids)

        self.logger.info("Deleted %d chunks for %s:%s", len(ids), source_type.value, source_id)
        return len(ids)

    def has_embeddings(self, source_type: SourceType, source_id: str) -> bool:
        source_type = SourceType.parse(source_type)
        with self._storage_op("get", source_type=source_type.value, source_id=source_id):
            res = self.collection.get(
                where=_source_where(source_type, source_id),
                limit=1,
                include=[],
            )
        return bool(res.get("ids"))

    def find_by_source(self, source_type: SourceType, source_id: str) -> List[EmbeddingRecord]:
        source_type = SourceType.parse(source_type)
        with self._storage_op("get", source_type=source_type.value, source_id=source_id):
            res = self.collection.get(
                where=_source_where(source_type, source_id),
                include=["documents", "metadatas"],
            )

        ids = res.get("ids") or []
        docs = res.get("documents") or []
        metas = res.get("metadatas") or []
        records = [
            EmbeddingRecord.from_metadata(record_id, doc or "", meta or {})
            for record_id, doc, meta in zip(ids, docs, metas)
        ]
        return sorted(records, key=lambda r: r.chunk_index)

    def nearest_neighbors(
            self,
            query_vector: Sequence[float],
            limit: int = 5,
            source_types: Optional[Sequence[SourceType]] = None,
            min_similarity: Optional[float] = None,
    ) -> List[RetrievalHit]:
        """
        Top-`limit` chunks by cosine distance, optionally restricted to some
        source types. `min_similarity` is applied to the already-limited
        result, so it can only shrink the list.
        """
        if limit <= 0:
            raise InvalidInputError(f"limit must be > 0, got {limit}")

        types = SourceType.parse_many(source_types)

        with self._storage_op("query", limit=limit, source_types=[t.value for t in types]):
            total = self.collection.count()
            if total == 0:
                return []

            res: Dict[str, Any] = self.collection.query(
                query_embeddings=[_as_float_list(query_vector)],
                n_results=min(limit, total),
                where={"source_type": {"$in": [t.value for t in types]}},
                include=["documents", "metadatas", "distances"],
            )

        ids0 = (res.get("ids") or [[]])[0]
        docs0 = (res.get("documents") or [[]])[0]
        metas0 = (res.get("metadatas") or [[]])[0]
        dists0 = (res.get("distances") or [[]])[0]

        hits: List[RetrievalHit] = []
        for record_id, doc, meta, dist in zip(ids0, docs0, metas0, dists0):
            meta = meta or {}
            distance = float(dist)
            hits.append(
                RetrievalHit(
                    id=record_id,
                    source_type=SourceType.parse(meta["source_type"]),
                    source_id=str(meta["source_id"]),
                    chunk_index=int(meta.get("chunk_index", 0)),
                    total_chunks=int(meta.get("total_chunks", 1)),
                    content=doc or "",
                    similarity=1.0 - distance,
                    distance=distance,
                    model=meta.get("model"),
                    dimensions=meta.get("dimensions"),
                )
            )

        if min_similarity is not None and min_similarity > 0:
            hits = [h for h in hits if h.similarity >= min_similarity]

        hits = [h.with_owner(h.source_type.resolve_owner(self.catalog, h.source_id)) for h in hits]

        self.logger.debug(
            "Nearest neighbours: returned %d hits (limit=%d, types=%s, min_similarity=%s)",
            len(hits),
            limit,
            [t.value for t in types],
            min_similarity,
        )
        return hits

    def stats(self) -> Dict[str, Any]:
        by_type: Dict[str, Dict[str, int]] = {}

        with self._storage_op("stats"):
            total = self.collection.count()
            for source_type in SourceType:
                res = self.collection.get(
                    where={"source_type": {"$eq": source_type.value}},
                    include=["metadatas"],
                )
                metas = res.get("metadatas") or []
                if not metas:
                    continue
                by_type[source_type.value] = {
                    "embeddings": len(metas),
                    "unique_sources": len({m.get("source_id") for m in metas if m}),
                }

        return {"total": total, "by_type": by_type}
