# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-25
# Description: test_chroma_vector_store.py
# -----------------------------------------------------------------------------
import pytest

from sources.SourceType import SourceType
from utility.errors import InvalidInputError, StorageError

TR = SourceType.TRANSCRIPTION
EN = SourceType.ENRICHMENT


def _upsert(store, embedder, source_type, source_id, chunks):
    vectors = embedder.embed_many(chunks)
    return store.upsert_chunks(
        source_type,
        source_id,
        chunks,
        vectors,
        model=embedder.model,
        dimensions=embedder.dimensions,
    )


def test_upsert_then_has_and_find(store, embedder):
    chunks = ["We ordered pizza.", "The budget was approved."]

    records = _upsert(store, embedder, TR, "tr-1", chunks)

    assert [r.chunk_index for r in records] == [0, 1]
    assert all(r.total_chunks == 2 for r in records)
    assert len({r.id for r in records}) == 2

    assert store.has_embeddings(TR, "tr-1")
    assert not store.has_embeddings(EN, "tr-1")
    assert not store.has_embeddings(TR, "tr-2")

    stored = store.find_by_source(TR, "tr-1")
    assert [r.content for r in stored] == chunks
    assert stored[0].model == embedder.model
    assert stored[0].dimensions == embedder.dimensions


def test_reembedding_replaces_previous_rows(store, embedder):
    first = _upsert(store, embedder, TR, "tr-1", ["pizza one.", "pizza two.", "pizza three."])
    second = _upsert(store, embedder, TR, "tr-1", ["budget only."])

    stored = store.find_by_source(TR, "tr-1")

    assert [r.content for r in stored] == ["budget only."]
    assert {r.id for r in stored} == {r.id for r in second}
    assert not ({r.id for r in stored} & {r.id for r in first})
    assert store.stats()["total"] == 1


def test_failed_replacement_keeps_previous_rows(store, embedder, monkeypatch):
    first = _upsert(store, embedder, TR, "tr-1", ["pizza one.", "pizza two."])

    real_delete = store.collection.delete
    calls = []

    def delete_fails_once(*args, **kwargs):
        calls.append(kwargs.get("ids"))
        if len(calls) == 1:
            raise RuntimeError("chroma write timeout")
        return real_delete(*args, **kwargs)

    monkeypatch.setattr(store.collection, "delete", delete_fails_once)

    with pytest.raises(StorageError):
        _upsert(store, embedder, TR, "tr-1", ["budget only."])

    # first call targeted the old rows, the second removed the new one
    assert sorted(calls[0]) == sorted(r.id for r in first)
    assert len(calls) == 2

    stored = store.find_by_source(TR, "tr-1")
    assert [r.id for r in stored] == [r.id for r in first]
    assert [r.chunk_index for r in stored] == [0, 1]
    assert all(r.total_chunks == 2 for r in stored)
    assert store.stats()["total"] == 2


def test_upsert_validates_counts_and_dimensions(store, embedder):
    vectors = embedder.embed_many(["pizza"])

    with pytest.raises(InvalidInputError):
        store.upsert_chunks(TR, "tr-1", ["pizza", "budget"], vectors, model="m", dimensions=embedder.dimensions)

    with pytest.raises(InvalidInputError):
        store.upsert_chunks(TR, "tr-1", ["pizza"], vectors, model="m", dimensions=embedder.dimensions + 1)

    assert not store.has_embeddings(TR, "tr-1")


def test_delete_by_source_is_idempotent(store, embedder):
    _upsert(store, embedder, TR, "tr-1", ["pizza.", "budget."])
    _upsert(store, embedder, TR, "tr-2", ["doctor."])

    assert store.delete_by_source(TR, "tr-1") == 2
    assert store.delete_by_source(TR, "tr-1") == 0
    assert not store.has_embeddings(TR, "tr-1")
    assert store.has_embeddings(TR, "tr-2")


def test_nearest_neighbors_on_empty_collection(store, embedder):
    assert store.nearest_neighbors(embedder.embed_one("pizza"), limit=5) == []


def test_nearest_neighbors_rejects_non_positive_limit(store, embedder):
    with pytest.raises(InvalidInputError):
        store.nearest_neighbors(embedder.embed_one("pizza"), limit=0)


def test_nearest_neighbors_ranks_and_limits(store, embedder):
    _upsert(store, embedder, TR, "tr-1", ["We ordered pizza.", "The budget for the holiday."])
    _upsert(store, embedder, TR, "tr-2", ["The doctor visit.", "Garden work."])

    hits = store.nearest_neighbors(embedder.embed_one("pizza"), limit=3)

    assert len(hits) == 3
    assert hits[0].content == "We ordered pizza."
    assert hits[0].similarity == pytest.approx(1.0, abs=1e-4)
    assert hits[0].similarity >= hits[1].similarity >= hits[2].similarity
    assert hits[0].similarity == pytest.approx(1.0 - hits[0].distance)


def test_nearest_neighbors_joins_owner_recording(store, embedder):
    _upsert(store, embedder, TR, "tr-1", ["We ordered pizza."])
    _upsert(store, embedder, EN, "en-1", ["Summary: pizza meeting."])
    _upsert(store, embedder, TR, "tr-orphan", ["Pizza without a recording."])
    _upsert(store, embedder, EN, "en-missing", ["Pizza enrichment without owner."])

    hits = {h.source_id: h for h in store.nearest_neighbors(embedder.embed_one("pizza"), limit=10)}

    assert hits["tr-1"].transcription_id == "tr-1"
    assert hits["tr-1"].recording_id == "rec-1"
    assert hits["tr-1"].recording_filename == "team_call.m4a"

    # enrichment -> transcription -> recording
    assert hits["en-1"].transcription_id == "tr-1"
    assert hits["en-1"].recording_id == "rec-1"

    assert hits["tr-orphan"].transcription_id == "tr-orphan"
    assert hits["tr-orphan"].recording_id is None

    assert hits["en-missing"].transcription_id is None
    assert hits["en-missing"].recording_id is None


def test_source_type_filter(store, embedder):
    _upsert(store, embedder, TR, "tr-1", ["We ordered pizza."])
    _upsert(store, embedder, EN, "en-1", ["Summary: pizza meeting."])

    hits = store.nearest_neighbors(embedder.embed_one("pizza"), limit=10, source_types=[TR])

    assert hits
    assert all(h.source_type is TR for h in hits)


def test_min_similarity_filters_after_limit(store, embedder):
    _upsert(store, embedder, TR, "tr-1", ["We ordered pizza."])
    _upsert(store, embedder, TR, "tr-2", ["Garden work.", "The doctor visit."])

    query = embedder.embed_one("pizza")

    unfiltered = store.nearest_neighbors(query, limit=3)
    assert len(unfiltered) == 3

    filtered = store.nearest_neighbors(query, limit=3, min_similarity=0.5)
    assert [h.source_id for h in filtered] == ["tr-1"]
    assert all(h.similarity >= 0.5 for h in filtered)

    # the threshold only shrinks the limited list; it never pulls in more rows
    _upsert(store, embedder, TR, "tr-3", ["More pizza talk.", "Even more pizza."])
    limited = store.nearest_neighbors(query, limit=1, min_similarity=0.5)
    assert len(limited) == 1


def test_stats_counts_embeddings_and_sources(store, embedder):
    assert store.stats() == {"total": 0, "by_type": {}}

    _upsert(store, embedder, TR, "tr-1", ["pizza.", "budget."])
    _upsert(store, embedder, TR, "tr-2", ["doctor."])
    _upsert(store, embedder, EN, "en-1", ["summary pizza."])

    stats = store.stats()

    assert stats["total"] == 4
    assert stats["by_type"]["transcription"] == {"embeddings": 3, "unique_sources": 2}
    assert stats["by_type"]["enrichment"] == {"embeddings": 1, "unique_sources": 1}


def test_test_connection(store):
    assert store.test_connection() is True
