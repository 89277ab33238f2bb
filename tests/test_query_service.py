# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-27
# Description: test_query_service.py
# -----------------------------------------------------------------------------
import pytest

from sources.SourceType import SourceType
from utility.errors import InvalidInputError


@pytest.fixture
def indexed(ingest_service, catalog):
    for t in catalog.list_transcriptions():
        ingest_service.index_source(SourceType.TRANSCRIPTION, t.id, t.text)
    for e in catalog.list_enrichments():
        ingest_service.index_source(SourceType.ENRICHMENT, e.id, e.content)
    return ingest_service


@pytest.mark.parametrize("query", ["", "   ", None])
def test_blank_query_rejected(query_service, fake_openai, query):
    with pytest.raises(InvalidInputError):
        query_service.search(query)
    assert fake_openai.embeddings.calls == []


def test_search_returns_at_most_limit_hits(query_service, indexed):
    hits = query_service.search("pizza", limit=2)

    assert 0 < len(hits) <= 2
    assert "pizza" in hits[0].content.lower()


def test_search_respects_min_similarity(query_service, indexed):
    hits = query_service.search("doctor", limit=10, min_similarity=0.5)

    assert hits
    assert all(h.similarity >= 0.5 for h in hits)
    assert {h.source_id for h in hits} == {"tr-2"}


def test_search_transcriptions_only_never_returns_enrichments(query_service, indexed):
    hits = query_service.search("pizza", limit=10, source_types=["transcription"])

    assert hits
    assert all(h.source_type is SourceType.TRANSCRIPTION for h in hits)


def test_search_rejects_unknown_source_type(query_service, indexed):
    with pytest.raises(InvalidInputError, match="Invalid source type 'audio'"):
        query_service.search("pizza", source_types=["audio"])


def test_search_on_empty_store(query_service):
    assert query_service.search("pizza") == []
