# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-28
# Description: test_ingest_service.py
# -----------------------------------------------------------------------------
import threading

import pytest

from sources.SourceType import SourceType
from utility.SourceLocks import SourceLocks
from utility.errors import ProviderError


def test_index_source_chunks_embeds_and_stores(ingest_service, store, fake_openai):
    text = " ".join(f"Pizza sentence number {i}." for i in range(20))  # longer than one window

    records = ingest_service.index_source("transcription", "tr-1", text)

    assert len(records) > 1
    assert store.has_embeddings(SourceType.TRANSCRIPTION, "tr-1")
    assert len(store.find_by_source(SourceType.TRANSCRIPTION, "tr-1")) == len(records)
    assert len(fake_openai.embeddings.calls) == 1


@pytest.mark.parametrize("text", ["", "   \n\t"])
def test_blank_text_is_skipped(ingest_service, store, fake_openai, text):
    assert ingest_service.index_source(SourceType.ENRICHMENT, "en-1", text) == []
    assert fake_openai.embeddings.calls == []
    assert not store.has_embeddings(SourceType.ENRICHMENT, "en-1")


def test_provider_failure_keeps_previous_chunks(ingest_service, store, fake_openai):
    ingest_service.index_source(SourceType.TRANSCRIPTION, "tr-1", "The budget was approved.")

    fake_openai.embeddings.fail_on = "pizza"
    with pytest.raises(ProviderError):
        ingest_service.index_source(SourceType.TRANSCRIPTION, "tr-1", "Now about pizza.")

    stored = store.find_by_source(SourceType.TRANSCRIPTION, "tr-1")
    assert [r.content for r in stored] == ["The budget was approved."]


def test_concurrent_reembeds_of_same_source_leave_one_chunk_set(ingest_service, store):
    texts = [f"Garden note {i}." for i in range(8)]

    threads = [
        threading.Thread(
            target=ingest_service.index_source,
            args=(SourceType.TRANSCRIPTION, "tr-1", t),
        )
        for t in texts
    ]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    stored = store.find_by_source(SourceType.TRANSCRIPTION, "tr-1")
    assert len(stored) == 1
    assert stored[0].content in texts
    assert ingest_service.locks.active_keys() == 0


def test_source_locks_are_released_after_errors():
    locks = SourceLocks()

    with pytest.raises(RuntimeError):
        with locks.hold(("transcription", "tr-1")):
            assert locks.active_keys() == 1
            raise RuntimeError("boom")

    assert locks.active_keys() == 0
