# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-27
# Description: test_source_aggregator.py
# -----------------------------------------------------------------------------
from context.SourceAggregator import SourceAggregator, preview
from sources.SourceType import SourceType
from vectorstore.RetrievalHit import RetrievalHit


def _hit(recording_id, similarity, content="chunk text", source_type=SourceType.TRANSCRIPTION):
    return RetrievalHit(
        id=f"{recording_id}-{similarity}",
        source_type=source_type,
        source_id="src",
        chunk_index=0,
        total_chunks=1,
        content=content,
        similarity=similarity,
        distance=1.0 - similarity,
        transcription_id=f"tr-of-{recording_id}" if recording_id else None,
        recording_id=recording_id,
        recording_filename=f"{recording_id}.m4a" if recording_id else None,
    )


def test_three_hits_from_two_recordings_give_two_groups():
    hits = [
        _hit("rec-a", 0.62),
        _hit("rec-b", 0.91),
        _hit("rec-a", 0.75, source_type=SourceType.ENRICHMENT),
    ]

    sources = SourceAggregator().format_sources(hits)

    assert [s.recording_id for s in sources] == ["rec-b", "rec-a"]
    assert [len(s.chunks) for s in sources] == [1, 2]
    assert sources[1].max_similarity == 0.75
    assert sources[1].filename == "rec-a.m4a"
    assert sources[1].transcription_id == "tr-of-rec-a"
    assert [c.type for c in sources[1].chunks] == [SourceType.TRANSCRIPTION, SourceType.ENRICHMENT]


def test_hits_without_recording_are_dropped():
    sources = SourceAggregator().format_sources([_hit(None, 0.99), _hit("rec-a", 0.4)])

    assert [s.recording_id for s in sources] == ["rec-a"]


def test_chunk_content_is_previewed():
    long_text = "x" * 250

    sources = SourceAggregator(preview_chars=200).format_sources([_hit("rec-a", 0.5, content=long_text)])

    assert sources[0].chunks[0].content == "x" * 200 + "..."
    assert preview("short", 200) == "short"
