# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-12
# Updated: 2026-02-03
# Description: conftest.py
# -----------------------------------------------------------------------------

import os
import sys
import uuid
from datetime import datetime
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

# keep test runs off disk and offline
os.environ.setdefault("VOICE_LOG_TO_FILE", "0")
os.environ.setdefault("ANONYMIZED_TELEMETRY", "False")

import chromadb  # noqa: E402

from chat.OpenAIChat import OpenAIChat  # noqa: E402
from config.Config import Config  # noqa: E402
from config.RAGConfig import RAGConfig  # noqa: E402
from embedding.VoiceEmbedder import VoiceEmbedder  # noqa: E402
from services.VoiceIngestService import VoiceIngestService  # noqa: E402
from services.VoiceQueryService import VoiceQueryService  # noqa: E402
from services.VoiceRAGService import VoiceRAGService  # noqa: E402
from sources.InMemorySourceCatalog import InMemorySourceCatalog  # noqa: E402
from sources.types import EnrichmentInfo, RecordingInfo, TranscriptionInfo  # noqa: E402
from vectorstore.ChromaVoiceVectorStore import ChromaVoiceVectorStore  # noqa: E402

# Each topic word owns one axis of the fake embedding space; the last axis is
# a small constant so no vector is ever all zeros.
TOPICS = ("pizza", "budget", "holiday", "meeting", "garden", "doctor")
DIMS = len(TOPICS) + 1


def topic_vector(text: str) -> List[float]:
    lowered = text.lower()
    return [float(lowered.count(topic)) for topic in TOPICS] + [0.1]


class FakeEmbeddings:
    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.fail_on: str | None = None

    def create(self, model: str, input: List[str], dimensions: int) -> SimpleNamespace:
        self.calls.append({"model": model, "input": list(input), "dimensions": dimensions})
        if self.fail_on is not None and any(self.fail_on in text for text in input):
            raise RuntimeError("provider unavailable")
        # reversed on purpose: the embedder must reorder by index
        data = [
            SimpleNamespace(embedding=topic_vector(text), index=i)
            for i, text in enumerate(input)
        ]
        return SimpleNamespace(data=list(reversed(data)))


class FakeCompletions:
    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.answer = "Ihr habt **Pizza** bestellt."

    def create(self, **params: Any) -> SimpleNamespace:
        self.calls.append(params)
        return SimpleNamespace(
            model=params["model"],
            choices=[
                SimpleNamespace(
                    message=SimpleNamespace(content=self.answer),
                    finish_reason="stop",
                )
            ],
            usage=SimpleNamespace(prompt_tokens=120, completion_tokens=12, total_tokens=132),
        )


class FakeOpenAI:
    """Stands in for openai.OpenAI: embeddings.create + chat.completions.create."""

    def __init__(self) -> None:
        self.embeddings = FakeEmbeddings()
        self.chat = SimpleNamespace(completions=FakeCompletions())


@pytest.fixture
def cfg() -> Config:
    return Config(
        openai_api_key="test-key",
        openai_embed_dimensions=DIMS,
        chroma_path="/tmp/unused-chroma",
    )


@pytest.fixture
def rag_cfg() -> RAGConfig:
    return RAGConfig(chunk_size=200, chunk_overlap=40)


@pytest.fixture
def fake_openai() -> FakeOpenAI:
    return FakeOpenAI()


@pytest.fixture
def embedder(cfg, fake_openai) -> VoiceEmbedder:
    return VoiceEmbedder(cfg, client=fake_openai)


@pytest.fixture
def chat_client(cfg, fake_openai) -> OpenAIChat:
    return OpenAIChat(cfg=cfg, client=fake_openai)


@pytest.fixture
def catalog() -> InMemorySourceCatalog:
    return InMemorySourceCatalog(
        recordings=[
            RecordingInfo(id="rec-1", filename="team_call.m4a", created_at=datetime(2024, 3, 5, 9, 30)),
            RecordingInfo(id="rec-2", filename="doctor_visit.m4a", created_at=datetime(2024, 11, 21, 14, 0)),
        ],
        transcriptions=[
            TranscriptionInfo(
                id="tr-1",
                recording_id="rec-1",
                text="In the meeting we ordered pizza. The budget for the holiday party was approved.",
                language="en",
            ),
            TranscriptionInfo(
                id="tr-2",
                recording_id="rec-2",
                text="The doctor said the garden work is fine. Another doctor appointment in May.",
                language="en",
            ),
            TranscriptionInfo(id="tr-orphan", recording_id=None, text="Pizza without a recording."),
        ],
        enrichments=[
            EnrichmentInfo(
                id="en-1",
                transcription_id="tr-1",
                content="Summary: pizza meeting, budget approved.",
                type="summary",
            ),
        ],
    )


@pytest.fixture
def store(catalog) -> ChromaVoiceVectorStore:
    return ChromaVoiceVectorStore(
        catalog=catalog,
        client=chromadb.EphemeralClient(),
        collection_name=f"test-{uuid.uuid4().hex}",
    )


@pytest.fixture
def ingest_service(store, embedder, rag_cfg) -> VoiceIngestService:
    return VoiceIngestService(
        store=store,
        embedder=embedder,
        chunker=VoiceIngestService.build_default_chunker(rag_cfg),
    )


@pytest.fixture
def query_service(store, embedder) -> VoiceQueryService:
    return VoiceQueryService(store=store, embedder=embedder)


@pytest.fixture
def rag_service(query_service, chat_client, ingest_service, store, catalog, rag_cfg) -> VoiceRAGService:
    return VoiceRAGService(
        query_service=query_service,
        chat_client=chat_client,
        ingest_service=ingest_service,
        store=store,
        catalog=catalog,
        rag_cfg=rag_cfg,
    )
