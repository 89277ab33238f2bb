# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-30
# Description: api/schemas/rag.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from sources.SourceType import SourceType


class HistoryMessage(BaseModel):
    role: str
    content: str


class ChatOptions(BaseModel):
    # Retrieval controls (mirror /rag/search)
    top_k: Optional[int] = Field(None, ge=1, le=50)
    min_similarity: Optional[float] = Field(None, ge=0.0, le=1.0)
    source_types: Optional[List[SourceType]] = None

    # "auto" detects the answer language from the question
    language: Optional[Literal["de", "en", "auto"]] = None


class ChatRequest(BaseModel):
    question: str = Field(..., min_length=1)
    history: Optional[List[HistoryMessage]] = None
    options: ChatOptions = Field(default_factory=ChatOptions)


class SourceChunkOut(BaseModel):
    content: str
    similarity: float
    type: SourceType


class ChatSource(BaseModel):
    recording_id: str
    transcription_id: Optional[str] = None
    filename: Optional[str] = None
    date: Optional[datetime] = None
    max_similarity: float
    chunks: List[SourceChunkOut] = Field(default_factory=list)


class UsageOut(BaseModel):
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class ChatResponse(BaseModel):
    answer: str
    sources: List[ChatSource] = Field(default_factory=list)
    has_context: bool
    relevant_chunks: int = 0
    language: str
    is_follow_up: bool = False

    # helpful for debugging / telemetry
    usage: Optional[UsageOut] = None


class SearchRequest(BaseModel):
    query: str = Field(..., min_length=1)
    limit: int = Field(10, ge=1, le=50)
    min_similarity: float = Field(0.6, ge=0.0, le=1.0)
    source_types: Optional[List[SourceType]] = None


class SearchHit(BaseModel):
    id: str
    source_type: SourceType
    source_id: str
    chunk_index: int
    content: str
    similarity: float
    transcription_id: Optional[str] = None
    recording_id: Optional[str] = None
    recording_filename: Optional[str] = None
    recording_created_at: Optional[datetime] = None


class SearchResponse(BaseModel):
    query: str
    results: List[SearchHit]


class SimilarResponse(BaseModel):
    transcription_id: str
    results: List[SearchHit]


class BackfillFailure(BaseModel):
    source_id: str
    error: Optional[str] = None


class BackfillSummaryOut(BaseModel):
    embedded: int
    skipped: int
    errors: int
    total: int
    failures: List[BackfillFailure] = Field(default_factory=list)


class EmbedAllResponse(BaseModel):
    transcriptions: BackfillSummaryOut
    enrichments: BackfillSummaryOut


class TypeStats(BaseModel):
    embeddings: int
    unique_sources: int


class StatsResponse(BaseModel):
    total: int
    by_type: Dict[str, TypeStats] = Field(default_factory=dict)


class DeleteEmbeddingsResponse(BaseModel):
    source_type: SourceType
    source_id: str
    deleted: int
