# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-30
# Description: rag router
# -----------------------------------------------------------------------------
import logging
from typing import List, NoReturn, Sequence

from fastapi import APIRouter, Depends, HTTPException, Query

import settings
from api.dependencies import get_query_service, get_rag_service
from api.schemas.rag import (
    BackfillSummaryOut,
    ChatRequest,
    ChatResponse,
    ChatSource,
    DeleteEmbeddingsResponse,
    EmbedAllResponse,
    SearchHit,
    SearchRequest,
    SearchResponse,
    SimilarResponse,
    SourceChunkOut,
    StatsResponse,
    UsageOut,
)
from services.VoiceQueryService import VoiceQueryService
from services.VoiceRAGService import BackfillSummary, VoiceRAGService
from sources.SourceType import SourceType
from utility.errors import InvalidInputError, ProviderError, SourceNotFoundError
from vectorstore.RetrievalHit import RetrievalHit

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rag", tags=["rag"])


def _raise_http(op: str, e: Exception) -> NoReturn:
    if isinstance(e, InvalidInputError):
        logger.warning("%s rejected: %s", op, e)
        raise HTTPException(status_code=400, detail=str(e)) from e
    if isinstance(e, SourceNotFoundError):
        logger.warning("%s: %s", op, e)
        raise HTTPException(status_code=404, detail=str(e)) from e
    if isinstance(e, ProviderError):
        logger.exception("%s failed at the provider: %s", op, e)
        raise HTTPException(status_code=502, detail=f"{op} failed: {e}") from e

    logger.exception("%s failed: %s", op, e)
    raise HTTPException(status_code=500, detail=f"{op} failed: {e}") from e


def _to_hits(hits: Sequence[RetrievalHit]) -> List[SearchHit]:
    return [
        SearchHit(
            id=h.id,
            source_type=h.source_type,
            source_id=h.source_id,
            chunk_index=h.chunk_index,
            content=h.content,
            similarity=h.similarity,
            transcription_id=h.transcription_id,
            recording_id=h.recording_id,
            recording_filename=h.recording_filename,
            recording_created_at=h.recording_created_at,
        )
        for h in hits
    ]


def _to_summary(summary: BackfillSummary) -> BackfillSummaryOut:
    return BackfillSummaryOut(**summary.to_dict())


@router.post("/chat", response_model=ChatResponse)
def post_chat(
        req: ChatRequest,
        svc: VoiceRAGService = Depends(get_rag_service),
) -> ChatResponse:
    question = (req.question or "").strip()
    if not question:
        raise HTTPException(status_code=400, detail="question must not be empty")

    history = [m.model_dump() for m in req.history or []]
    logger.info("POST /rag/chat (start) question_len=%d history=%d", len(question), len(history))

    try:
        out = svc.chat(
            question,
            history,
            top_k=req.options.top_k,
            min_similarity=req.options.min_similarity,
            source_types=req.options.source_types,
            language=req.options.language,
        )
    except Exception as e:
        _raise_http("chat", e)

    sources = [
        ChatSource(
            recording_id=s.recording_id,
            transcription_id=s.transcription_id,
            filename=s.filename,
            date=s.date,
            max_similarity=s.max_similarity,
            chunks=[
                SourceChunkOut(content=c.content, similarity=c.similarity, type=c.type)
                for c in s.chunks
            ],
        )
        for s in out.sources
    ]

    logger.info("POST /rag/chat (done) answer_len=%d sources=%d", len(out.answer), len(sources))

    return ChatResponse(
        answer=out.answer,
        sources=sources,
        has_context=out.has_context,
        relevant_chunks=out.relevant_chunks,
        language=out.language,
        is_follow_up=svc.is_follow_up_question(question) if history else False,
        usage=UsageOut(**out.usage.to_dict()) if out.usage else None,
    )


@router.post("/search", response_model=SearchResponse)
def post_search(
    req: SearchRequest,
    svc: VoiceQueryService = Depends(get_query_service),
) -> SearchResponse:
    query_text = (req.query or "").strip()
    if not query_text:
        raise HTTPException(status_code=400, detail="query must not be empty")

    try:
        hits = svc.search(
            query_text,
            limit=req.limit,
            min_similarity=req.min_similarity,
            source_types=req.source_types,
        )
    except Exception as e:
        _raise_http("search", e)

    return SearchResponse(query=query_text, results=_to_hits(hits))


@router.get("/similar/{transcription_id}", response_model=SimilarResponse)
def get_similar(
    transcription_id: str,
    limit: int = Query(5, ge=1, le=50),
    svc: VoiceRAGService = Depends(get_rag_service),
) -> SimilarResponse:
    logger.info("GET /rag/similar/%s limit=%d", transcription_id, limit)
    try:
        hits = svc.find_similar_recordings(transcription_id, limit=limit)
    except Exception as e:
        _raise_http("similar", e)

    return SimilarResponse(transcription_id=transcription_id, results=_to_hits(hits))


@router.post("/embed-all", response_model=EmbedAllResponse)
def post_embed_all(
    svc: VoiceRAGService = Depends(get_rag_service),
) -> EmbedAllResponse:
    if not settings.ALLOW_HTTP_BACKFILL:
        raise HTTPException(status_code=403, detail="HTTP backfill is disabled; use scripts/embed_all.py")

    logger.info("POST /rag/embed-all (start)")
    try:
        result = svc.embed_all()
    except Exception as e:
        _raise_http("embed-all", e)

    logger.info("POST /rag/embed-all (done)")
    return EmbedAllResponse(
        transcriptions=_to_summary(result["transcriptions"]),
        enrichments=_to_summary(result["enrichments"]),
    )


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    svc: VoiceRAGService = Depends(get_rag_service),
) -> StatsResponse:
    try:
        stats = svc.get_stats()
    except Exception as e:
        _raise_http("stats", e)

    return StatsResponse(**stats)


@router.delete("/embeddings/{source_type}/{source_id}", response_model=DeleteEmbeddingsResponse)
def delete_embeddings(
    source_type: SourceType,
    source_id: str,
    svc: VoiceRAGService = Depends(get_rag_service),
) -> DeleteEmbeddingsResponse:
    logger.info("DELETE /rag/embeddings/%s/%s", source_type.value, source_id)
    try:
        deleted = svc.delete_embeddings(source_type, source_id)
    except Exception as e:
        _raise_http("delete", e)

    return DeleteEmbeddingsResponse(source_type=source_type, source_id=source_id, deleted=deleted)
