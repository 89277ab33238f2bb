# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-28
# Description: VoiceRAGService.py
# -----------------------------------------------------------------------------
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from chat import prompts
from chat.OpenAIChat import OpenAIChat, TokenUsage
from chunking.LangDetectDetector import LangDetectDetector
from config.RAGConfig import RAGConfig
from context.ContextBuilder import ContextBuilder
from context.SourceAggregator import GroupedSource, SourceAggregator
from embedding.EmbeddingRecord import EmbeddingRecord
from services.VoiceIngestService import VoiceIngestService
from services.VoiceQueryService import VoiceQueryService
from sources.SourceCatalog import SourceCatalog
from sources.SourceType import SourceType
from utility.errors import InvalidInputError, ProviderError, SourceNotFoundError
from utility.logging_utils import get_class_logger
from vectorstore.RetrievalHit import RetrievalHit
from vectorstore.VoiceVectorStore import VoiceVectorStore

FOLLOW_UP_MARKERS = (
    # de
    "das", "dies", "diese", "dieser", "dieses", "davon", "dazu", "darüber",
    "mehr", "weitere", "weiteren", "genauer", "detail", "details",
    "was noch", "und", "aber",
    # en
    "this", "that", "these", "those", "it", "them",
    "more", "also", "and", "what about", "and what about", "tell me more",
)

_FOLLOW_UP_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(m) for m in sorted(FOLLOW_UP_MARKERS, key=len, reverse=True)) + r")\b"
)


@dataclass
class RAGAnswer:
    answer: str
    sources: List[GroupedSource]
    has_context: bool
    language: str
    usage: Optional[TokenUsage] = None
    relevant_chunks: int = 0


class OutcomeStatus(str, Enum):
    EMBEDDED = "embedded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class EmbedOutcome:
    """Result of backfilling one source."""
    source_type: SourceType
    source_id: str
    status: OutcomeStatus
    chunks: int = 0
    error: Optional[str] = None


@dataclass
class BackfillSummary:
    embedded: int = 0
    skipped: int = 0
    errors: int = 0
    total: int = 0
    failures: List[EmbedOutcome] = field(default_factory=list)

    @classmethod
    def from_outcomes(cls, outcomes: Sequence[EmbedOutcome]) -> "BackfillSummary":
        summary = cls(total=len(outcomes))
        for outcome in outcomes:
            if outcome.status is OutcomeStatus.EMBEDDED:
                summary.embedded += 1
            elif outcome.status is OutcomeStatus.SKIPPED:
                summary.skipped += 1
            else:
                summary.errors += 1
                summary.failures.append(outcome)
        return summary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "embedded": self.embedded,
            "skipped": self.skipped,
            "errors": self.errors,
            "total": self.total,
            "failures": [
                {"source_id": f.source_id, "error": f.error} for f in self.failures
            ],
        }


class VoiceRAGService:
    """
    Question answering over the recordings corpus:
        - retrieves relevant chunks using VoiceQueryService
        - builds a grounded prompt (context + question)
        - calls OpenAIChat with the bounded conversation history
        - returns answer + sources grouped by recording

    Also owns indexing entry points (single source and bulk backfill).
    Stateless between calls.
    """

    def __init__(
        self,
        *,
        query_service: VoiceQueryService,
        chat_client: OpenAIChat,
        ingest_service: VoiceIngestService,
        store: VoiceVectorStore,
        catalog: SourceCatalog,
        rag_cfg: RAGConfig | None = None,
        context_builder: ContextBuilder | None = None,
        source_aggregator: SourceAggregator | None = None,
        lang_detector: LangDetectDetector | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.query_service = query_service
        self.chat_client = chat_client
        self.ingest_service = ingest_service
        self.store = store
        self.catalog = catalog
        self.rag_cfg = rag_cfg or RAGConfig()
        self.context_builder = context_builder or ContextBuilder()
        self.source_aggregator = source_aggregator or SourceAggregator(
            preview_chars=self.rag_cfg.preview_chars
        )
        self.lang_detector = lang_detector or LangDetectDetector()
        self.logger = logger or get_class_logger(self.__class__)

        self.logger.info(
            "VoiceRAGService initialised (top_k=%d min_similarity=%.2f history_limit=%d language=%s)",
            self.rag_cfg.top_k_default,
            self.rag_cfg.min_similarity_default,
            self.rag_cfg.history_limit,
            self.rag_cfg.default_language,
        )

    # ------------------------------------------------------------------
    # Question answering
    # ------------------------------------------------------------------

    def resolve_language(self, question: str, language: Optional[str]) -> str:
        lang = (language or self.rag_cfg.default_language).strip().lower()
        if lang == "auto":
            return self.lang_detector.answer_language(question, self.rag_cfg.default_language)
        if lang not in ("de", "en"):
            raise InvalidInputError(f"language must be 'de', 'en' or 'auto', got {language!r}")
        return lang

    def bound_history(self, history: Optional[Sequence[Dict[str, Any]]]) -> List[Dict[str, Any]]:
        """Most recent `history_limit` messages only."""
        limit = self.rag_cfg.history_limit
        if not history or limit == 0:
            return []
        return list(history)[-limit:]

    def answer_question(
        self,
        question: str,
        *,
        top_k: Optional[int] = None,
        min_similarity: Optional[float] = None,
        source_types: Optional[Sequence[SourceType | str]] = None,
        language: Optional[str] = None,
        history: Optional[Sequence[Dict[str, Any]]] = None,
    ) -> RAGAnswer:
        q = (question or "").strip()
        if not q:
            raise InvalidInputError("question must not be empty")

        lang = self.resolve_language(q, language)
        top_k = self.rag_cfg.top_k_default if top_k is None else top_k
        min_similarity = self.rag_cfg.min_similarity_default if min_similarity is None else min_similarity

        self.logger.info(
            "answer_question: question=%r top_k=%d min_similarity=%.2f language=%s history=%d (start)",
            q[:120],
            top_k,
            min_similarity,
            lang,
            len(history or []),
        )

        # 1) Retrieve
        hits = self.query_service.search(
            q,
            limit=top_k,
            min_similarity=min_similarity,
            source_types=source_types,
        )

        # 2) Nothing relevant: answer without calling the model
        if not hits:
            self.logger.info("answer_question: no relevant context (done)")
            return RAGAnswer(
                answer=prompts.no_context_answer(lang),
                sources=[],
                has_context=False,
                language=lang,
            )

        # 3) Grounded prompt
        context = self.context_builder.build_context(hits, lang)

        # 4) Generate
        completion = self.chat_client.complete(
            prompts.system_prompt(lang),
            prompts.user_prompt(q, context, lang),
            history=self.bound_history(history),
            temperature=self.rag_cfg.temperature,
            max_tokens=self.rag_cfg.max_tokens,
        )

        # 5) Cite recordings, not chunks
        sources = self.source_aggregator.format_sources(hits)

        self.logger.info(
            "answer_question: hits=%d sources=%d answer_chars=%d (done)",
            len(hits),
            len(sources),
            len(completion.text),
        )

        return RAGAnswer(
            answer=completion.text,
            sources=sources,
            has_context=True,
            language=lang,
            usage=completion.usage,
            relevant_chunks=len(hits),
        )

    def chat(
        self,
        question: str,
        history: Optional[Sequence[Dict[str, Any]]] = None,
        **options: Any,
    ) -> RAGAnswer:
        """Multi-turn: prior turns are forwarded to the model, nothing is kept here."""
        return self.answer_question(question, history=history, **options)

    @staticmethod
    def is_follow_up_question(text: str) -> bool:
        """Cheap lexical hint for UIs. Never used to change retrieval."""
        if not text:
            return False
        return _FOLLOW_UP_RE.search(text.lower()) is not None

    def find_similar_recordings(self, transcription_id: str, limit: int = 5) -> List[RetrievalHit]:
        transcription = self.catalog.get_transcription(transcription_id)
        if transcription is None:
            raise SourceNotFoundError(f"Transcription not found: {transcription_id}")

        # over-fetch so dropping the transcription's own chunks still leaves `limit`
        hits = self.query_service.search(
            transcription.text,
            limit=limit + 5,
            min_similarity=self.rag_cfg.similar_min_similarity,
        )
        return [h for h in hits if h.transcription_id != transcription_id][:limit]

    # ------------------------------------------------------------------
    # Indexing
    # ------------------------------------------------------------------

    def embed_transcription(self, transcription_id: str, text: str) -> List[EmbeddingRecord]:
        return self.ingest_service.index_source(SourceType.TRANSCRIPTION, transcription_id, text)

    def embed_enrichment(self, enrichment_id: str, content: str) -> List[EmbeddingRecord]:
        return self.ingest_service.index_source(SourceType.ENRICHMENT, enrichment_id, content)

    def delete_embeddings(self, source_type: SourceType | str, source_id: str) -> int:
        return self.store.delete_by_source(SourceType.parse(source_type), source_id)

    def get_stats(self) -> Dict[str, Any]:
        return self.store.stats()

    def _backfill_one(self, source_type: SourceType, source_id: str, text: str) -> EmbedOutcome:
        if self.store.has_embeddings(source_type, source_id):
            return EmbedOutcome(source_type, source_id, OutcomeStatus.SKIPPED)

        if not text or not text.strip():
            self.logger.warning("Backfill: %s:%s has no text, skipping", source_type.value, source_id)
            return EmbedOutcome(source_type, source_id, OutcomeStatus.SKIPPED)

        try:
            records = self.ingest_service.index_source(source_type, source_id, text)
        except (ProviderError, InvalidInputError) as e:
            self.logger.error(
                "Backfill: error embedding %s:%s: %s", source_type.value, source_id, e, exc_info=True
            )
            return EmbedOutcome(source_type, source_id, OutcomeStatus.FAILED, error=str(e))

        return EmbedOutcome(source_type, source_id, OutcomeStatus.EMBEDDED, chunks=len(records))

    def _backfill(self, source_type: SourceType, items: Iterable[Tuple[str, str]]) -> BackfillSummary:
        outcomes = [self._backfill_one(source_type, source_id, text) for source_id, text in items]
        summary = BackfillSummary.from_outcomes(outcomes)
        self.logger.info(
            "Backfill %s complete: embedded=%d skipped=%d errors=%d total=%d",
            source_type.value,
            summary.embedded,
            summary.skipped,
            summary.errors,
            summary.total,
        )
        return summary

    def embed_all(self) -> Dict[str, BackfillSummary]:
        """
        Embed every transcription, then every enrichment, that has no
        embeddings yet. Sequential. Provider failures are counted per source;
        storage failures abort the run.
        """
        self.logger.info("Starting full embedding backfill...")

        transcriptions = self.catalog.list_transcriptions()
        transcription_stats = self._backfill(
            SourceType.TRANSCRIPTION, ((t.id, t.text) for t in transcriptions)
        )

        enrichments = self.catalog.list_enrichments()
        enrichment_stats = self._backfill(
            SourceType.ENRICHMENT, ((e.id, e.content) for e in enrichments)
        )

        return {
            "transcriptions": transcription_stats,
            "enrichments": enrichment_stats,
        }
