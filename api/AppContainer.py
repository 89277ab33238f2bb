# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-01-30
# Description: AppContainer.py
# -----------------------------------------------------------------------------
import settings
from chat.OpenAIChat import OpenAIChat
from config.Config import Config
from config.RAGConfig import RAGConfig

from chunking.LangDetectDetector import LangDetectDetector
from context.ContextBuilder import ContextBuilder
from context.SourceAggregator import SourceAggregator
from embedding.VoiceEmbedder import VoiceEmbedder
from services.VoiceHealthService import VoiceHealthService
from services.VoiceIngestService import VoiceIngestService
from services.VoiceQueryService import VoiceQueryService
from services.VoiceRAGService import VoiceRAGService
from sources.InMemorySourceCatalog import InMemorySourceCatalog
from utility.logging_utils import get_class_logger
from vectorstore.ChromaVoiceVectorStore import ChromaVoiceVectorStore


class AppContainer:
    """
    Owns heavy object instantiation and application wiring.
    Singleton instances are provided via FastAPI dependencies.
    """

    def __init__(self) -> None:
        self.logger = get_class_logger(self.__class__)

        # Configuration
        self.cfg = Config.from_env()
        self.rag_cfg = RAGConfig.from_settings()
        self.logger.info("Config: %s", self.cfg.summary())

        # Upstream sources (read-only)
        if settings.SOURCE_CATALOG_PATH:
            self.catalog = InMemorySourceCatalog.from_json(settings.SOURCE_CATALOG_PATH)
        else:
            self.logger.warning("VOICE_SOURCE_CATALOG not set; starting with an empty catalog")
            self.catalog = InMemorySourceCatalog()

        # Core infrastructure
        self.embedder = VoiceEmbedder(cfg=self.cfg)
        self.store = ChromaVoiceVectorStore(
            catalog=self.catalog,
            cfg=self.cfg,
            collection_name=self.rag_cfg.collection_name,
        )
        self.openai_chat = OpenAIChat(cfg=self.cfg)

        # Indexing pipeline
        self.chunker = VoiceIngestService.build_default_chunker(self.rag_cfg)
        self.ingest_service = VoiceIngestService(
            store=self.store,
            embedder=self.embedder,
            chunker=self.chunker,
        )

        # Retrieval
        self.query_service = VoiceQueryService(
            store=self.store,
            embedder=self.embedder,
        )

        # Return a singleton VoiceRAGService instance
        self.rag_service = VoiceRAGService(
            query_service=self.query_service,
            chat_client=self.openai_chat,
            ingest_service=self.ingest_service,
            store=self.store,
            catalog=self.catalog,
            rag_cfg=self.rag_cfg,
            context_builder=ContextBuilder(),
            source_aggregator=SourceAggregator(preview_chars=self.rag_cfg.preview_chars),
            lang_detector=LangDetectDetector(),
        )

        # Return a singleton VoiceHealthService instance
        self.health_service = VoiceHealthService(
            store=self.store,
            embedder=self.embedder,
            chat_client=self.openai_chat,
            config_summary=self.cfg.summary(),
        )
