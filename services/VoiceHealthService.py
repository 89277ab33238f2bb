# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: VoiceHealthService.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from api.schemas.health import DeepHealthResponse, SmokeTestSummary
from chat.OpenAIChat import OpenAIChat
from embedding.VoiceEmbedder import VoiceEmbedder
from utility.logging_utils import get_class_logger
from vectorstore.VoiceVectorStore import VoiceVectorStore


class VoiceHealthService:
    """
    Smoke tests for the infrastructure the RAG pipeline depends on.

    Checks:
      - vector_store (Chroma collection reachable)
      - embedding    (one real embedding call, dimension check)   [optional]
      - chat         (one tiny chat completion)                   [optional]

    Provider checks cost money, so they only run when asked for.
    Returns DeepHealthResponse for the API layer.
    """

    def __init__(
        self,
        *,
        store: VoiceVectorStore,
        embedder: VoiceEmbedder,
        chat_client: OpenAIChat,
        config_summary: Optional[Dict[str, Any]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.store = store
        self.embedder = embedder
        self.chat_client = chat_client
        self.config_summary = dict(config_summary or {})
        self.logger = logger or get_class_logger(self.__class__)

    # -------------------------------------------------------------------------
    def _check_embedding(self) -> bool:
        vec = self.embedder.embed_one("health check")
        return len(vec) == self.embedder.dimensions

    def _check_chat(self) -> bool:
        result = self.chat_client.complete(
            "You are a health check.",
            "Reply with the single word: ok",
            temperature=0.0,
            max_tokens=5,
        )
        return bool(result.text.strip())

    def _run(self, name: str, check: Callable[[], bool], results: Dict[str, bool]) -> None:
        try:
            self.logger.info("Running %s check", name)
            ok = check()
        except Exception as e:
            # a failing dependency is a health result, not an API error
            self.logger.exception("%s check raised an exception: %s", name, e)
            ok = False

        results[name] = ok
        if ok:
            self.logger.info("%s: PASS", name)
        else:
            self.logger.error("%s: FAIL", name)

    # -------------------------------------------------------------------------
    def run_all(self, run_providers: bool = False) -> Dict[str, bool]:
        self.logger.info("Starting smoke test suite (run_providers=%s)", run_providers)

        results: Dict[str, bool] = {}
        self._run("vector_store", self.store.test_connection, results)

        if run_providers:
            self._run("embedding", self._check_embedding, results)
            self._run("chat", self._check_chat, results)

        return results

    def deep_health(self, run_providers: bool = False) -> DeepHealthResponse:
        results = self.run_all(run_providers=run_providers)

        total = len(results)
        passed = sum(1 for ok in results.values() if ok)
        failed = total - passed

        self.logger.info("Smoke test summary: %d total, %d passed, %d failed", total, passed, failed)

        return DeepHealthResponse(
            status="ok" if failed == 0 else "error",
            results=results,
            summary=SmokeTestSummary(total=total, passed=passed, failed=failed),
            config=self.config_summary,
        )
