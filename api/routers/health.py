# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-02-02
# Description: health.py
# -----------------------------------------------------------------------------
import logging
from fastapi import APIRouter, Depends, Query

from api.schemas.health import HealthResponse, DeepHealthResponse
from api.dependencies import get_health_service
from services.VoiceHealthService import VoiceHealthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    return HealthResponse(status="ok", message="Voice RAG API running")


@router.get("/deep", response_model=DeepHealthResponse)
def deep_health_check(
    svc: VoiceHealthService = Depends(get_health_service),
    run_providers: bool = Query(False, description="Also call the embedding and chat providers"),
) -> DeepHealthResponse:
    logger.info("GET /health/deep called (run_providers=%s)", run_providers)
    result = svc.deep_health(run_providers=run_providers)
    logger.info("GET /health/deep completed: status=%s", result.status)
    return result
