# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-01-30
# Description: dependencies.py
# -----------------------------------------------------------------------------
from functools import lru_cache

from api.AppContainer import AppContainer
from services.VoiceHealthService import VoiceHealthService
from services.VoiceQueryService import VoiceQueryService
from services.VoiceRAGService import VoiceRAGService


@lru_cache
def get_app_container() -> AppContainer:
    # built on first request so importing the app needs no credentials
    return AppContainer()

def get_health_service() -> VoiceHealthService:
    # use the singleton service from the container
    return get_app_container().health_service

def get_query_service() -> VoiceQueryService:
    return get_app_container().query_service

def get_rag_service() -> VoiceRAGService:
    return get_app_container().rag_service
