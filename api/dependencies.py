# -----------------------------------------------------------------------------
# Created: 2026-02-12
# Description: dependencies.py
# -----------------------------------------------------------------------------
from functools import lru_cache

from fastapi import Depends

from api.AppContainer import AppContainer
from services.KBHealthService import KBHealthService
from services.KBIngestService import KBIngestService
from services.KBNamedVectorService import KBNamedVectorService
from services.KBQueryService import KBQueryService
from services.KBStatsService import KBStatsService


@lru_cache
def get_app_container() -> AppContainer:
    # built on first request so importing the app needs no credentials
    return AppContainer()


def get_ingest_service(container: AppContainer = Depends(get_app_container)) -> KBIngestService:
    return container.ingest_service


def get_query_service(container: AppContainer = Depends(get_app_container)) -> KBQueryService:
    return container.query_service


def get_named_vector_service(container: AppContainer = Depends(get_app_container)) -> KBNamedVectorService:
    return container.named_vector_service


def get_stats_service(container: AppContainer = Depends(get_app_container)) -> KBStatsService:
    return container.stats_service


def get_health_service(container: AppContainer = Depends(get_app_container)) -> KBHealthService:
    return container.health_service
