# -----------------------------------------------------------------------------
# Created: 2026-02-12
# Description: health.py
# -----------------------------------------------------------------------------
import logging
from fastapi import APIRouter, Depends, Query

from api.schemas.health import HealthResponse, DeepHealthResponse
from api.dependencies import get_app_container, get_health_service
from api.AppContainer import AppContainer
from api.http_errors import to_http_exception
from services.KBHealthService import KBHealthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
def health_check(container: AppContainer = Depends(get_app_container)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        message="KB Vector API running",
        index_initialized=container.index.is_initialized(),
    )


@router.get("/deep", response_model=DeepHealthResponse)
def deep_health_check(
    svc: KBHealthService = Depends(get_health_service),
    check_embeddings: bool = Query(False, description="Also call the embedding provider (uses tokens)"),
) -> DeepHealthResponse:
    logger.info("GET /health/deep called (check_embeddings=%s)", check_embeddings)
    try:
        result = svc.deep_health(check_embeddings=check_embeddings)
        logger.info("GET /health/deep completed (status=%s)", result.status)
        return result
    except Exception as e:
        raise to_http_exception("GET /health/deep", e)
