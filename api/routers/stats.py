# -----------------------------------------------------------------------------
# Created: 2026-02-13
# Description: stats.py
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_stats_service
from api.http_errors import to_http_exception
from api.schemas.stats import StatsResponse
from services.KBStatsService import KBStatsService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/stats",
    tags=["stats"]
)


@router.get("", response_model=StatsResponse)
def get_stats(svc: KBStatsService = Depends(get_stats_service)) -> StatsResponse:
    logger.info("Getting knowledge base stats")
    try:
        return StatsResponse(**svc.get_stats())
    except Exception as e:
        raise to_http_exception("GET /stats", e)
