# -----------------------------------------------------------------------------
# Created: 2026-02-12
# Description: http_errors.py
# -----------------------------------------------------------------------------
import logging

from fastapi import HTTPException

from errors.KBErrors import HandleNotFoundError, NotInitializedError, ProviderError

logger = logging.getLogger(__name__)


def to_http_exception(route: str, e: Exception) -> HTTPException:
    """Map a service-layer exception to the HTTPException a router should raise."""
    if isinstance(e, HandleNotFoundError):
        logger.warning("%s -> 404: %s", route, e)
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, ProviderError):
        logger.error("%s -> 502: %s", route, e)
        return HTTPException(status_code=502, detail=f"Embedding provider error: {e}")
    if isinstance(e, NotInitializedError):
        logger.error("%s -> 503: %s", route, e)
        return HTTPException(status_code=503, detail=str(e))
    if isinstance(e, ValueError):
        logger.warning("%s -> 400: %s", route, e)
        return HTTPException(status_code=400, detail=str(e))
    logger.exception("%s -> 500: %s", route, e)
    return HTTPException(status_code=500, detail=f"{route} failed: {e}")
