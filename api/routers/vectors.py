# -----------------------------------------------------------------------------
# Created: 2026-02-13
# Description: vectors.py
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_named_vector_service
from api.http_errors import to_http_exception
from api.schemas.vectors import (
    DeleteNamedVectorResponse,
    ListNamedVectorsResponse,
    NamedVectorInfo,
    NamedVectorOut,
    SaveNamedVectorRequest,
)
from services.KBNamedVectorService import KBNamedVectorService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vectors", tags=["vectors"])


@router.post("", response_model=NamedVectorInfo)
def post_named_vector(
    req: SaveNamedVectorRequest,
    svc: KBNamedVectorService = Depends(get_named_vector_service),
) -> NamedVectorInfo:
    logger.info("POST /vectors (start) handle='%s'", req.handle)
    if (req.text is None) == (req.vector is None):
        logger.warning("POST /vectors -> 400 (need exactly one of text/vector) handle='%s'", req.handle)
        raise HTTPException(status_code=400, detail="provide exactly one of 'text' or 'vector'")

    try:
        if req.text is not None:
            nv = svc.save_named_vector(req.handle, req.text, req.description)
        else:
            nv = svc.save_vector(req.handle, req.vector, req.description)
    except Exception as e:
        raise to_http_exception("POST /vectors", e)

    logger.info("POST /vectors (done) handle='%s' dim=%d", nv.handle, nv.dimension)
    return NamedVectorInfo.from_named_vector(nv)


@router.get("", response_model=ListNamedVectorsResponse)
def get_named_vectors(
    svc: KBNamedVectorService = Depends(get_named_vector_service),
) -> ListNamedVectorsResponse:
    try:
        vectors = svc.list_named_vectors()
    except Exception as e:
        raise to_http_exception("GET /vectors", e)
    return ListNamedVectorsResponse(
        count=len(vectors),
        vectors=[NamedVectorInfo.from_named_vector(v) for v in vectors],
    )


@router.get("/{handle}", response_model=NamedVectorOut)
def get_named_vector(
    handle: str,
    svc: KBNamedVectorService = Depends(get_named_vector_service),
) -> NamedVectorOut:
    try:
        nv = svc.get_named_vector(handle)
    except Exception as e:
        raise to_http_exception("GET /vectors/{handle}", e)
    return NamedVectorOut.from_named_vector(nv)


@router.delete("/{handle}", response_model=DeleteNamedVectorResponse)
def delete_named_vector(
    handle: str,
    svc: KBNamedVectorService = Depends(get_named_vector_service),
) -> DeleteNamedVectorResponse:
    logger.info("DELETE /vectors/{handle} (start) handle='%s'", handle)
    try:
        deleted = svc.delete_named_vector(handle)
    except Exception as e:
        raise to_http_exception("DELETE /vectors/{handle}", e)
    if not deleted:
        logger.warning("DELETE /vectors/{handle} -> 404 handle='%s'", handle)
        raise HTTPException(status_code=404, detail=f"Vector handle not found: {handle}")
    return DeleteNamedVectorResponse(handle=handle, deleted=True)
