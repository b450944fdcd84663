# -----------------------------------------------------------------------------
# Created: 2026-02-13
# Description: search router
# -----------------------------------------------------------------------------
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

import settings
from algebra.VectorAlgebra import VectorOperation
from api.dependencies import get_query_service
from api.http_errors import to_http_exception
from api.schemas.documents import DocumentOut
from api.schemas.search import (
    AlgebraSearchRequest,
    FulltextRequest,
    FulltextResponse,
    HybridHitOut,
    HybridRequest,
    HybridResponse,
    SearchHitOut,
    SearchRequest,
    SearchResponse,
)
from search.KBSearchTypes import KBSearchResult
from services.KBQueryService import KBQueryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


def _to_hits(results: List[KBSearchResult]) -> List[SearchHitOut]:
    return [
        SearchHitOut(
            document=DocumentOut.from_document(r.document),
            similarity=r.similarity,
            distance=r.distance,
        )
        for r in results
    ]


@router.post("", response_model=SearchResponse)
def post_search(
    req: SearchRequest,
    svc: KBQueryService = Depends(get_query_service),
) -> SearchResponse:
    query = req.query.strip()
    if not query:
        raise HTTPException(status_code=400, detail="query must not be empty")

    logger.info("POST /search (start) query=%r limit=%d", query, req.limit)
    try:
        results = svc.search(query, limit=req.limit, threshold=req.threshold)
    except Exception as e:
        raise to_http_exception("POST /search", e)

    logger.info("POST /search (done) results=%d", len(results))
    return SearchResponse(query=query, count=len(results), results=_to_hits(results))


@router.post("/fulltext", response_model=FulltextResponse)
def post_fulltext(
    req: FulltextRequest,
    svc: KBQueryService = Depends(get_query_service),
) -> FulltextResponse:
    query = req.query.strip()
    if not query:
        raise HTTPException(status_code=400, detail="query must not be empty")

    logger.info("POST /search/fulltext (start) query=%r limit=%d", query, req.limit)
    try:
        docs = svc.fulltext_search(query, limit=req.limit)
    except Exception as e:
        raise to_http_exception("POST /search/fulltext", e)

    return FulltextResponse(
        query=query,
        count=len(docs),
        documents=[DocumentOut.from_document(d) for d in docs],
    )


@router.post("/hybrid", response_model=HybridResponse)
def post_hybrid(
    req: HybridRequest,
    svc: KBQueryService = Depends(get_query_service),
) -> HybridResponse:
    lexical = req.lexical_query.strip()
    semantic = (req.semantic_query or lexical).strip()
    if not lexical or not semantic:
        raise HTTPException(status_code=400, detail="queries must not be empty")

    logger.info("POST /search/hybrid (start) lexical=%r semantic=%r limit=%d", lexical, semantic, req.limit)
    try:
        results = svc.hybrid_search(lexical, semantic, limit=req.limit)
    except Exception as e:
        raise to_http_exception("POST /search/hybrid", e)

    logger.info("POST /search/hybrid (done) results=%d", len(results))
    return HybridResponse(
        lexical_query=lexical,
        semantic_query=semantic,
        count=len(results),
        results=[HybridHitOut(document=DocumentOut.from_document(r.document), score=r.score) for r in results],
    )


@router.get("/vector/{handle}", response_model=SearchResponse)
def get_search_by_handle(
    handle: str,
    limit: int = Query(settings.SEARCH_DEFAULTS["limit"], ge=1, le=settings.MAX_RESULT_LIMIT),
    threshold: float = Query(settings.SEARCH_DEFAULTS["threshold"]),
    svc: KBQueryService = Depends(get_query_service),
) -> SearchResponse:
    logger.info("GET /search/vector/{handle} (start) handle='%s' limit=%d", handle, limit)
    try:
        results = svc.search_with_vector_algebra(
            [VectorOperation(handle=handle, op="add")],
            limit=limit,
            threshold=threshold,
        )
    except Exception as e:
        raise to_http_exception("GET /search/vector/{handle}", e)

    return SearchResponse(query=f"@{handle}", count=len(results), results=_to_hits(results))


@router.post("/algebra", response_model=SearchResponse)
def post_algebra_search(
    req: AlgebraSearchRequest,
    svc: KBQueryService = Depends(get_query_service),
) -> SearchResponse:
    ops = [VectorOperation(handle=o.handle, op=o.op, weight=o.weight) for o in req.operations]
    expression = " ".join(f"{'+' if o.op == 'add' else '-'}@{o.handle}" for o in ops)
    logger.info("POST /search/algebra (start) expression=%r limit=%d", expression, req.limit)
    try:
        results = svc.search_with_vector_algebra(ops, limit=req.limit, threshold=req.threshold)
    except Exception as e:
        raise to_http_exception("POST /search/algebra", e)

    logger.info("POST /search/algebra (done) results=%d", len(results))
    return SearchResponse(query=expression, count=len(results), results=_to_hits(results))
