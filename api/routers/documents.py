# -----------------------------------------------------------------------------
# Created: 2026-02-12
# Description: documents.py
# -----------------------------------------------------------------------------
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.AppContainer import AppContainer
from api.dependencies import get_app_container, get_ingest_service
from api.http_errors import to_http_exception
from api.schemas.documents import (
    AddDocumentRequest,
    AddDocumentResponse,
    AddDocumentsRequest,
    AddDocumentsResponse,
    DeleteDocumentResponse,
    DocumentOut,
    ListDocumentsResponse,
    MarkdownImportRequest,
    MarkdownImportResponse,
)
from services.KBIngestService import KBIngestService, NewDocument

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("", response_model=AddDocumentResponse)
def post_document(
    req: AddDocumentRequest,
    svc: KBIngestService = Depends(get_ingest_service),
) -> AddDocumentResponse:
    logger.info("POST /documents (start) source='%s' chars=%d", req.source, len(req.content))
    if not req.content.strip():
        logger.warning("POST /documents -> 400 (content empty)")
        raise HTTPException(status_code=400, detail="content must not be empty")
    try:
        doc_id = svc.add_document(req.content, req.metadata, req.source)
    except Exception as e:
        raise to_http_exception("POST /documents", e)
    logger.info("POST /documents (done) id=%d", doc_id)
    return AddDocumentResponse(id=doc_id)


@router.post("/batch", response_model=AddDocumentsResponse)
def post_documents_batch(
    req: AddDocumentsRequest,
    svc: KBIngestService = Depends(get_ingest_service),
) -> AddDocumentsResponse:
    logger.info("POST /documents/batch (start) count=%d", len(req.documents))
    try:
        ids = svc.add_documents(
            [NewDocument(content=d.content, metadata=d.metadata, source=d.source) for d in req.documents]
        )
    except Exception as e:
        raise to_http_exception("POST /documents/batch", e)
    logger.info("POST /documents/batch (done) count=%d", len(ids))
    return AddDocumentsResponse(count=len(ids), ids=ids)


@router.post("/markdown", response_model=MarkdownImportResponse)
def post_markdown(
    req: MarkdownImportRequest,
    svc: KBIngestService = Depends(get_ingest_service),
) -> MarkdownImportResponse:
    logger.info("POST /documents/markdown (start) source='%s' chars=%d", req.source, len(req.text))
    try:
        ids = svc.ingest_markdown(
            req.source,
            req.text,
            chunk_size=req.chunk_size,
            overlap=req.overlap,
            extract_frontmatter=req.extract_frontmatter,
            strip_formatting=req.strip_formatting,
        )
    except Exception as e:
        raise to_http_exception("POST /documents/markdown", e)
    logger.info("POST /documents/markdown (done) source='%s' chunks=%d", req.source, len(ids))
    return MarkdownImportResponse(source=req.source, count=len(ids), ids=ids)


@router.get("", response_model=ListDocumentsResponse)
def get_documents(
    limit: Optional[int] = Query(None, ge=1),
    container: AppContainer = Depends(get_app_container),
) -> ListDocumentsResponse:
    logger.info("GET /documents (start) limit=%s", limit)
    try:
        docs = container.store.get_all_documents(limit)
    except Exception as e:
        raise to_http_exception("GET /documents", e)
    resp = ListDocumentsResponse(count=len(docs), documents=[DocumentOut.from_document(d) for d in docs])
    logger.info("GET /documents (done) count=%d", resp.count)
    return resp


@router.get("/{doc_id}", response_model=DocumentOut)
def get_document(
    doc_id: int,
    container: AppContainer = Depends(get_app_container),
) -> DocumentOut:
    logger.info("GET /documents/{doc_id} (start) doc_id=%d", doc_id)
    try:
        doc = container.store.get_document(doc_id)
    except Exception as e:
        raise to_http_exception("GET /documents/{doc_id}", e)
    if doc is None:
        logger.warning("GET /documents/{doc_id} -> 404 doc_id=%d", doc_id)
        raise HTTPException(status_code=404, detail=f"No document found with id={doc_id}")
    return DocumentOut.from_document(doc)


@router.delete("/{doc_id}", response_model=DeleteDocumentResponse)
def delete_document(
    doc_id: int,
    svc: KBIngestService = Depends(get_ingest_service),
) -> DeleteDocumentResponse:
    logger.info("DELETE /documents/{doc_id} (start) doc_id=%d", doc_id)
    try:
        deleted = svc.delete_document(doc_id)
    except Exception as e:
        raise to_http_exception("DELETE /documents/{doc_id}", e)
    if not deleted:
        logger.warning("DELETE /documents/{doc_id} -> 404 doc_id=%d", doc_id)
        raise HTTPException(status_code=404, detail=f"No document found with id={doc_id}")
    logger.info("DELETE /documents/{doc_id} (done) doc_id=%d", doc_id)
    return DeleteDocumentResponse(id=doc_id, deleted=True)
