# -----------------------------------------------------------------------------
# Created: 2026-02-11
# Description: documents.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from document.KBDocument import KBDocument


class DocumentOut(BaseModel):
    id: int
    content: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    source: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_document(cls, doc: KBDocument) -> "DocumentOut":
        return cls(
            id=doc.id,
            content=doc.content,
            metadata=doc.metadata,
            source=doc.source,
            created_at=doc.created_at,
            updated_at=doc.updated_at,
        )


class AddDocumentRequest(BaseModel):
    content: str = Field(..., min_length=1)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    source: Optional[str] = None


class AddDocumentResponse(BaseModel):
    id: int


class AddDocumentsRequest(BaseModel):
    documents: List[AddDocumentRequest] = Field(..., min_length=1)


class AddDocumentsResponse(BaseModel):
    count: int
    ids: List[int]


class MarkdownImportRequest(BaseModel):
    source: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    chunk_size: Optional[int] = Field(None, ge=1)
    overlap: Optional[int] = Field(None, ge=0)
    extract_frontmatter: bool = True
    strip_formatting: bool = False


class MarkdownImportResponse(BaseModel):
    source: str
    count: int
    ids: List[int]


class ListDocumentsResponse(BaseModel):
    count: int
    documents: List[DocumentOut]


class DeleteDocumentResponse(BaseModel):
    id: int
    deleted: bool
