# -----------------------------------------------------------------------------
# Created: 2026-02-11
# Description: search.py
# -----------------------------------------------------------------------------
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

import settings
from api.schemas.documents import DocumentOut


class SearchRequest(BaseModel):
    query: str = Field(..., min_length=1)
    limit: int = Field(settings.SEARCH_DEFAULTS["limit"], ge=1, le=settings.MAX_RESULT_LIMIT)
    threshold: float = settings.SEARCH_DEFAULTS["threshold"]


class SearchHitOut(BaseModel):
    document: DocumentOut
    similarity: float
    distance: float


class SearchResponse(BaseModel):
    query: Optional[str] = None
    count: int
    results: List[SearchHitOut]


class FulltextRequest(BaseModel):
    query: str = Field(..., min_length=1)
    limit: int = Field(settings.SEARCH_DEFAULTS["limit"], ge=1, le=settings.MAX_RESULT_LIMIT)


class FulltextResponse(BaseModel):
    query: str
    count: int
    documents: List[DocumentOut]


class HybridRequest(BaseModel):
    lexical_query: str = Field(..., min_length=1)
    semantic_query: Optional[str] = None  # defaults to lexical_query
    limit: int = Field(settings.SEARCH_DEFAULTS["limit"], ge=1, le=settings.MAX_RESULT_LIMIT)


class HybridHitOut(BaseModel):
    document: DocumentOut
    score: float


class HybridResponse(BaseModel):
    lexical_query: str
    semantic_query: str
    count: int
    results: List[HybridHitOut]


class VectorOperationIn(BaseModel):
    handle: str = Field(..., min_length=1)
    op: Literal["add", "subtract"] = "add"
    weight: Optional[float] = 1.0


class AlgebraSearchRequest(BaseModel):
    operations: List[VectorOperationIn] = Field(..., min_length=1)
    limit: int = Field(settings.SEARCH_DEFAULTS["limit"], ge=1, le=settings.MAX_RESULT_LIMIT)
    threshold: float = settings.SEARCH_DEFAULTS["threshold"]
