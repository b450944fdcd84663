# -----------------------------------------------------------------------------
# Created: 2026-02-11
# Description: stats.py
# -----------------------------------------------------------------------------
from pydantic import BaseModel


class StatsResponse(BaseModel):
    documents: int
    embeddings: int
    named_vectors: int

    # vector index
    vector_count: int
    dimension: int
    index_backend: str
    index_initialized: bool

    # embedding usage since process start
    tokens_used: int = 0
    embedding_requests: int = 0
    estimated_cost: float = 0.0
