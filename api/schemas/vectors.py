# -----------------------------------------------------------------------------
# Created: 2026-02-11
# Description: vectors.py
# -----------------------------------------------------------------------------
from typing import List, Optional

from pydantic import BaseModel, Field

from document.KBNamedVector import KBNamedVector


class SaveNamedVectorRequest(BaseModel):
    """Provide either `text` (embedded server-side) or a raw `vector`, not both."""
    handle: str = Field(..., min_length=1)
    text: Optional[str] = None
    vector: Optional[List[float]] = None
    description: Optional[str] = None


class NamedVectorInfo(BaseModel):
    handle: str
    dimension: int
    description: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_named_vector(cls, nv: KBNamedVector) -> "NamedVectorInfo":
        return cls(
            handle=nv.handle,
            dimension=nv.dimension,
            description=nv.description,
            created_at=nv.created_at,
        )


class NamedVectorOut(NamedVectorInfo):
    vector: List[float]

    @classmethod
    def from_named_vector(cls, nv: KBNamedVector) -> "NamedVectorOut":
        return cls(
            handle=nv.handle,
            dimension=nv.dimension,
            description=nv.description,
            created_at=nv.created_at,
            vector=[float(x) for x in nv.vector],
        )


class ListNamedVectorsResponse(BaseModel):
    count: int
    vectors: List[NamedVectorInfo]


class DeleteNamedVectorResponse(BaseModel):
    handle: str
    deleted: bool
