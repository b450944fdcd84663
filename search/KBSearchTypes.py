# -----------------------------------------------------------------------------
# Created: 2026-02-04
# Description: KBSearchTypes
# -----------------------------------------------------------------------------
from dataclasses import dataclass

from document.KBDocument import KBDocument


@dataclass(frozen=True)
class SearchHit:
    """Raw index hit; distance is cosine distance (0 = identical)."""

    id: int
    distance: float

    @property
    def similarity(self) -> float:
        return 1.0 - self.distance


@dataclass(frozen=True)
class FusedResult:
    id: int
    score: float


@dataclass
class KBSearchResult:
    document: KBDocument
    similarity: float
    distance: float


@dataclass
class HybridResult:
    document: KBDocument
    score: float
