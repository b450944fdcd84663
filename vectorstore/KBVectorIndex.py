# -----------------------------------------------------------------------------
# Created: 2026-02-05
# Description: KBVectorIndex
# -----------------------------------------------------------------------------

from typing import Protocol, List, Sequence, runtime_checkable

from search.KBSearchTypes import SearchHit


@runtime_checkable
class KBVectorIndex(Protocol):
    """
    Identifier -> fixed-dimension vector mapping with approximate k-NN
    search under cosine distance. add_vector(), search() and save() raise
    NotInitializedError until initialize() has run.
    """

    def initialize(self, capacity: int = 100_000) -> None:
        ...

    def add_vector(self, doc_id: int, vector: Sequence[float]) -> None:
        ...

    def search(self, query_vector: Sequence[float], k: int = 10) -> List[SearchHit]:
        ...

    def save(self) -> None:
        ...

    def get_count(self) -> int:
        ...

    def get_dimension(self) -> int:
        ...

    def is_initialized(self) -> bool:
        ...

    def close(self) -> None:
        ...
