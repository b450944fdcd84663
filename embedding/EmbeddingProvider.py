# -----------------------------------------------------------------------------
# Created: 2026-02-07
# Description: EmbeddingProvider
# -----------------------------------------------------------------------------

from typing import Protocol, List, Sequence, runtime_checkable

import numpy as np


@runtime_checkable
class EmbeddingProvider(Protocol):
    def embed(self, text: str) -> np.ndarray:
        ...

    def embed_batch(self, texts: Sequence[str]) -> List[np.ndarray]:
        ...

    def get_dimension(self) -> int:
        ...

    def test_connection(self) -> bool:
        ...
