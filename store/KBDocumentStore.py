# -----------------------------------------------------------------------------
# Created: 2026-02-08
# Description: KBDocumentStore
# -----------------------------------------------------------------------------

from typing import Protocol, Dict, Any, List, Optional, runtime_checkable

import numpy as np

from document.KBDocument import KBDocument
from document.KBNamedVector import KBNamedVector


@runtime_checkable
class KBDocumentStore(Protocol):
    def insert_document(
            self,
            content: str,
            metadata: Optional[Dict[str, Any]] = None,
            source: Optional[str] = None,
    ) -> int:
        ...

    def get_document(self, doc_id: int) -> Optional[KBDocument]:
        ...

    def get_all_documents(self, limit: Optional[int] = None) -> List[KBDocument]:
        ...

    def delete_document(self, doc_id: int) -> bool:
        ...

    def count_documents(self) -> int:
        ...

    def fulltext_search(self, query: str, limit: int = 10) -> List[KBDocument]:
        ...

    def insert_embedding(self, doc_id: int, vector: np.ndarray) -> None:
        ...

    def get_embedding(self, doc_id: int) -> Optional[np.ndarray]:
        ...

    def save_named_vector(self, handle: str, vector: np.ndarray, description: Optional[str] = None) -> None:
        ...

    def get_named_vector(self, handle: str) -> Optional[KBNamedVector]:
        ...

    def get_all_named_vectors(self) -> List[KBNamedVector]:
        ...

    def delete_named_vector(self, handle: str) -> bool:
        ...

    def get_stats(self) -> Dict[str, int]:
        ...

    def test_connection(self) -> bool:
        ...

    def close(self) -> None:
        ...
