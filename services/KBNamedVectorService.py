# -----------------------------------------------------------------------------
# Created: 2026-02-10
# Description: KBNamedVectorService
# -----------------------------------------------------------------------------
import logging
from typing import List, Optional, Sequence

import numpy as np

from document.KBNamedVector import KBNamedVector
from embedding.EmbeddingProvider import EmbeddingProvider
from errors.KBErrors import DimensionMismatchError, HandleNotFoundError
from store.KBDocumentStore import KBDocumentStore
from utility.logging_utils import get_class_logger


def _clean_handle(handle: str) -> str:
    handle = (handle or "").strip()
    if not handle:
        raise ValueError("handle must not be empty")
    return handle


class KBNamedVectorService:
    """
    Named concept vectors (@handles) used as operands in vector algebra.
    Saving under an existing handle replaces it.
    """

    def __init__(
        self,
        *,
        store: KBDocumentStore,
        embedder: EmbeddingProvider,
        logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.embedder = embedder
        self.logger = logger or get_class_logger(self.__class__)

    def save_named_vector(self, handle: str, text: str, description: Optional[str] = None) -> KBNamedVector:
        """Embed `text` and store the result under `handle`."""
        handle = _clean_handle(handle)
        vector = self.embedder.embed(text)
        self.store.save_named_vector(handle, vector, description)
        self.logger.info("save_named_vector: handle='%s' dim=%d", handle, vector.shape[0])
        return KBNamedVector(handle=handle, vector=vector, description=description)

    def save_vector(
        self,
        handle: str,
        vector: Sequence[float] | np.ndarray,
        description: Optional[str] = None,
    ) -> KBNamedVector:
        handle = _clean_handle(handle)
        v = np.asarray(vector, dtype=np.float32).reshape(-1)
        expected = self.embedder.get_dimension()
        if v.shape[0] != expected:
            raise DimensionMismatchError(expected, v.shape[0])
        self.store.save_named_vector(handle, v, description)
        self.logger.info("save_vector: handle='%s' dim=%d", handle, v.shape[0])
        return KBNamedVector(handle=handle, vector=v, description=description)

    def get_named_vector(self, handle: str) -> KBNamedVector:
        handle = _clean_handle(handle)
        named = self.store.get_named_vector(handle)
        if named is None:
            raise HandleNotFoundError(handle)
        return named

    def list_named_vectors(self) -> List[KBNamedVector]:
        return self.store.get_all_named_vectors()

    def delete_named_vector(self, handle: str) -> bool:
        handle = _clean_handle(handle)
        deleted = self.store.delete_named_vector(handle)
        self.logger.info("delete_named_vector: handle='%s' deleted=%s", handle, deleted)
        return deleted
