# -----------------------------------------------------------------------------
# Created: 2026-02-06
# Description: ChromaVectorIndex
# -----------------------------------------------------------------------------
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

import chromadb
import numpy as np
from chromadb import ClientAPI
from chromadb.api.models import Collection

from errors.KBErrors import (
    DimensionMismatchError,
    IndexPersistenceError,
    NotInitializedError,
    VectorIndexError,
)
from search.KBSearchTypes import SearchHit
from utility.logging_utils import get_class_logger
from vectorstore.KBVectorIndex import KBVectorIndex


class ChromaVectorIndex(KBVectorIndex):
    """
    Vector index stored in a local chromadb collection (cosine space).

    Chroma writes through on every upsert, so save() only checks that the
    collection is still reachable.
    """

    def __init__(
        self,
        path: str,
        dimension: int = 1536,
        *,
        collection_name: str = "kb_vectors",
        logger: logging.Logger | None = None,
    ):
        if dimension <= 0:
            raise ValueError(f"dimension must be > 0, got {dimension}")

        self.path = Path(path)
        self.dimension = dimension
        self.collection_name = collection_name
        self.logger = logger or get_class_logger(self.__class__)

        self.capacity = 0
        self.client: ClientAPI | None = None
        self.collection: Collection | None = None
        self._initialized = False

    def initialize(self, capacity: int = 100_000) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be > 0, got {capacity}")

        self.logger.info(
            "Opening Chroma persistent client (path=%s, collection=%s)",
            self.path,
            self.collection_name,
        )
        try:
            self.path.mkdir(parents=True, exist_ok=True)
            self.client = chromadb.PersistentClient(path=str(self.path))
            self.collection = self.client.get_or_create_collection(
                name=self.collection_name,
                metadata={"hnsw:space": "cosine"},
            )
            sample = self.collection.get(limit=1, include=["embeddings"])
        except Exception as e:
            raise IndexPersistenceError(
                f"Failed to open Chroma collection '{self.collection_name}' at {self.path}: {e}"
            ) from e

        embeddings = sample.get("embeddings")
        if embeddings is not None and len(embeddings) > 0 and len(embeddings[0]) != self.dimension:
            raise IndexPersistenceError(
                f"Chroma collection '{self.collection_name}' holds vectors of dimension "
                f"{len(embeddings[0])}, expected {self.dimension}"
            )

        self.capacity = capacity
        self._initialized = True
        self.logger.info(
            "Chroma collection ready: '%s' (vectors=%d, dimension=%d)",
            self.collection_name,
            self.get_count(),
            self.dimension,
        )

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise NotInitializedError("Vector index not initialized. Call initialize() first.")

    def _prepare(self, vector: Sequence[float]) -> List[float]:
        v = np.asarray(vector, dtype=np.float32).reshape(-1)
        if v.shape[0] != self.dimension:
            raise DimensionMismatchError(self.dimension, v.shape[0])
        return v.tolist()

    def add_vector(self, doc_id: int, vector: Sequence[float]) -> None:
        self._require_initialized()

        if doc_id < 0:
            raise ValueError(f"doc_id must be >= 0, got {doc_id}")

        embedding = self._prepare(vector)
        key = str(int(doc_id))

        existing = self.collection.get(ids=[key], include=[])
        if not existing.get("ids") and self.collection.count() >= self.capacity:
            raise VectorIndexError(
                f"Vector index is full ({self.capacity} vectors); cannot add id {doc_id}"
            )

        self.collection.upsert(ids=[key], embeddings=[embedding])
        self.logger.debug("Upserted vector id=%s into '%s'", key, self.collection_name)

    def search(self, query_vector: Sequence[float], k: int = 10) -> List[SearchHit]:
        self._require_initialized()
        embedding = self._prepare(query_vector)

        count = self.collection.count()
        if count == 0 or k <= 0:
            return []

        try:
            res: Dict[str, Any] = self.collection.query(
                query_embeddings=[embedding],
                n_results=min(k, count),
                include=["distances"],
            )
        except Exception as e:
            self.logger.error(
                "Chroma query failed on collection '%s': %s",
                self.collection_name,
                e,
                exc_info=True,
            )
            raise

        ids = (res.get("ids") or [[]])[0]
        distances = (res.get("distances") or [[]])[0]

        hits = [SearchHit(id=int(i), distance=float(d)) for i, d in zip(ids, distances)]
        hits.sort(key=lambda h: h.distance)
        return hits

    def save(self) -> None:
        self._require_initialized()
        try:
            # count() exercises the on-disk collection
            _ = self.collection.count()
        except Exception as e:
            raise IndexPersistenceError(
                f"Chroma collection '{self.collection_name}' is not reachable: {e}"
            ) from e

    def close(self) -> None:
        if not self._initialized:
            return
        try:
            self.save()
        except IndexPersistenceError as e:
            self.logger.error("Chroma collection check failed on close: %s", e)

    def get_count(self) -> int:
        if not self._initialized:
            return 0
        return self.collection.count()

    def get_dimension(self) -> int:
        return self.dimension

    def is_initialized(self) -> bool:
        return self._initialized
