# -----------------------------------------------------------------------------
# Created: 2026-02-05
# Description: FaissVectorIndex
# -----------------------------------------------------------------------------
import logging
import os
from pathlib import Path
from typing import Dict, List, Sequence

import faiss
import numpy as np

from errors.KBErrors import (
    DimensionMismatchError,
    IndexPersistenceError,
    NotInitializedError,
    VectorIndexError,
)
from search.KBSearchTypes import SearchHit
from utility.logging_utils import get_class_logger
from vectorstore.KBVectorIndex import KBVectorIndex


class FaissVectorIndex(KBVectorIndex):
    """
    HNSW vector index backed by faiss, persisted to a single file.

    Vectors are L2-normalised and stored under the inner-product metric, so
    cosine distance is 1 - inner product. faiss assigns sequential internal
    positions; the label table maps them back to document ids. Re-adding an
    id appends a new entry and retires the old position, which searches then
    skip. Once retired positions outnumber live ones the graph is rebuilt from
    the live entries, so replacements do not grow the index without bound.
    """

    def __init__(
        self,
        index_path: str,
        dimension: int = 1536,
        *,
        m: int = 16,
        ef_construction: int = 200,
        ef_search: int = 50,
        logger: logging.Logger | None = None,
    ):
        if dimension <= 0:
            raise ValueError(f"dimension must be > 0, got {dimension}")

        self.index_path = Path(index_path)
        self.dimension = dimension
        self.m = m
        self.ef_construction = ef_construction
        self.ef_search = ef_search
        self.logger = logger or get_class_logger(self.__class__)

        self.capacity = 0
        self._index: faiss.Index | None = None
        self._labels: List[int] = []   # internal position -> doc id
        self._live: Dict[int, int] = {}  # doc id -> current internal position
        self._initialized = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def initialize(self, capacity: int = 100_000) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be > 0, got {capacity}")

        self.index_path.parent.mkdir(parents=True, exist_ok=True)

        if self.index_path.exists():
            self._load()
            self.logger.info(
                "Loaded vector index from %s (vectors=%d, dimension=%d, capacity=%d)",
                self.index_path,
                self.get_count(),
                self.dimension,
                self.capacity,
            )
        else:
            self.capacity = capacity
            self._index = self._new_index()
            self._labels = []
            self._live = {}
            self.logger.info(
                "Created new vector index at %s (dimension=%d, capacity=%d)",
                self.index_path,
                self.dimension,
                self.capacity,
            )

        self._initialized = True

    def _new_index(self) -> faiss.Index:
        index = faiss.IndexHNSWFlat(self.dimension, self.m, faiss.METRIC_INNER_PRODUCT)
        index.hnsw.efConstruction = self.ef_construction
        index.hnsw.efSearch = self.ef_search
        return index

    def _load(self) -> None:
        try:
            with np.load(self.index_path, allow_pickle=False) as data:
                dimension = int(data["dimension"])
                capacity = int(data["capacity"])
                labels = data["labels"].astype(np.int64).tolist()
                index = faiss.deserialize_index(data["index"])
        except Exception as e:
            raise IndexPersistenceError(
                f"Failed to load vector index from {self.index_path}: {e}"
            ) from e

        if dimension != self.dimension or index.d != self.dimension:
            raise IndexPersistenceError(
                f"Vector index at {self.index_path} was written for dimension "
                f"{dimension}, expected {self.dimension}"
            )
        if len(labels) != index.ntotal:
            raise IndexPersistenceError(
                f"Vector index at {self.index_path} is inconsistent: "
                f"{index.ntotal} vectors but {len(labels)} labels"
            )

        self._index = index
        self.capacity = capacity
        self._labels = labels
        # later positions supersede earlier ones for the same id
        self._live = {doc_id: pos for pos, doc_id in enumerate(labels)}

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise NotInitializedError("Vector index not initialized. Call initialize() first.")

    def _prepare(self, vector: Sequence[float]) -> np.ndarray:
        v = np.asarray(vector, dtype=np.float32).reshape(-1)
        if v.shape[0] != self.dimension:
            raise DimensionMismatchError(self.dimension, v.shape[0])
        v = np.ascontiguousarray(v.reshape(1, -1))
        faiss.normalize_L2(v)  # zero vectors are left as zeros
        return v

    # ------------------------------------------------------------------
    # Vectors
    # ------------------------------------------------------------------
    def add_vector(self, doc_id: int, vector: Sequence[float]) -> None:
        self._require_initialized()

        if doc_id < 0:
            raise ValueError(f"doc_id must be >= 0, got {doc_id}")

        v = self._prepare(vector)

        replacing = doc_id in self._live
        if not replacing and len(self._live) >= self.capacity:
            raise VectorIndexError(
                f"Vector index is full ({self.capacity} vectors); cannot add id {doc_id}"
            )

        self._index.add(v)
        self._labels.append(int(doc_id))
        self._live[int(doc_id)] = len(self._labels) - 1

        if replacing:
            self.logger.debug("Replaced vector for id=%d", doc_id)
            if len(self._labels) - len(self._live) > len(self._live):
                self._compact()

    def _compact(self) -> None:
        """Rebuild the graph from live entries only, in insertion order."""
        live = sorted(self._live.items(), key=lambda kv: kv[1])
        index = self._new_index()
        vectors = np.vstack([self._index.reconstruct(pos) for _, pos in live]).astype(np.float32)
        index.add(vectors)

        retired = len(self._labels) - len(live)
        self._index = index
        self._labels = [doc_id for doc_id, _ in live]
        self._live = {doc_id: pos for pos, doc_id in enumerate(self._labels)}
        self.logger.info("Compacted vector index: dropped %d retired entries (vectors=%d)", retired, len(live))

    def search(self, query_vector: Sequence[float], k: int = 10) -> List[SearchHit]:
        self._require_initialized()
        q = self._prepare(query_vector)

        count = self.get_count()
        if count == 0 or k <= 0:
            return []

        stale = len(self._labels) - count
        fetch = min(k + stale, self._index.ntotal)
        self._index.hnsw.efSearch = max(self.ef_search, fetch)

        scores, positions = self._index.search(q, fetch)

        candidates = []
        for score, pos in zip(scores[0], positions[0]):
            if pos < 0:
                continue
            doc_id = self._labels[pos]
            if self._live.get(doc_id) != pos:
                continue
            candidates.append((1.0 - float(score), int(pos), doc_id))

        # ascending distance, ties by insertion order
        candidates.sort(key=lambda c: (c[0], c[1]))

        return [SearchHit(id=doc_id, distance=distance) for distance, _, doc_id in candidates[:k]]

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def save(self) -> None:
        self._require_initialized()

        tmp_path = self.index_path.with_name(self.index_path.name + ".tmp")
        try:
            self.index_path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "wb") as f:
                np.savez(
                    f,
                    index=faiss.serialize_index(self._index),
                    labels=np.asarray(self._labels, dtype=np.int64),
                    capacity=np.int64(self.capacity),
                    dimension=np.int64(self.dimension),
                )
            os.replace(tmp_path, self.index_path)
        except Exception as e:
            raise IndexPersistenceError(
                f"Failed to save vector index to {self.index_path}: {e}"
            ) from e

        self.logger.debug("Saved vector index to %s (vectors=%d)", self.index_path, self.get_count())

    def close(self) -> None:
        if not self._initialized:
            return
        try:
            self.save()
        except IndexPersistenceError as e:
            self.logger.error("Failed to save vector index on close: %s", e)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def get_count(self) -> int:
        return len(self._live)

    def get_dimension(self) -> int:
        return self.dimension

    def is_initialized(self) -> bool:
        return self._initialized
