# -----------------------------------------------------------------------------
# Created: 2026-02-09
# Description: KBQueryService
# -----------------------------------------------------------------------------
import logging
from typing import Dict, List, Optional, Sequence

import numpy as np

from algebra.VectorAlgebra import VectorOperation, vector_algebra
from document.KBDocument import KBDocument
from embedding.EmbeddingProvider import EmbeddingProvider
from search.HybridFusion import fuse
from search.KBSearchTypes import HybridResult, KBSearchResult
from store.KBDocumentStore import KBDocumentStore
from utility.logging_utils import get_class_logger
from vectorstore.KBVectorIndex import KBVectorIndex


def _require_query(query: str, name: str = "query") -> None:
    if not query or not query.strip():
        raise ValueError(f"{name} must not be empty")


def _require_limit(limit: int) -> None:
    if limit <= 0:
        raise ValueError(f"limit must be > 0, got {limit}")


class KBQueryService:
    """
    Read path: semantic, keyword, hybrid and vector-algebra searches.

    Index hits whose id no longer resolves in the document store (deleted
    documents) are skipped.
    """

    def __init__(
        self,
        *,
        store: KBDocumentStore,
        index: KBVectorIndex,
        embedder: EmbeddingProvider,
        logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.index = index
        self.embedder = embedder
        self.logger = logger or get_class_logger(self.__class__)

    def search(self, query: str, limit: int = 10, threshold: float = 0.0) -> List[KBSearchResult]:
        _require_query(query)
        self.logger.info("search: query=%r limit=%d threshold=%.3f", query, limit, threshold)
        vector = self.embedder.embed(query)
        return self.search_by_vector(vector, limit=limit, threshold=threshold)

    def search_by_vector(
        self,
        vector: np.ndarray,
        limit: int = 10,
        threshold: float = 0.0,
    ) -> List[KBSearchResult]:
        _require_limit(limit)

        hits = self.index.search(vector, limit)

        results: List[KBSearchResult] = []
        skipped = 0
        for hit in hits:
            doc = self.store.get_document(hit.id)
            if doc is None:
                skipped += 1
                continue
            similarity = hit.similarity
            if similarity < threshold:
                continue
            results.append(KBSearchResult(document=doc, similarity=similarity, distance=hit.distance))

        if skipped:
            self.logger.debug("search_by_vector: skipped %d stale index entries", skipped)
        self.logger.info("search_by_vector: hits=%d returned=%d", len(hits), len(results))
        return results

    def fulltext_search(self, query: str, limit: int = 10) -> List[KBDocument]:
        _require_query(query)
        _require_limit(limit)
        docs = self.store.fulltext_search(query, limit)
        self.logger.info("fulltext_search: query=%r returned=%d", query, len(docs))
        return docs

    def hybrid_search(
        self,
        lexical_query: str,
        semantic_query: Optional[str] = None,
        limit: int = 10,
    ) -> List[HybridResult]:
        """
        Keyword and semantic search fused into one ranking. Each side fetches
        limit * 2 candidates. The semantic query defaults to the lexical one.
        """
        _require_query(lexical_query, "lexical_query")
        _require_limit(limit)
        semantic_query = semantic_query if semantic_query is not None else lexical_query
        _require_query(semantic_query, "semantic_query")

        fetch = limit * 2
        lexical_docs = self.store.fulltext_search(lexical_query, fetch)
        semantic_results = self.search(semantic_query, limit=fetch)

        docs: Dict[int, KBDocument] = {d.id: d for d in lexical_docs}
        for r in semantic_results:
            docs.setdefault(r.document.id, r.document)

        fused = fuse(
            [d.id for d in lexical_docs],
            [(r.document.id, r.similarity) for r in semantic_results],
            limit,
        )

        self.logger.info(
            "hybrid_search: lexical=%d semantic=%d fused=%d",
            len(lexical_docs),
            len(semantic_results),
            len(fused),
        )
        return [HybridResult(document=docs[f.id], score=f.score) for f in fused]

    def vector_algebra(self, operations: Sequence[VectorOperation]) -> np.ndarray:
        def resolve(handle: str) -> Optional[np.ndarray]:
            named = self.store.get_named_vector(handle)
            return named.vector if named is not None else None

        return vector_algebra(operations, resolve)

    def search_with_vector_algebra(
        self,
        operations: Sequence[VectorOperation],
        limit: int = 10,
        threshold: float = 0.0,
    ) -> List[KBSearchResult]:
        self.logger.info(
            "search_with_vector_algebra: ops=%s limit=%d",
            [(o.op, o.handle) for o in operations],
            limit,
        )
        vector = self.vector_algebra(operations)
        return self.search_by_vector(vector, limit=limit, threshold=threshold)
