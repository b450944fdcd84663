# -----------------------------------------------------------------------------
# Created: 2026-02-10
# Description: KBStatsService.py
# -----------------------------------------------------------------------------

import logging
from typing import Any, Dict, Optional

from embedding.UsageTracker import UsageTracker
from store.KBDocumentStore import KBDocumentStore
from utility.logging_utils import get_class_logger
from vectorstore.KBVectorIndex import KBVectorIndex


class KBStatsService:
    """
    Stats service for the /stats endpoint: store counts, index size and
    embedding usage for this process.
    """

    def __init__(
        self,
        *,
        store: KBDocumentStore,
        index: KBVectorIndex,
        usage: Optional[UsageTracker] = None,
        index_backend: str = "faiss",
        logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.index = index
        self.usage = usage
        self.index_backend = index_backend
        self.logger = logger or get_class_logger(self.__class__)

    def get_stats(self) -> Dict[str, Any]:
        db_stats = self.store.get_stats()

        stats: Dict[str, Any] = {
            "documents": db_stats.get("documents", 0),
            "embeddings": db_stats.get("embeddings", 0),
            "named_vectors": db_stats.get("named_vectors", 0),
            "vector_count": self.index.get_count(),
            "dimension": self.index.get_dimension(),
            "index_backend": self.index_backend,
            "index_initialized": self.index.is_initialized(),
            "tokens_used": self.usage.total_tokens if self.usage else 0,
            "embedding_requests": self.usage.requests if self.usage else 0,
            "estimated_cost": self.usage.estimated_cost() if self.usage else 0.0,
        }
        self.logger.info(
            "Stats: documents=%d vectors=%d named_vectors=%d",
            stats["documents"],
            stats["vector_count"],
            stats["named_vectors"],
        )
        return stats
