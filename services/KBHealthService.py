# -----------------------------------------------------------------------------
# Created: 2026-02-10
# Description: KBHealthService.py
# -----------------------------------------------------------------------------
import logging
from typing import Dict

from api.schemas.health import DeepHealthResponse, SmokeTestSummary
from embedding.EmbeddingProvider import EmbeddingProvider
from store.KBDocumentStore import KBDocumentStore
from utility.logging_utils import get_class_logger
from vectorstore.KBVectorIndex import KBVectorIndex


class KBHealthService:
    """
    Runs component checks and returns DeepHealthResponse for the API layer.

    Checks:
      - document_store     (SELECT 1 on the database)
      - vector_index       (initialized, search returns without error)
      - embedding_provider (one live embedding call; opt-in, costs tokens)
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

    def _check_index(self) -> bool:
        if not self.index.is_initialized():
            self.logger.error("Vector index is not initialized")
            return False
        probe = [0.0] * self.index.get_dimension()
        self.index.search(probe, 1)
        return True

    def deep_health(self, check_embeddings: bool = False) -> DeepHealthResponse:
        self.logger.info("Starting health checks (check_embeddings=%s)", check_embeddings)

        checks = {
            "document_store": self.store.test_connection,
            "vector_index": self._check_index,
        }
        if check_embeddings:
            checks["embedding_provider"] = self.embedder.test_connection

        results: Dict[str, bool] = {}
        for name, check in checks.items():
            try:
                results[name] = bool(check())
            except Exception as e:
                self.logger.exception("%s check raised an exception: %s", name, e)
                results[name] = False

            if results[name]:
                self.logger.info("%s: PASS", name)
            else:
                self.logger.error("%s: FAIL", name)

        total = len(results)
        passed = sum(1 for ok in results.values() if ok)
        failed = total - passed

        return DeepHealthResponse(
            status="ok" if failed == 0 else "error",
            results=results,
            summary=SmokeTestSummary(total=total, passed=passed, failed=failed),
        )
