# -----------------------------------------------------------------------------
# Created: 2026-02-12
# Description: AppContainer.py
# -----------------------------------------------------------------------------
import logging
from pathlib import Path
from typing import Optional

import settings
from chunking.KBChunker import KBChunker
from config.Config import Config
from embedding.EmbeddingProvider import EmbeddingProvider
from embedding.KBEmbedder import KBEmbedder
from embedding.UsageTracker import UsageTracker
from services.KBHealthService import KBHealthService
from services.KBIngestService import KBIngestService
from services.KBNamedVectorService import KBNamedVectorService
from services.KBQueryService import KBQueryService
from services.KBStatsService import KBStatsService
from store.KBDocumentStore import KBDocumentStore
from store.SqliteDocumentStore import SqliteDocumentStore
from utility.logging_utils import get_class_logger
from vectorstore.ChromaVectorIndex import ChromaVectorIndex
from vectorstore.FaissVectorIndex import FaissVectorIndex
from vectorstore.KBVectorIndex import KBVectorIndex


def build_vector_index(cfg: Config, dimension: int, logger: logging.Logger | None = None) -> KBVectorIndex:
    """Vector index backend selected by cfg.index_backend (not yet initialized)."""
    if cfg.index_backend == "chroma":
        # chroma wants a directory; reuse the index path without its suffix
        chroma_dir = Path(cfg.index_path).with_suffix("")
        return ChromaVectorIndex(
            str(chroma_dir),
            dimension,
            collection_name=cfg.chroma_collection,
            logger=logger,
        )
    return FaissVectorIndex(
        cfg.index_path,
        dimension,
        m=settings.HNSW_M,
        ef_construction=settings.HNSW_EF_CONSTRUCTION,
        ef_search=settings.HNSW_EF_SEARCH,
        logger=logger,
    )


class AppContainer:
    """
    Owns heavy object instantiation and application wiring.
    Singleton instances are provided via FastAPI dependencies.

    store / index / embedder may be injected (tests); anything not
    injected is built from cfg.
    """

    def __init__(
        self,
        cfg: Optional[Config] = None,
        *,
        store: Optional[KBDocumentStore] = None,
        index: Optional[KBVectorIndex] = None,
        embedder: Optional[EmbeddingProvider] = None,
        usage: Optional[UsageTracker] = None,
    ) -> None:
        self.logger = get_class_logger(self.__class__)

        # Configuration
        self.cfg = cfg or Config.from_env()
        self.logger.info("Starting with config: %s", self.cfg.summary())

        # Core infrastructure
        self.usage = usage or UsageTracker(model=self.cfg.embed_model)
        self.embedder = embedder or KBEmbedder(self.cfg, usage=self.usage)
        self.store = store or SqliteDocumentStore(self.cfg.db_path)
        self.index = index or build_vector_index(self.cfg, self.embedder.get_dimension())
        if not self.index.is_initialized():
            self.index.initialize(self.cfg.max_elements)

        self.chunker = KBChunker(chunk_size=settings.CHUNK_SIZE, overlap=settings.CHUNK_OVERLAP)

        # Services
        self.ingest_service = KBIngestService(
            store=self.store,
            index=self.index,
            embedder=self.embedder,
            chunker=self.chunker,
        )
        self.query_service = KBQueryService(
            store=self.store,
            index=self.index,
            embedder=self.embedder,
        )
        self.named_vector_service = KBNamedVectorService(
            store=self.store,
            embedder=self.embedder,
        )
        self.stats_service = KBStatsService(
            store=self.store,
            index=self.index,
            usage=getattr(self.embedder, "usage", self.usage),
            index_backend=self.cfg.index_backend,
        )
        self.health_service = KBHealthService(
            store=self.store,
            index=self.index,
            embedder=self.embedder,
        )

    def close(self) -> None:
        """Persist the index and close the store; failures are logged, not raised."""
        try:
            self.index.close()
        except Exception as e:
            self.logger.error("Failed to close vector index: %s", e, exc_info=True)
        try:
            self.store.close()
        except Exception as e:
            self.logger.error("Failed to close document store: %s", e, exc_info=True)
