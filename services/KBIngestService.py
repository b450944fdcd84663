# -----------------------------------------------------------------------------
# Created: 2026-02-09
# Description: KBIngestService.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import settings
from chunking.KBChunker import KBChunker
from chunking.MarkdownParser import build_markdown_documents
from embedding.EmbeddingProvider import EmbeddingProvider
from store.KBDocumentStore import KBDocumentStore
from utility.logging_utils import get_class_logger
from vectorstore.KBVectorIndex import KBVectorIndex


@dataclass
class NewDocument:
    content: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    source: Optional[str] = None


class KBIngestService:
    """
    Owns the write path:
      - embed content
      - insert document + embedding into the document store
      - add the vector to the index and persist it

    Steps are not rolled back: if a later step fails, earlier ones stay.
    """

    def __init__(
        self,
        *,
        store: KBDocumentStore,
        index: KBVectorIndex,
        embedder: EmbeddingProvider,
        chunker: KBChunker | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.index = index
        self.embedder = embedder
        self.chunker = chunker or KBChunker(
            chunk_size=settings.CHUNK_SIZE,
            overlap=settings.CHUNK_OVERLAP,
        )
        self.logger = logger or get_class_logger(self.__class__)

    def add_document(
        self,
        content: str,
        metadata: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
    ) -> int:
        self.logger.info("add_document: source='%s' chars=%d (start)", source, len(content or ""))

        vector = self.embedder.embed(content)
        try:
            doc_id = self.store.insert_document(content, metadata, source)
            self.store.insert_embedding(doc_id, vector)
            self.index.add_vector(doc_id, vector)
            self.index.save()
        except Exception as e:
            self.logger.error("add_document: source='%s' -> failed: %s", source, e, exc_info=True)
            raise

        self.logger.info("add_document: source='%s' -> id=%d (done)", source, doc_id)
        return doc_id

    def add_documents(self, docs: Sequence[NewDocument]) -> List[int]:
        """
        Add several documents with a single batch embedding call and a
        single index save. Returns the new ids in input order.
        """
        docs = list(docs)
        if not docs:
            return []

        self.logger.info("add_documents: count=%d (start)", len(docs))

        vectors = self.embedder.embed_batch([d.content for d in docs])

        ids: List[int] = []
        try:
            for doc, vector in zip(docs, vectors):
                doc_id = self.store.insert_document(doc.content, doc.metadata, doc.source)
                self.store.insert_embedding(doc_id, vector)
                self.index.add_vector(doc_id, vector)
                ids.append(doc_id)
            self.index.save()
        except Exception as e:
            self.logger.error(
                "add_documents: failed after %d/%d documents: %s",
                len(ids),
                len(docs),
                e,
                exc_info=True,
            )
            raise

        self.logger.info("add_documents: count=%d (done)", len(ids))
        return ids

    def ingest_markdown(
        self,
        source: str,
        text: str,
        *,
        chunk_size: Optional[int] = None,
        overlap: Optional[int] = None,
        extract_frontmatter: bool = settings.EXTRACT_FRONTMATTER,
        strip_formatting: bool = settings.STRIP_FORMATTING,
    ) -> List[int]:
        """Split one markdown text into chunk documents and add them all."""
        chunker = self.chunker
        if chunk_size is not None or overlap is not None:
            chunker = KBChunker(
                chunk_size=chunk_size if chunk_size is not None else self.chunker.chunk_size,
                overlap=overlap if overlap is not None else self.chunker.overlap,
            )

        md_docs = build_markdown_documents(
            source,
            text,
            extract_frontmatter=extract_frontmatter,
            strip_formatting=strip_formatting,
            chunker=chunker,
        )
        if not md_docs:
            self.logger.warning("ingest_markdown: source='%s' produced no content", source)
            return []

        self.logger.info("ingest_markdown: source='%s' chunks=%d", source, len(md_docs))
        return self.add_documents(
            [NewDocument(content=d.content, metadata=d.metadata, source=d.source) for d in md_docs]
        )

    def delete_document(self, doc_id: int) -> bool:
        """
        Remove a document (and its stored embedding) from the store.
        The index keeps the vector; searches skip ids that no longer resolve.
        """
        deleted = self.store.delete_document(doc_id)
        if deleted:
            self.logger.info("delete_document: id=%d deleted (index entry is now stale)", doc_id)
        else:
            self.logger.warning("delete_document: id=%d not found", doc_id)
        return deleted
