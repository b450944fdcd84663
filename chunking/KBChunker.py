# -----------------------------------------------------------------------------
# Created: 2026-02-03
# Description: KBChunker
# -----------------------------------------------------------------------------
import logging
from typing import List, Dict, Any, Optional, Tuple

from chunking.KBChunk import KBChunk
from errors.KBErrors import ChunkingConfigError
from utility.logging_utils import get_class_logger

PARAGRAPH_BREAK = "\n\n"
SENTENCE_BREAKS = (". ", ".\n", "! ", "? ")


def validate_chunk_config(chunk_size: int, overlap: int) -> None:
    """Reject sizes that cannot make forward progress."""
    if chunk_size <= 0:
        raise ChunkingConfigError(f"chunk_size must be > 0, got {chunk_size}")
    if overlap < 0:
        raise ChunkingConfigError(f"overlap must be >= 0, got {overlap}")
    if overlap >= chunk_size:
        raise ChunkingConfigError(
            f"overlap ({overlap}) must be < chunk_size ({chunk_size})"
        )


def _boundary_cut(candidate: str, chunk_size: int) -> int:
    """
    Number of leading characters of `candidate` to keep: up to the last
    paragraph break, else just after the last sentence end, provided either
    lies past half of chunk_size. Otherwise the whole candidate.
    """
    half = chunk_size * 0.5

    paragraph_break = candidate.rfind(PARAGRAPH_BREAK)
    if paragraph_break > half:
        return paragraph_break

    sentence_break = max(candidate.rfind(marker) for marker in SENTENCE_BREAKS)
    if sentence_break > half:
        return sentence_break + 1

    return len(candidate)


def chunk_spans(content: str, chunk_size: int = 1000, overlap: int = 200) -> List[Tuple[int, int]]:
    """
    Untrimmed (start, end) character ranges of each chunk, in order.
    """
    validate_chunk_config(chunk_size, overlap)

    length = len(content)
    if length <= chunk_size:
        return [(0, length)]

    spans: List[Tuple[int, int]] = []
    position = 0

    while position < length:
        start = position
        if position > 0 and overlap > 0:
            start = max(0, position - overlap)
        end = min(position + chunk_size, length)

        if position + chunk_size < length:
            cut = _boundary_cut(content[start:end], chunk_size)
            # a cut no longer than the overlap would not move position forward
            if cut > overlap:
                end = start + cut

        spans.append((start, end))

        if end < length:
            position += (end - start) - overlap
        else:
            position = length

    return spans


def chunk_document(content: str, chunk_size: int = 1000, overlap: int = 200) -> List[str]:
    """
    Split `content` into overlapping, boundary-aware chunks.

    Content no longer than chunk_size comes back as exactly one trimmed
    chunk, even when that chunk is empty. Longer content drops empty chunks.
    """
    spans = chunk_spans(content, chunk_size, overlap)
    if len(content) <= chunk_size:
        return [content.strip()]
    chunks = [content[start:end].strip() for start, end in spans]
    return [c for c in chunks if c]


class KBChunker:
    """
    Splits documents into KBChunk objects using chunk_document() semantics.
    Blank chunks are dropped, so blank content yields no KBChunks.
    """

    def __init__(
        self,
        *,
        chunk_size: int = 1000,
        overlap: int = 200,
        logger: logging.Logger | None = None,
    ):
        # guard against bad config that can cause infinite loops
        validate_chunk_config(chunk_size, overlap)

        self.chunk_size = chunk_size
        self.overlap = overlap
        self.logger = logger or get_class_logger(self.__class__)

    def chunk_text(self, content: str) -> List[str]:
        return chunk_document(content, self.chunk_size, self.overlap)

    def chunk_document(
        self,
        content: str,
        *,
        source: Optional[str] = None,
        doc_metadata: Optional[Dict[str, Any]] = None,
    ) -> List[KBChunk]:
        if not isinstance(content, str):
            raise TypeError("`content` must be str.")

        base_metadata: Dict[str, Any] = dict(doc_metadata or {})

        pieces: List[Tuple[str, int]] = []
        for start, end in chunk_spans(content, self.chunk_size, self.overlap):
            raw = content[start:end]
            text = raw.strip()
            if not text:
                continue
            lead = len(raw) - len(raw.lstrip())
            pieces.append((text, start + lead))

        total = len(pieces)
        chunks = [
            KBChunk(
                text=text,
                chunk_index=i,
                total_chunks=total,
                char_start=char_start,
                char_end=char_start + len(text),
                source=source,
                metadata=dict(base_metadata),
            )
            for i, (text, char_start) in enumerate(pieces)
        ]

        if chunks:
            avg_len = sum(len(c.text) for c in chunks) / total
            self.logger.info(
                "Chunked source=%r chars=%d into %d chunks (chunk_size=%d overlap=%d avg_len=%.1f)",
                source,
                len(content),
                total,
                self.chunk_size,
                self.overlap,
                avg_len,
            )
        else:
            self.logger.warning("No chunks produced for source=%r", source)

        return chunks
