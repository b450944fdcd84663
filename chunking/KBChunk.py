# -----------------------------------------------------------------------------
# Created: 2026-02-03
# Description: KBChunk
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field
from typing import Optional, Dict, Any


@dataclass
class KBChunk:
    """
    A single boundary-aware segment of a document, ready to be embedded on its own.
    Offsets refer to the trimmed text inside the original content.
    """

    text: str
    chunk_index: int
    total_chunks: int
    char_start: int
    char_end: int

    source: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_chunk(self) -> bool:
        return self.total_chunks > 1

    def to_metadata(self) -> Dict[str, Any]:
        """
        Document-store metadata for this chunk. Positional keys are only
        added when the document was actually split.
        """
        meta = dict(self.metadata)
        if self.is_chunk:
            meta["isChunk"] = True
            meta["chunkIndex"] = self.chunk_index
            meta["totalChunks"] = self.total_chunks
        return meta
