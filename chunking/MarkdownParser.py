# -----------------------------------------------------------------------------
# Created: 2026-02-03
# Description: MarkdownParser
# -----------------------------------------------------------------------------
import re
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import yaml

from chunking.KBChunker import KBChunker
from utility.logging_utils import get_logger

_logger = get_logger("chunking.MarkdownParser")

FRONTMATTER_RE = re.compile(r"\A---\r?\n(.*?)\r?\n---\r?\n(.*)\Z", re.DOTALL)

# Order matters: images before links, fenced code before inline code
_STRIP_RULES: List[Tuple[re.Pattern, str]] = [
    (re.compile(r"```.*?```", re.DOTALL), ""),
    (re.compile(r"`[^`]+`"), ""),
    (re.compile(r"^#{1,6}\s+", re.MULTILINE), ""),
    (re.compile(r"!\[([^\]]*)\]\([^)]+\)"), ""),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"\*\*([^*]+)\*\*"), r"\1"),
    (re.compile(r"\*([^*]+)\*"), r"\1"),
    (re.compile(r"__([^_]+)__"), r"\1"),
    (re.compile(r"_([^_]+)_"), r"\1"),
    (re.compile(r"^---+$", re.MULTILINE), ""),
    (re.compile(r"^\*\*\*+$", re.MULTILINE), ""),
    (re.compile(r"\n{3,}"), "\n\n"),
]


@dataclass
class MarkdownDocument:
    content: str
    source: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    frontmatter: Dict[str, Any] = field(default_factory=dict)
    chunk_index: Optional[int] = None
    total_chunks: Optional[int] = None


def parse_frontmatter(text: str) -> Tuple[Dict[str, Any], str]:
    """
    Split a leading YAML block delimited by '---' lines from the body.

    Returns (frontmatter, body). Text without a frontmatter block, or whose
    block is not a valid YAML mapping, comes back unchanged with {}.
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text

    raw_yaml, body = match.groups()
    try:
        parsed = yaml.safe_load(raw_yaml)
    except yaml.YAMLError as e:
        _logger.warning("Ignoring malformed frontmatter: %s", e)
        return {}, text

    if parsed is None:
        return {}, body
    if not isinstance(parsed, dict):
        _logger.warning("Ignoring frontmatter that is not a mapping (got %s)", type(parsed).__name__)
        return {}, text

    return {str(k): v for k, v in parsed.items()}, body


def strip_markdown_formatting(text: str) -> str:
    """Plain text of a markdown string: code, images and emphasis markers removed."""
    for pattern, replacement in _STRIP_RULES:
        text = pattern.sub(replacement, text)
    return text.strip()


def build_markdown_documents(
    source: str,
    text: str,
    *,
    chunk_size: int = 1000,
    overlap: int = 200,
    extract_frontmatter: bool = True,
    strip_formatting: bool = False,
    chunker: Optional[KBChunker] = None,
    logger: logging.Logger | None = None,
) -> List[MarkdownDocument]:
    """
    Turn one markdown file's text into store-ready documents, one per chunk.

    Each document's metadata carries the frontmatter keys, fileType and
    originalLength (length of the body after frontmatter removal and trimming).
    With strip_formatting the body is reduced to plain text before chunking.
    Chunk position keys are added only when the body was split.
    """
    log = logger or _logger

    frontmatter: Dict[str, Any] = {}
    body = text
    if extract_frontmatter:
        frontmatter, body = parse_frontmatter(text)
    body = strip_markdown_formatting(body) if strip_formatting else body.strip()

    chunker = chunker or KBChunker(chunk_size=chunk_size, overlap=overlap)
    doc_metadata = {**frontmatter, "fileType": "markdown", "originalLength": len(body)}
    chunks = chunker.chunk_document(body, source=source, doc_metadata=doc_metadata)

    documents = [
        MarkdownDocument(
            content=chunk.text,
            source=source,
            metadata=chunk.to_metadata(),
            frontmatter=dict(frontmatter),
            chunk_index=chunk.chunk_index if chunk.is_chunk else None,
            total_chunks=chunk.total_chunks if chunk.is_chunk else None,
        )
        for chunk in chunks
    ]

    log.debug(
        "Built %d markdown document(s) from %s (frontmatter keys=%s)",
        len(documents),
        source,
        sorted(frontmatter),
    )
    return documents
