# -----------------------------------------------------------------------------
# Created: 2026-02-14
# Description: test_markdown_parser.py
# -----------------------------------------------------------------------------
from chunking.MarkdownParser import (
    build_markdown_documents,
    parse_frontmatter,
    strip_markdown_formatting,
)

MD_WITH_FRONTMATTER = """---
title: Vector Notes
tags: [search, embeddings]
draft: false
version: 3
---
# Heading

Body text about embeddings.
"""


def test_parse_frontmatter_reads_yaml_mapping():
    fm, body = parse_frontmatter(MD_WITH_FRONTMATTER)
    assert fm == {
        "title": "Vector Notes",
        "tags": ["search", "embeddings"],
        "draft": False,
        "version": 3,
    }
    assert body.startswith("# Heading")


def test_parse_frontmatter_without_block_returns_text_unchanged():
    text = "# Just markdown\n\nNo frontmatter here."
    assert parse_frontmatter(text) == ({}, text)


def test_parse_frontmatter_malformed_yaml_is_ignored():
    text = "---\ntitle: [unclosed\n---\nBody"
    assert parse_frontmatter(text) == ({}, text)


def test_parse_frontmatter_non_mapping_is_ignored():
    text = "---\n- just\n- a list\n---\nBody"
    assert parse_frontmatter(text) == ({}, text)


def test_strip_markdown_formatting():
    md = (
        "# Title\n\n"
        "Some **bold** and *italic* text with a [link](http://example.com) "
        "and ![img](a.png) and `inline`.\n\n"
        "```\ncode block\n```\n"
    )
    out = strip_markdown_formatting(md)

    assert out.startswith("Title")
    assert "bold" in out and "**" not in out
    assert "italic" in out and "*" not in out
    assert "link" in out and "http://example.com" not in out
    assert "img" not in out
    assert "inline" not in out
    assert "code block" not in out
    assert "\n\n\n" not in out


def test_build_single_document_metadata():
    docs = build_markdown_documents("notes/vectors.md", MD_WITH_FRONTMATTER)

    assert len(docs) == 1
    doc = docs[0]
    body = "# Heading\n\nBody text about embeddings."
    assert doc.content == body
    assert doc.source == "notes/vectors.md"
    assert doc.metadata["fileType"] == "markdown"
    assert doc.metadata["originalLength"] == len(body)
    assert doc.metadata["title"] == "Vector Notes"
    assert "isChunk" not in doc.metadata
    assert doc.chunk_index is None and doc.total_chunks is None


def test_build_chunked_documents_metadata():
    body = "\n\n".join(f"Section {i}. " + "word " * 30 for i in range(10))
    docs = build_markdown_documents("long.md", body, chunk_size=200, overlap=20)

    assert len(docs) > 1
    for i, d in enumerate(docs):
        assert d.metadata["isChunk"] is True
        assert d.metadata["chunkIndex"] == i
        assert d.metadata["totalChunks"] == len(docs)
        assert d.chunk_index == i
        assert d.total_chunks == len(docs)


def test_frontmatter_extraction_can_be_disabled():
    docs = build_markdown_documents("a.md", MD_WITH_FRONTMATTER, extract_frontmatter=False)
    assert docs[0].content.startswith("---")
    assert "title" not in docs[0].metadata


def test_formatting_can_be_stripped_before_chunking():
    docs = build_markdown_documents("a.md", MD_WITH_FRONTMATTER, strip_formatting=True)

    assert len(docs) == 1
    assert docs[0].content == "Heading\n\nBody text about embeddings."
    assert docs[0].metadata["title"] == "Vector Notes"
    assert docs[0].metadata["originalLength"] == len(docs[0].content)
