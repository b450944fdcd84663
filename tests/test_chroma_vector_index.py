# -----------------------------------------------------------------------------
# Created: 2026-02-16
# Description: test_chroma_vector_index.py
# -----------------------------------------------------------------------------
import uuid

import numpy as np
import pytest

pytest.importorskip("chromadb")

from errors.KBErrors import DimensionMismatchError, NotInitializedError, VectorIndexError  # noqa: E402
from vectorstore.ChromaVectorIndex import ChromaVectorIndex  # noqa: E402

DIM = 4


def _vec(*values) -> np.ndarray:
    return np.array(values, dtype=np.float32)


@pytest.fixture
def chroma_dir(tmp_path):
    return str(tmp_path / "chroma")


@pytest.fixture
def collection_name():
    return f"kb-test-{uuid.uuid4().hex[:8]}"


def test_chroma_requires_initialize(chroma_dir, collection_name):
    index = ChromaVectorIndex(chroma_dir, DIM, collection_name=collection_name)
    assert index.get_count() == 0
    with pytest.raises(NotInitializedError):
        index.add_vector(1, _vec(1, 0, 0, 0))


def test_chroma_add_search_and_replace(chroma_dir, collection_name):
    index = ChromaVectorIndex(chroma_dir, DIM, collection_name=collection_name)
    index.initialize(capacity=10)

    assert index.search(_vec(1, 0, 0, 0), 3) == []

    index.add_vector(1, _vec(1, 0, 0, 0))
    index.add_vector(2, _vec(0, 1, 0, 0))
    hits = index.search(_vec(1, 0, 0, 0), 5)
    assert [h.id for h in hits] == [1, 2]
    assert hits[0].distance == pytest.approx(0.0, abs=1e-4)

    index.add_vector(1, _vec(0, 0, 1, 0))
    assert index.get_count() == 2
    assert index.search(_vec(0, 0, 1, 0), 1)[0].id == 1

    with pytest.raises(DimensionMismatchError):
        index.add_vector(3, _vec(1, 0, 0))


def test_chroma_capacity(chroma_dir, collection_name):
    index = ChromaVectorIndex(chroma_dir, DIM, collection_name=collection_name)
    index.initialize(capacity=1)
    index.add_vector(1, _vec(1, 0, 0, 0))
    with pytest.raises(VectorIndexError):
        index.add_vector(2, _vec(0, 1, 0, 0))


def test_chroma_persists_between_instances(chroma_dir, collection_name):
    first = ChromaVectorIndex(chroma_dir, DIM, collection_name=collection_name)
    first.initialize()
    first.add_vector(42, _vec(0, 0, 0, 1))
    first.save()
    first.close()

    second = ChromaVectorIndex(chroma_dir, DIM, collection_name=collection_name)
    second.initialize()
    assert second.get_count() == 1
    assert second.search(_vec(0, 0, 0, 1), 1)[0].id == 42
