# -----------------------------------------------------------------------------
# Created: 2026-02-14
# Description: conftest.py
# -----------------------------------------------------------------------------

import re
import sys
import zlib
from pathlib import Path
from typing import List, Sequence

import numpy as np
import pytest

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from config.Config import Config  # noqa: E402
from embedding.UsageTracker import UsageTracker  # noqa: E402
from errors.KBErrors import ProviderError  # noqa: E402
from store.SqliteDocumentStore import SqliteDocumentStore  # noqa: E402
from vectorstore.FaissVectorIndex import FaissVectorIndex  # noqa: E402

VOCAB = ["cat", "dog", "fish", "car", "engine", "python", "code", "tree"]
DIM = len(VOCAB)


def keyword_vector(text: str) -> np.ndarray:
    """
    Deterministic bag-of-words embedding over VOCAB. Text with no
    vocabulary word lands on one crc32-chosen axis.
    """
    words = re.findall(r"[a-z]+", text.lower())
    v = np.zeros(DIM, dtype=np.float32)
    for w in words:
        if w in VOCAB:
            v[VOCAB.index(w)] += 1.0
    if not v.any():
        v[zlib.crc32(text.encode("utf-8")) % DIM] = 1.0
    return (v / np.linalg.norm(v)).astype(np.float32)


class FakeEmbedder:
    """EmbeddingProvider stand-in: no network, keyword vectors."""

    def __init__(self, *, fail: bool = False):
        self.fail = fail
        self.usage = UsageTracker()
        self.batch_calls = 0
        self.single_calls = 0

    def _check(self, text: str) -> None:
        if not text or not text.strip():
            raise ValueError("Cannot embed empty text")
        if self.fail:
            raise ProviderError("provider down", provider="fake", status_code=503, attempts=3)

    def embed(self, text: str) -> np.ndarray:
        self._check(text)
        self.single_calls += 1
        self.usage.add(UsageTracker.estimate_tokens(text))
        return keyword_vector(text)

    def embed_batch(self, texts: Sequence[str]) -> List[np.ndarray]:
        texts = list(texts)
        if not texts:
            return []
        for t in texts:
            self._check(t)
        self.batch_calls += 1
        self.usage.add(sum(UsageTracker.estimate_tokens(t) for t in texts))
        return [keyword_vector(t) for t in texts]

    def get_dimension(self) -> int:
        return DIM

    def test_connection(self) -> bool:
        return not self.fail


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def store(tmp_path):
    s = SqliteDocumentStore(str(tmp_path / "knowledge.db"))
    yield s
    s.close()


@pytest.fixture
def index(tmp_path) -> FaissVectorIndex:
    idx = FaissVectorIndex(str(tmp_path / "vectors.index"), DIM)
    idx.initialize(capacity=1000)
    return idx


@pytest.fixture
def cfg(tmp_path) -> Config:
    return Config(
        openai_api_key="test-key",
        db_path=str(tmp_path / "knowledge.db"),
        index_path=str(tmp_path / "vectors.index"),
        embed_dimensions=DIM,
    )
