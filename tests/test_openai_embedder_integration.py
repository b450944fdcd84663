# -----------------------------------------------------------------------------
# Created: 2026-02-18
# Description: test_openai_embedder_integration.py
# -----------------------------------------------------------------------------
import os

import numpy as np
import pytest

from config.Config import Config
from embedding.KBEmbedder import KBEmbedder


def _skip_if_missing_prereqs():
    env_name = Config.ENV_VARS["openai_api_key"]
    if not os.getenv(env_name):
        pytest.skip(f"Missing env var for OpenAI: {env_name}")


@pytest.mark.integration
def test_openai_embedding_roundtrip():
    _skip_if_missing_prereqs()

    cfg = Config.from_env()
    embedder = KBEmbedder(cfg)

    vectors = embedder.embed_batch(["The cat sat on the mat.", "Engines need fuel."])

    assert len(vectors) == 2
    for v in vectors:
        assert v.shape == (embedder.get_dimension(),)
        assert np.linalg.norm(v) == pytest.approx(1.0, abs=1e-3)
    assert embedder.usage.requests == 1
    assert embedder.usage.total_tokens > 0
    assert embedder.test_connection() is True
