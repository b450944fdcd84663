# -----------------------------------------------------------------------------
# Created: 2026-02-17
# Description: test_kb_embedder.py
# -----------------------------------------------------------------------------
from types import SimpleNamespace

import httpx
import numpy as np
import openai
import pytest

from config.Config import Config
from embedding.EmbeddingProvider import EmbeddingProvider
from embedding.KBEmbedder import KBEmbedder
from embedding.UsageTracker import UsageTracker
from errors.KBErrors import ProviderError

URL = "https://api.openai.com/v1/embeddings"


def _response(status: int) -> httpx.Response:
    return httpx.Response(status, request=httpx.Request("POST", URL))


def rate_limit_error():
    return openai.RateLimitError("rate limited", response=_response(429), body=None)


def server_error():
    return openai.InternalServerError("boom", response=_response(500), body=None)


def connection_error():
    return openai.APIConnectionError(request=httpx.Request("POST", URL))


def auth_error():
    return openai.AuthenticationError("bad key", response=_response(401), body=None)


class FakeEmbeddings:
    """Mimics client.embeddings.create(); raises queued errors first."""

    def __init__(self, dim: int, errors=None):
        self.dim = dim
        self.errors = list(errors or [])
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.errors:
            err = self.errors.pop(0)
            if err is not None:
                raise err
        texts = kwargs["input"]
        data = []
        for i, text in enumerate(texts):
            vec = [0.0] * self.dim
            vec[len(text) % self.dim] = 2.0
            data.append(SimpleNamespace(index=i, embedding=vec))
        # out of order on purpose; the SDK does not promise ordering
        data.reverse()
        return SimpleNamespace(data=data, usage=SimpleNamespace(total_tokens=3 * len(texts)))


class FakeClient:
    def __init__(self, dim: int = 8, errors=None):
        self.embeddings = FakeEmbeddings(dim, errors)


@pytest.fixture
def sleeps(monkeypatch):
    recorded = []
    monkeypatch.setattr("embedding.KBEmbedder.time.sleep", lambda s: recorded.append(s))
    return recorded


def _embedder(client, **kwargs) -> KBEmbedder:
    cfg = Config(openai_api_key="test-key", embed_dimensions=8)
    kwargs.setdefault("retry_delay", 1.0)
    return KBEmbedder(cfg, client=client, **kwargs)


def test_embed_returns_normalised_float32():
    client = FakeClient()
    emb = _embedder(client)

    v = emb.embed("hello")
    assert isinstance(emb, EmbeddingProvider)
    assert v.dtype == np.float32
    assert v.shape == (8,)
    assert np.linalg.norm(v) == pytest.approx(1.0, abs=1e-5)
    assert client.embeddings.calls[0] == {"model": "text-embedding-3-small", "input": ["hello"], "dimensions": 8}


def test_model_default_dimensions_are_not_sent():
    client = FakeClient(dim=1536)
    emb = KBEmbedder(Config(openai_api_key="k"), client=client)
    assert emb.get_dimension() == 1536
    emb.embed("hello")
    assert "dimensions" not in client.embeddings.calls[0]


@pytest.mark.parametrize(
    "model,expected",
    [
        ("text-embedding-3-small", 1536),
        ("text-embedding-3-large", 3072),
        ("text-embedding-ada-002", 1536),
        ("some-future-model", 1536),
    ],
)
def test_model_dimensions(model, expected):
    emb = KBEmbedder(Config(openai_api_key="k", embed_model=model), client=FakeClient())
    assert emb.get_dimension() == expected


def test_empty_inputs():
    emb = _embedder(FakeClient())
    with pytest.raises(ValueError):
        emb.embed("")
    with pytest.raises(ValueError):
        emb.embed("   ")
    assert emb.embed_batch([]) == []
    with pytest.raises(ValueError):
        emb.embed_batch(["ok", " "])


def test_batch_is_split_and_order_preserved():
    client = FakeClient()
    emb = _embedder(client, batch_size=2)
    texts = ["a", "bb", "ccc", "dddd", "eeeee"]

    vectors = emb.embed_batch(texts)

    assert len(client.embeddings.calls) == 3
    assert [c["input"] for c in client.embeddings.calls] == [["a", "bb"], ["ccc", "dddd"], ["eeeee"]]
    assert [int(np.argmax(v)) for v in vectors] == [len(t) % 8 for t in texts]


def test_transient_errors_are_retried_with_backoff(sleeps):
    client = FakeClient(errors=[rate_limit_error(), connection_error()])
    emb = _embedder(client, max_retries=3)

    v = emb.embed("hello")

    assert v.shape == (8,)
    assert len(client.embeddings.calls) == 3
    assert sleeps == [1.0, 2.0]


def test_retry_exhaustion_raises_provider_error(sleeps):
    client = FakeClient(errors=[server_error(), server_error(), server_error()])
    emb = _embedder(client, max_retries=2)

    with pytest.raises(ProviderError) as exc:
        emb.embed("hello")

    assert exc.value.attempts == 3
    assert exc.value.status_code == 500
    assert exc.value.provider == "openai"
    assert len(client.embeddings.calls) == 3
    assert sleeps == [1.0, 2.0]


def test_non_retryable_error_fails_immediately(sleeps):
    client = FakeClient(errors=[auth_error()])
    emb = _embedder(client, max_retries=3)

    with pytest.raises(ProviderError) as exc:
        emb.embed("hello")

    assert exc.value.status_code == 401
    assert len(client.embeddings.calls) == 1
    assert sleeps == []


def test_usage_is_tracked():
    usage = UsageTracker()
    emb = _embedder(FakeClient(), usage=usage, batch_size=2)

    emb.embed("one")
    emb.embed_batch(["a", "b", "c"])

    assert usage.total_tokens == 3 + 9
    assert usage.requests == 3
    assert emb.usage is usage


def test_connection_check():
    assert _embedder(FakeClient()).test_connection() is True
    failing = _embedder(FakeClient(errors=[auth_error()]))
    assert failing.test_connection() is False


def test_usage_tracker_estimates_and_reset():
    assert UsageTracker.estimate_tokens("") == 0
    assert UsageTracker.estimate_tokens("abcd") == 1
    assert UsageTracker.estimate_tokens("abcde") == 2

    assert UsageTracker.estimate_cost(1000, "text-embedding-3-small") == pytest.approx(0.00002)
    assert UsageTracker.estimate_cost(1000, "text-embedding-3-large") == pytest.approx(0.00013)
    assert UsageTracker.estimate_cost(2000, "text-embedding-ada-002") == pytest.approx(0.0002)
    assert UsageTracker.estimate_cost(1000, "unknown") == pytest.approx(0.00002)

    tracker = UsageTracker(model="text-embedding-3-large")
    tracker.add(500)
    tracker.add(1500)
    assert tracker.total_tokens == 2000
    assert tracker.requests == 2
    assert tracker.estimated_cost() == pytest.approx(0.00026)

    tracker.reset()
    assert tracker.total_tokens == 0
    assert tracker.requests == 0

    with pytest.raises(ValueError):
        tracker.add(-1)


def test_max_retries_counts_retries_not_attempts(sleeps):
    no_retry = FakeClient(errors=[rate_limit_error()])
    with pytest.raises(ProviderError) as exc:
        _embedder(no_retry, max_retries=0).embed("hello")
    assert exc.value.attempts == 1
    assert len(no_retry.embeddings.calls) == 1
    assert sleeps == []

    one_retry = FakeClient(errors=[rate_limit_error()])
    v = _embedder(one_retry, max_retries=1).embed("hello")
    assert v.shape == (8,)
    assert len(one_retry.embeddings.calls) == 2
    assert sleeps == [1.0]

    with pytest.raises(ValueError):
        _embedder(FakeClient(), max_retries=-1)
