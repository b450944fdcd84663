# -----------------------------------------------------------------------------
# Created: 2026-02-07
# Description: KBEmbedder
# -----------------------------------------------------------------------------
import time
from typing import Any, List, Optional, Sequence

import numpy as np
import openai
from openai import OpenAI

import settings
from config.Config import Config
from embedding.EmbeddingProvider import EmbeddingProvider
from embedding.UsageTracker import UsageTracker
from errors.KBErrors import ProviderError
from utility.logging_utils import get_class_logger

MODEL_DIMENSIONS = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}
DEFAULT_DIMENSION = 1536

# Transient failures worth another attempt (APITimeoutError is an APIConnectionError)
RETRYABLE_ERRORS = (
    openai.RateLimitError,
    openai.APIConnectionError,
    openai.InternalServerError,
)


class KBEmbedder(EmbeddingProvider):
    """
    OpenAI embeddings with batching, exponential backoff and usage tracking.

    The SDK's own retry loop is disabled (max_retries=0) so that every
    attempt is counted and logged here.
    """

    PROVIDER = "openai"

    def __init__(
            self,
            cfg: Config,
            *,
            client: Any = None,
            batch_size: int = settings.EMBED_BATCH_SIZE,
            max_retries: int = settings.EMBED_MAX_RETRIES,
            retry_delay: float = settings.EMBED_RETRY_DELAY,
            normalize: bool = True,
            usage: Optional[UsageTracker] = None,
            logger=None,
    ):
        if batch_size <= 0:
            raise ValueError(f"batch_size must be > 0, got {batch_size}")
        if max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {max_retries}")

        self.cfg = cfg
        self.model = cfg.embed_model
        self.dimensions = cfg.embed_dimensions or None
        self.batch_size = batch_size
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.normalize = normalize
        self.usage = usage or UsageTracker(model=self.model)
        self.logger = logger or get_class_logger(self.__class__)

        self.client = client or OpenAI(
            api_key=cfg.openai_api_key,
            base_url=cfg.openai_base_url or None,
            max_retries=0,
        )
        self.logger.info(
            "OpenAI embedder initialized (model=%s, dimension=%d, batch=%d)",
            self.model,
            self.get_dimension(),
            self.batch_size,
        )

    def get_dimension(self) -> int:
        if self.dimensions:
            return self.dimensions
        return MODEL_DIMENSIONS.get(self.model, DEFAULT_DIMENSION)

    def _create(self, texts: List[str]):
        kwargs = {"model": self.model, "input": texts}
        if self.dimensions:
            kwargs["dimensions"] = self.dimensions
        return self.client.embeddings.create(**kwargs)

    def _embed_request(self, texts: List[str]) -> List[np.ndarray]:
        """One embeddings call, retried on transient failures."""
        attempt = 0
        while True:
            attempt += 1
            try:
                resp = self._create(texts)
                break
            except RETRYABLE_ERRORS as e:
                self.logger.warning(
                    "Embedding request failed (attempt %d/%d): %s",
                    attempt,
                    self.max_retries + 1,
                    e,
                )
                if attempt > self.max_retries:
                    raise ProviderError(
                        f"Embedding request failed after {attempt} attempts: {e}",
                        provider=self.PROVIDER,
                        status_code=getattr(e, "status_code", None),
                        attempts=attempt,
                    ) from e
                time.sleep(self.retry_delay * 2 ** (attempt - 1))
            except openai.APIError as e:
                self.logger.error("Embedding request rejected: %s", e)
                raise ProviderError(
                    f"Embedding request rejected: {e}",
                    provider=self.PROVIDER,
                    status_code=getattr(e, "status_code", None),
                    attempts=attempt,
                ) from e

        data = sorted(resp.data, key=lambda d: d.index)
        if len(data) != len(texts):
            raise ProviderError(
                f"Expected {len(texts)} embeddings, got {len(data)}",
                provider=self.PROVIDER,
                attempts=attempt,
            )

        usage = getattr(resp, "usage", None)
        tokens = getattr(usage, "total_tokens", None)
        if tokens is None:
            tokens = sum(UsageTracker.estimate_tokens(t) for t in texts)
        self.usage.add(int(tokens))

        arr = np.asarray([d.embedding for d in data], dtype=np.float32)

        # Normalize vectors (cosine-friendly)
        if self.normalize:
            norms = np.linalg.norm(arr, axis=1, keepdims=True) + 1e-12
            arr = arr / norms

        return [row.astype(np.float32) for row in arr]

    def embed(self, text: str) -> np.ndarray:
        if not text or not text.strip():
            raise ValueError("Cannot embed empty text")
        return self._embed_request([text])[0]

    def embed_batch(self, texts: Sequence[str]) -> List[np.ndarray]:
        texts = list(texts)
        if not texts:
            return []

        blank = [i for i, t in enumerate(texts) if not t or not t.strip()]
        if blank:
            raise ValueError(f"Cannot embed empty text (positions {blank})")

        self.logger.info("Embedding %d texts (batch=%d)", len(texts), self.batch_size)
        out: List[np.ndarray] = []
        for i in range(0, len(texts), self.batch_size):
            out.extend(self._embed_request(texts[i:i + self.batch_size]))

        self.logger.info(
            "Completed embeddings for %d texts (total_tokens=%d)",
            len(out),
            self.usage.total_tokens,
        )
        return out

    def test_connection(self) -> bool:
        try:
            self.embed("test")
            return True
        except ProviderError as e:
            self.logger.error("Embedding provider connection failed: %s", e)
            return False
