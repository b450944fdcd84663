# -----------------------------------------------------------------------------
# Created: 2026-02-02
# Description: KBErrors
# -----------------------------------------------------------------------------
from typing import Optional


class KBError(Exception):
    """Base exception for all knowledge base errors."""


class NotInitializedError(KBError):
    """A vector index was used before initialize() was called."""


class DimensionMismatchError(KBError, ValueError):
    """
    Vector length does not match the expected dimension.

    Raised by the vector index on add/search and by the vector algebra
    primitives when two operands differ in length.
    """

    def __init__(self, expected: int, actual: int, message: Optional[str] = None):
        super().__init__(
            message or f"Vector dimension mismatch. Expected {expected}, got {actual}"
        )
        self.expected = expected
        self.actual = actual


class HandleNotFoundError(KBError, LookupError):
    """A named vector handle could not be resolved."""

    def __init__(self, handle: str):
        super().__init__(f"Vector handle not found: {handle}")
        self.handle = handle


class ProviderError(KBError):
    """
    Embedding provider call failed.

    Raised when:
    - retries for rate-limit / transient errors are exhausted
    - the provider returns a non-retryable error (auth, bad request)
    - the response does not contain usable embeddings
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
        attempts: int = 0,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.attempts = attempts


class VectorIndexError(KBError):
    """Vector index operation failed (capacity reached, backend failure)."""


class IndexPersistenceError(VectorIndexError):
    """Persisted index could not be written, or exists but could not be read."""


class DocumentStoreError(KBError):
    """Document store query or write failed."""


class ChunkingConfigError(KBError, ValueError):
    """Chunk size / overlap combination cannot make forward progress."""
