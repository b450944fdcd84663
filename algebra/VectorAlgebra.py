# -----------------------------------------------------------------------------
# Created: 2026-02-04
# Description: VectorAlgebra
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

import numpy as np

from errors.KBErrors import DimensionMismatchError, HandleNotFoundError

VECTOR_OPS = ("add", "subtract")


@dataclass(frozen=True)
class VectorOperation:
    """One step of a named-vector expression, e.g. ("king", "subtract", 1.0)."""

    handle: str
    op: str
    weight: Optional[float] = 1.0

    @property
    def effective_weight(self) -> float:
        return 1.0 if self.weight is None else float(self.weight)


def _as_vector(v) -> np.ndarray:
    return np.asarray(v, dtype=np.float32).reshape(-1)


def _check_dims(a: np.ndarray, b: np.ndarray) -> None:
    if a.shape[0] != b.shape[0]:
        raise DimensionMismatchError(a.shape[0], b.shape[0])


def magnitude(v) -> float:
    return float(np.linalg.norm(_as_vector(v)))


def normalize(v) -> np.ndarray:
    """Unit-length copy of v. A zero vector is returned unchanged."""
    v = _as_vector(v)
    mag = np.linalg.norm(v)
    if mag == 0:
        return v
    return (v / mag).astype(np.float32)


def add(a, b, weight: float = 1.0) -> np.ndarray:
    a, b = _as_vector(a), _as_vector(b)
    _check_dims(a, b)
    return normalize(a + np.float32(weight) * b)


def subtract(a, b, weight: float = 1.0) -> np.ndarray:
    a, b = _as_vector(a), _as_vector(b)
    _check_dims(a, b)
    return normalize(a - np.float32(weight) * b)


def multiply(v, scalar: float) -> np.ndarray:
    # deliberately not normalised
    return (_as_vector(v) * np.float32(scalar)).astype(np.float32)


def dot_product(a, b) -> float:
    a, b = _as_vector(a), _as_vector(b)
    _check_dims(a, b)
    return float(np.dot(a, b))


def cosine_similarity(a, b) -> float:
    a, b = _as_vector(a), _as_vector(b)
    _check_dims(a, b)
    mag_a = np.linalg.norm(a)
    mag_b = np.linalg.norm(b)
    if mag_a == 0 or mag_b == 0:
        return 0.0
    return float(np.dot(a, b) / (mag_a * mag_b))


def euclidean_distance(a, b) -> float:
    a, b = _as_vector(a), _as_vector(b)
    _check_dims(a, b)
    return float(np.linalg.norm(a - b))


def vector_algebra(
    operations: Sequence[VectorOperation] | Iterable[VectorOperation],
    resolve: Callable[[str], Optional[np.ndarray]],
) -> np.ndarray:
    """
    Fold a list of weighted named-vector operations into one query vector.

    The first operation's vector seeds the result as-is (its op and weight are
    not applied). Every later operation is applied in list order with add() or
    subtract(), both of which re-normalise.

    Raises:
        ValueError: empty operation list or unknown op
        HandleNotFoundError: a handle does not resolve
        DimensionMismatchError: resolved vectors differ in length
    """
    operations = list(operations)
    if not operations:
        raise ValueError("At least one vector operation is required")

    result: Optional[np.ndarray] = None
    for operation in operations:
        if operation.op not in VECTOR_OPS:
            raise ValueError(f"Unknown vector operation {operation.op!r}; expected one of {VECTOR_OPS}")

        vector = resolve(operation.handle)
        if vector is None:
            raise HandleNotFoundError(operation.handle)

        if result is None:
            result = _as_vector(vector).copy()
        elif operation.op == "add":
            result = add(result, vector, operation.effective_weight)
        else:
            result = subtract(result, vector, operation.effective_weight)

    return result
