# -----------------------------------------------------------------------------
# Created: 2026-02-15
# Description: test_vector_algebra.py
# -----------------------------------------------------------------------------
import numpy as np
import pytest

from algebra import VectorAlgebra as va
from algebra.VectorAlgebra import VectorOperation, vector_algebra
from errors.KBErrors import DimensionMismatchError, HandleNotFoundError

A = np.array([1.0, 0.0, 0.0], dtype=np.float32)
B = np.array([0.0, 1.0, 0.0], dtype=np.float32)


def _resolver(table):
    return lambda handle: table.get(handle)


def test_normalize_and_magnitude():
    v = va.normalize([3.0, 4.0])
    np.testing.assert_allclose(v, [0.6, 0.8], rtol=1e-6)
    assert va.magnitude(v) == pytest.approx(1.0)
    assert v.dtype == np.float32


def test_normalize_zero_vector_is_unchanged():
    z = np.zeros(3, dtype=np.float32)
    np.testing.assert_array_equal(va.normalize(z), z)


def test_add_and_subtract_normalise():
    np.testing.assert_allclose(va.add(A, B), [0.70710677, 0.70710677, 0.0], rtol=1e-6)
    np.testing.assert_allclose(va.subtract(A, B, 0.5), [0.8944272, -0.4472136, 0.0], rtol=1e-6)


def test_multiply_does_not_normalise():
    np.testing.assert_allclose(va.multiply(A, 3.0), [3.0, 0.0, 0.0])


def test_similarity_and_distance():
    assert va.dot_product(A, B) == 0.0
    assert va.cosine_similarity(A, A) == pytest.approx(1.0)
    assert va.cosine_similarity(A, np.zeros(3)) == 0.0
    assert va.euclidean_distance(A, B) == pytest.approx(np.sqrt(2.0))


@pytest.mark.parametrize("fn", [va.add, va.subtract, va.dot_product, va.cosine_similarity, va.euclidean_distance])
def test_length_mismatch_raises(fn):
    with pytest.raises(DimensionMismatchError):
        fn(A, np.ones(4, dtype=np.float32))


def test_algebra_folds_in_order():
    out = vector_algebra(
        [VectorOperation("a", "add"), VectorOperation("b", "subtract", 0.5)],
        _resolver({"a": A, "b": B}),
    )
    np.testing.assert_allclose(out, [0.894, -0.447, 0.0], atol=1e-3)


def test_first_operation_seeds_with_a_copy():
    src = np.array([2.0, 0.0, 0.0], dtype=np.float32)
    out = vector_algebra([VectorOperation("a", "subtract", 5.0)], _resolver({"a": src}))

    # op and weight of the seed are not applied, nor is it normalised
    np.testing.assert_array_equal(out, src)
    out[0] = 99.0
    assert src[0] == 2.0


def test_weight_none_means_one_and_zero_is_honoured():
    table = _resolver({"a": A, "b": B})
    with_none = vector_algebra([VectorOperation("a", "add"), VectorOperation("b", "add", None)], table)
    np.testing.assert_allclose(with_none, va.add(A, B))

    with_zero = vector_algebra([VectorOperation("a", "add"), VectorOperation("b", "add", 0.0)], table)
    np.testing.assert_allclose(with_zero, A)


def test_unresolved_handle_raises():
    with pytest.raises(HandleNotFoundError) as exc:
        vector_algebra([VectorOperation("a", "add"), VectorOperation("missing", "add")], _resolver({"a": A}))
    assert exc.value.handle == "missing"
    assert "Vector handle not found: missing" in str(exc.value)


def test_empty_and_unknown_operations_raise():
    with pytest.raises(ValueError):
        vector_algebra([], _resolver({}))
    with pytest.raises(ValueError):
        vector_algebra([VectorOperation("a", "multiply")], _resolver({"a": A}))


C = np.array([0.0, 0.0, 1.0], dtype=np.float32)


def test_each_step_is_normalised_in_turn():
    table = _resolver({"a": A, "b": B, "c": C})
    ops = [VectorOperation("a", "add"), VectorOperation("b", "add"), VectorOperation("c", "add", 2.0)]

    out = vector_algebra(ops, table)

    stepwise = va.normalize(va.normalize(A + B) + 2.0 * C)
    np.testing.assert_allclose(out, stepwise, atol=1e-6)
    np.testing.assert_allclose(out, [1 / np.sqrt(10), 1 / np.sqrt(10), 2 / np.sqrt(5)], atol=1e-6)

    summed_once = va.normalize(A + B + 2.0 * C)
    assert not np.allclose(out, summed_once, atol=1e-3)


def test_operation_order_changes_the_result():
    table = _resolver({"a": A, "b": B, "c": C})
    forward = vector_algebra(
        [VectorOperation("a", "add"), VectorOperation("b", "add"), VectorOperation("c", "add", 2.0)],
        table,
    )
    swapped = vector_algebra(
        [VectorOperation("a", "add"), VectorOperation("c", "add", 2.0), VectorOperation("b", "add")],
        table,
    )

    np.testing.assert_allclose(swapped, [1 / np.sqrt(10), 1 / np.sqrt(2), np.sqrt(2 / 5)], atol=1e-6)
    assert not np.allclose(forward, swapped, atol=1e-3)
