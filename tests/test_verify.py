import numpy as np
import pytest

from tiledcholesky.blocks import init_matrix
from tiledcholesky.verify import matrices_equal, verify_cholesky


def test_exact_factor_has_tiny_residual():
    original = init_matrix(16)
    factor = np.linalg.cholesky(original)
    assert verify_cholesky(original, factor) < 1e-9 * np.linalg.norm(original)


def test_wrong_factor_has_large_residual():
    original = init_matrix(8)
    factor = np.linalg.cholesky(original) * 1.5
    assert verify_cholesky(original, factor) > 1.0


def test_identity_factor_of_identity_is_zero():
    identity = np.eye(5)
    assert verify_cholesky(identity, identity) == 0.0


def test_verify_rejects_shape_mismatch():
    with pytest.raises(ValueError):
        verify_cholesky(np.eye(3), np.eye(4))


def test_verify_rejects_non_square():
    with pytest.raises(ValueError):
        verify_cholesky(np.zeros((2, 3)), np.zeros((2, 3)))


def test_equal_matrices_compare_equal():
    matrix = init_matrix(6)
    assert matrices_equal(matrix, matrix.copy()) is True


def test_upper_triangle_differences_are_ignored():
    expected = np.tril(init_matrix(6))
    actual = expected.copy()
    actual[0, 5] = 42.0
    assert matrices_equal(expected, actual) is True


def test_lower_triangle_difference_is_detected():
    expected = init_matrix(6)
    actual = expected.copy()
    actual[5, 0] += 1e-12
    assert matrices_equal(expected, actual) is False


def test_diagonal_difference_is_detected():
    expected = init_matrix(4)
    actual = expected.copy()
    actual[2, 2] = 0.0
    assert matrices_equal(expected, actual) is False


def test_matrices_equal_rejects_shape_mismatch():
    with pytest.raises(ValueError):
        matrices_equal(np.eye(2), np.eye(3))