"""Checks on the result of a Cholesky factorization."""

from __future__ import annotations

import math

import numpy as np


def _as_square(matrix: np.ndarray, name: str) -> np.ndarray:
    array = np.asarray(matrix, dtype=np.float64)
    if array.ndim != 2 or array.shape[0] != array.shape[1]:
        raise ValueError(f"{name} must be a square matrix, got shape {array.shape}")
    return array


def verify_cholesky(original: np.ndarray, factor: np.ndarray) -> float:
    """Return the Frobenius norm of ``original - factor @ factor.T``.

    ``factor`` is the lower-triangular factor ``L`` of ``original = L L^T``.
    """
    original = _as_square(original, "original")
    factor = _as_square(factor, "factor")
    if original.shape != factor.shape:
        raise ValueError(
            f"shape mismatch: original {original.shape}, factor {factor.shape}"
        )
    reconstructed = factor @ factor.T
    difference = original - reconstructed
    return math.sqrt(float(np.sum(difference * difference)))


def matrices_equal(expected: np.ndarray, actual: np.ndarray) -> bool:
    """Return whether the lower triangles (diagonal included) are exactly equal."""
    expected = _as_square(expected, "expected")
    actual = _as_square(actual, "actual")
    if expected.shape != actual.shape:
        raise ValueError(
            f"shape mismatch: expected {expected.shape}, actual {actual.shape}"
        )
    lower = np.tril_indices(expected.shape[0])
    return bool(np.array_equal(expected[lower], actual[lower]))