"""In-place tile kernels for the upper-triangular tiled Cholesky factorization.

Tiles are row-major; the factor ``U`` with ``A = U^T U`` is kept in the upper
triangle of the diagonal tiles and in the tiles above the diagonal.
"""

from __future__ import annotations

import numpy as np
from scipy.linalg import lapack, solve_triangular


class FactorizationError(ArithmeticError):
    """Raised when a diagonal tile cannot be factorized."""

    def __init__(self, info: int) -> None:
        super().__init__(f"tile factorization failed: {info}")
        self.info = info


def _check_square(tile: np.ndarray, name: str) -> None:
    if tile.ndim != 2 or tile.shape[0] != tile.shape[1]:
        raise ValueError(f"{name} must be a square tile, got shape {tile.shape}")


def potrf(a: np.ndarray) -> None:
    """Factor the upper triangle of ``a`` in place as ``U`` with ``a = U^T U``.

    The strictly lower triangle is left untouched.
    """
    _check_square(a, "a")
    symmetric = np.triu(a) + np.triu(a, 1).T
    factor, info = lapack.dpotrf(symmetric, lower=0)
    if info != 0:
        raise FactorizationError(int(info))
    upper = np.triu_indices(a.shape[0])
    a[upper] = factor[upper]


def trsm(a: np.ndarray, b: np.ndarray) -> None:
    """Overwrite ``b`` with ``U^-T b`` where ``U`` is the upper triangle of ``a``."""
    _check_square(a, "a")
    b[...] = solve_triangular(a, b, trans="T", lower=False)


def gemm(a: np.ndarray, b: np.ndarray, c: np.ndarray) -> None:
    """Update ``c`` in place to ``c - a^T b``."""
    c -= a.T @ b


def syrk(a: np.ndarray, b: np.ndarray) -> None:
    """Update the upper triangle of ``b`` in place to that of ``b - a^T a``."""
    _check_square(b, "b")
    updated = b - a.T @ a
    upper = np.triu_indices(b.shape[0])
    b[upper] = updated[upper]