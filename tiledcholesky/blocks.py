"""Dense matrix helpers: generation, tiling and binary file storage."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Sequence, Union

import numpy as np

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]
BlockMatrix = List[List[np.ndarray]]

DEFAULT_SEED = 1
_DTYPE = np.float64


def init_matrix(dimension: int, seed: int = DEFAULT_SEED) -> np.ndarray:
    """Return a random symmetric positive definite ``dimension`` x ``dimension`` matrix.

    Entries are drawn uniformly from [0, 1), the matrix is made symmetric by
    adding its transpose, and the diagonal is increased by ``dimension``.
    """
    if dimension < 0:
        raise ValueError(f"dimension must be non-negative, got {dimension}")
    rng = np.random.default_rng(seed)
    matrix = rng.random((dimension, dimension), dtype=_DTYPE)
    matrix = matrix + matrix.T
    matrix[np.diag_indices(dimension)] += float(dimension)
    return matrix


def to_blocks(matrix: np.ndarray, block_size: int) -> BlockMatrix:
    """Split a square matrix into a grid of ``block_size`` x ``block_size`` tiles.

    Only ``dimension // block_size`` tiles per side are produced; trailing
    rows and columns that do not fill a whole tile are ignored. Each tile is
    an independent copy.
    """
    matrix = np.asarray(matrix, dtype=_DTYPE)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"expected a square matrix, got shape {matrix.shape}")
    if block_size <= 0:
        raise ValueError(f"block size must be positive, got {block_size}")
    count = matrix.shape[0] // block_size
    return [
        [
            matrix[
                row * block_size : (row + 1) * block_size,
                col * block_size : (col + 1) * block_size,
            ].copy()
            for col in range(count)
        ]
        for row in range(count)
    ]


def from_blocks(blocks: Sequence[Sequence[np.ndarray]]) -> np.ndarray:
    """Assemble a grid of tiles back into one dense matrix."""
    if not blocks:
        return np.zeros((0, 0), dtype=_DTYPE)
    return np.block([[np.asarray(tile, dtype=_DTYPE) for tile in row] for row in blocks])


def write_matrix(matrix: np.ndarray, path: PathLike) -> None:
    """Write the matrix as raw native-endian float64 values in row-major order."""
    data = np.ascontiguousarray(matrix, dtype=_DTYPE)
    with open(path, "wb") as stream:
        stream.write(data.tobytes())


def read_matrix(path: PathLike, dimension: int) -> np.ndarray:
    """Read a ``dimension`` x ``dimension`` matrix written by :func:`write_matrix`."""
    expected = dimension * dimension
    with open(path, "rb") as stream:
        raw = stream.read(expected * np.dtype(_DTYPE).itemsize)
    values = np.frombuffer(raw, dtype=_DTYPE)
    if values.size < expected:
        raise ValueError(
            f"{os.fspath(path)} holds {values.size} values, expected {expected}"
        )
    return values.reshape(dimension, dimension).copy()


def read_or_generate(path: PathLike, dimension: int) -> np.ndarray:
    """Read the matrix stored at ``path``, or generate one and store it there."""
    if Path(path).is_file():
        logger.info("read matrix file %s", os.fspath(path))
        return read_matrix(path, dimension)
    logger.info("generate matrix %s", os.fspath(path))
    matrix = init_matrix(dimension)
    write_matrix(matrix, path)
    return matrix


def write_if_missing(matrix: np.ndarray, path: PathLike) -> bool:
    """Write the matrix unless ``path`` already exists; return whether it was written."""
    if Path(path).is_file():
        logger.info("file already exists: %s", os.fspath(path))
        return False
    logger.info("write matrix to file %s", os.fspath(path))
    write_matrix(matrix, path)
    return True