"""Tiled Cholesky factorization, sequential and as a parallel task graph."""

from __future__ import annotations

from functools import partial
from typing import List, Optional, Sequence, Set

import numpy as np

from .kernels import gemm, potrf, syrk, trsm
from .taskgraph import Task, TaskGraph


def _check_grid(blocks: Sequence[Sequence[np.ndarray]]) -> int:
    count = len(blocks)
    if any(len(row) != count for row in blocks):
        raise ValueError("block grid must be square")
    return count


def cholesky_sequential(blocks: Sequence[Sequence[np.ndarray]]) -> None:
    """Factorize the tile grid in place, leaving ``U`` in the upper tiles."""
    count = _check_grid(blocks)
    for i in range(count):
        potrf(blocks[i][i])
        for j in range(i + 1, count):
            trsm(blocks[i][i], blocks[i][j])
        for j in range(i + 1, count):
            for k in range(i + 1, j):
                gemm(blocks[i][k], blocks[i][j], blocks[k][j])
            syrk(blocks[i][j], blocks[j][j])


def build_cholesky_graph(
    blocks: Sequence[Sequence[np.ndarray]], graph: TaskGraph
) -> TaskGraph:
    """Add the factorization tasks to ``graph`` and return it.

    Each tile keeps the set of tasks that have written it; a new task depends
    on every writer of each tile it touches.
    """
    count = _check_grid(blocks)
    writers: List[List[Set[Task]]] = [[set() for _ in range(count)] for _ in range(count)]

    def add(action, reads, write):
        dependencies = []
        for row, col in reads:
            dependencies.extend(writers[row][col])
        task = graph.add_task(action, dependencies)
        writers[write[0]][write[1]].add(task)

    for i in range(count):
        add(partial(potrf, blocks[i][i]), [(i, i)], (i, i))
        for j in range(i + 1, count):
            add(partial(trsm, blocks[i][i], blocks[i][j]), [(i, i), (i, j)], (i, j))
        for j in range(i + 1, count):
            for k in range(i + 1, j):
                add(
                    partial(gemm, blocks[i][k], blocks[i][j], blocks[k][j]),
                    [(i, j), (i, k), (k, j)],
                    (k, j),
                )
            add(partial(syrk, blocks[i][j], blocks[j][j]), [(i, j), (j, j)], (j, j))
    return graph


def cholesky_parallel(
    blocks: Sequence[Sequence[np.ndarray]], workers: Optional[int] = None
) -> None:
    """Factorize the tile grid in place by running its task graph on threads."""
    graph = build_cholesky_graph(blocks, TaskGraph())
    graph.run(workers)


def to_lower_triangular(matrix: np.ndarray) -> np.ndarray:
    """Return ``L = U^T`` built from the upper triangle of ``matrix``."""
    matrix = np.asarray(matrix, dtype=np.float64)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"expected a square matrix, got shape {matrix.shape}")
    return np.ascontiguousarray(np.triu(matrix).T)