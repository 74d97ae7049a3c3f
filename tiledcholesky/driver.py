"""End-to-end driver for the tiled Cholesky factorization and its command line."""

from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from .blocks import (
    from_blocks,
    init_matrix,
    read_matrix,
    read_or_generate,
    to_blocks,
    write_if_missing,
)
from .factorization import cholesky_parallel, cholesky_sequential, to_lower_triangular
from .verify import matrices_equal, verify_cholesky


@dataclass(frozen=True)
class DriverResult:
    """Outcome of one driver run.

    ``factor`` is the lower-triangular factor of the whole matrix. ``residual``
    is set by a checked sequential run, ``matches_ground_truth`` by a checked
    parallel run; otherwise they are ``None``.
    """

    factor: np.ndarray
    elapsed: float
    residual: Optional[float] = None
    matches_ground_truth: Optional[bool] = None


def _input_path(matrix_path: str, dimension: int) -> str:
    return f"{matrix_path}/input/matrix-{dimension}"


def _output_path(matrix_path: str, dimension: int) -> str:
    return f"{matrix_path}/output/matrix-{dimension}"


def run_driver(
    dimension: int,
    blocks: int,
    matrix_path: str = "",
    read_from_file: bool = False,
    check_result: bool = False,
    parallel: bool = True,
    workers: Optional[int] = None,
) -> DriverResult:
    """Factorize a ``dimension`` x ``dimension`` matrix split into ``blocks`` tiles per side.

    Parallel mode reads the input from ``<matrix_path>/input/matrix-<dimension>``
    when ``read_from_file`` is set and generates it otherwise; with
    ``check_result`` the lower factor is compared exactly with the ground truth
    stored in ``<matrix_path>/output/matrix-<dimension>``.

    Sequential mode reads the input file or generates and stores it,
    stores the factor in the output file unless that file exists, and with
    ``check_result`` computes the residual of the reconstruction.
    ``read_from_file`` has no effect there.
    """
    if dimension <= 0:
        raise ValueError(f"matrix dimension must be positive, got {dimension}")
    if blocks <= 0:
        raise ValueError(f"block count must be positive, got {blocks}")
    block_size = dimension // blocks
    if block_size == 0:
        raise ValueError(
            f"block count {blocks} exceeds matrix dimension {dimension}"
        )

    input_path = _input_path(matrix_path, dimension)
    output_path = _output_path(matrix_path, dimension)

    ground_truth: Optional[np.ndarray] = None
    if parallel:
        if read_from_file:
            matrix = read_matrix(input_path, dimension)
        else:
            matrix = init_matrix(dimension)
        if check_result:
            ground_truth = read_matrix(output_path, dimension)
    else:
        matrix = read_or_generate(input_path, dimension)
        original = matrix.copy() if check_result else None

    tiles = to_blocks(matrix, block_size)

    start = time.perf_counter()
    if parallel:
        cholesky_parallel(tiles, workers)
    else:
        cholesky_sequential(tiles)
    elapsed = time.perf_counter() - start

    covered = blocks * block_size
    plain = matrix.copy()
    plain[:covered, :covered] = from_blocks(tiles)
    factor = to_lower_triangular(plain)

    if parallel:
        matches = (
            matrices_equal(ground_truth, factor) if ground_truth is not None else None
        )
        return DriverResult(factor, elapsed, matches_ground_truth=matches)

    write_if_missing(factor, output_path)
    residual = verify_cholesky(original, factor) if original is not None else None
    return DriverResult(factor, elapsed, residual=residual)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tiledcholesky",
        description="Tiled Cholesky factorization of a random or stored matrix.",
    )
    parser.add_argument("dimension", type=int, help="matrix size")
    parser.add_argument("blocks", type=int, help="tiles per side")
    parser.add_argument("read_from_file", type=int, help="read the input matrix (0/1)")
    parser.add_argument("check_result", type=int, help="check the result (0/1)")
    parser.add_argument("matrix_path", nargs="?", default="", help="matrix directory")
    parser.add_argument(
        "--sequential", action="store_true", help="factorize without the task graph"
    )
    parser.add_argument("--workers", type=int, default=None, help="worker threads")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the driver from command-line arguments and report on standard output."""
    args = _parser().parse_args(argv)
    parallel = not args.sequential
    if parallel:
        print("Start...")
    result = run_driver(
        args.dimension,
        args.blocks,
        matrix_path=args.matrix_path,
        read_from_file=bool(args.read_from_file),
        check_result=bool(args.check_result),
        parallel=parallel,
        workers=args.workers,
    )
    print(f"Cholesky decomposition took {result.elapsed:.4f} seconds")
    if result.residual is not None:
        print(f"Residual is: {result.residual:f}")
    if result.matches_ground_truth is False:
        print(
            "factorization failed. Actual matrix and ground truth are not equal",
            file=sys.stderr,
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())