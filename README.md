# tiledcholesky

Tiled (block) Cholesky factorization of symmetric positive-definite matrices.

The matrix is split into square tiles, and the factor `U` with `A = U^T U` is
computed in place in the upper tiles by four tile kernels
(`tiledcholesky.kernels`):

- `potrf(a)` – factorizes the upper triangle of a diagonal tile
- `trsm(a, b)` – overwrites `b` with `U^-T b`
- `gemm(a, b, c)` – updates `c` to `c - a^T b`
- `syrk(a, b)` – updates the upper triangle of `b` to that of `b - a^T a`

A diagonal tile that is not positive definite makes `potrf` raise
`FactorizationError`, which carries the LAPACK `info` value.

The kernels run either one after another (`cholesky_sequential`) or as a
dependency-driven task graph on a pool of worker threads (`cholesky_parallel`).

## Installation

```
pip install .
```

With test dependencies:

```
pip install ".[test]"
```

## Command line

```
tiledcholesky <dimension> <blocks> <read_from_file> <check_result> [matrix_path] [--sequential] [--workers N]
```

- `dimension` – size of the square matrix
- `blocks` – tiles per side; the tile size is `dimension // blocks`
- `read_from_file` – `1` to read the input matrix, `0` to generate it
- `check_result` – `1` to check the result, `0` to skip the check
- `matrix_path` – directory holding `input/matrix-<dimension>` and
  `output/matrix-<dimension>`, raw native-endian float64 values in row-major
  order (default: empty, so the paths start at `/input` and `/output`)
- `--sequential` – run the kernels one after another instead of as a task graph
- `--workers N` – number of worker threads for the task graph (default: the
  number of CPUs)

In the default task-graph mode the input is read from the input file when
`read_from_file` is `1` and generated otherwise; with `check_result` set the
lower-triangular factor is compared exactly with the ground truth stored in
the output file, and a mismatch is reported on standard error.

In `--sequential` mode `read_from_file` has no effect: the input file is read
if it exists, otherwise a matrix is generated and written there. The factor is
written to the output file unless that file already exists, and with
`check_result` set the residual `||A - L L^T||` (Frobenius norm) is printed.

The elapsed factorization time is always printed.

## Library use

```python
from tiledcholesky.blocks import init_matrix, to_blocks, from_blocks
from tiledcholesky.factorization import cholesky_parallel, to_lower_triangular
from tiledcholesky.verify import verify_cholesky

a = init_matrix(256)
tiles = to_blocks(a, 64)
cholesky_parallel(tiles, workers=4)
factor = to_lower_triangular(from_blocks(tiles))
print(verify_cholesky(a, factor))
```

`run_driver` in `tiledcholesky.driver` performs the whole sequence — loading or
generating the matrix, factorizing, checking — and returns a `DriverResult`
with the lower factor, the elapsed time and, depending on the mode, the
residual or the ground-truth comparison.

Other pieces:

- `tiledcholesky.blocks` – `init_matrix`, `to_blocks`, `from_blocks`,
  `write_matrix`, `read_matrix`, `read_or_generate`, `write_if_missing`
- `tiledcholesky.taskgraph` – `Task` and `TaskGraph` (`add_task`, `run`);
  the first exception raised by a task is re-raised by `run`
- `tiledcholesky.factorization` – `build_cholesky_graph`,
  `cholesky_sequential`, `cholesky_parallel`, `to_lower_triangular`
- `tiledcholesky.verify` – `verify_cholesky`, `matrices_equal`

## Limits

Execution is on threads within one process only; there is no distributed or
multi-process mode. When `dimension` is not a multiple of `blocks`, the rows
and columns beyond the last whole tile are not factorized.