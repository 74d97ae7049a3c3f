import numpy as np
import pytest

from tiledcholesky.blocks import (
    from_blocks,
    init_matrix,
    read_matrix,
    read_or_generate,
    to_blocks,
    write_if_missing,
    write_matrix,
)


def test_init_matrix_shape_and_symmetry():
    m = init_matrix(12, 3)
    assert m.shape == (12, 12)
    assert np.array_equal(m, m.T)


def test_init_matrix_value_ranges():
    n = 10
    m = init_matrix(n, 5)
    assert np.diag(m).min() >= n
    assert np.diag(m).max() < n + 2
    assert m[~np.eye(n, dtype=bool)].min() >= 0
    assert m[~np.eye(n, dtype=bool)].max() < 2


def test_init_matrix_positive_definite():
    m = init_matrix(16, 7)
    assert np.linalg.eigvalsh(m).min() > 0
    factor = np.linalg.cholesky(m)
    assert np.allclose(factor @ factor.T, m)


def test_init_matrix_deterministic_per_seed():
    assert np.array_equal(init_matrix(8, 42), init_matrix(8, 42))
    assert not np.array_equal(init_matrix(8, 42), init_matrix(8, 43))


def test_init_matrix_rejects_negative_dimension():
    with pytest.raises(ValueError):
        init_matrix(-1, 1)


def test_blocks_round_trip():
    m = init_matrix(12, 1)
    grid = to_blocks(m, 4)
    assert len(grid) == 3 and all(len(row) == 3 for row in grid)
    assert all(tile.shape == (4, 4) for row in grid for tile in row)
    assert np.array_equal(from_blocks(grid), m)


def test_block_contents_match_slices():
    m = np.arange(36, dtype=float).reshape(6, 6)
    grid = to_blocks(m, 3)
    assert np.array_equal(grid[1][0], m[3:6, 0:3])
    assert np.array_equal(grid[0][1], m[0:3, 3:6])


def test_blocks_are_copies():
    m = np.arange(16, dtype=float).reshape(4, 4)
    grid = to_blocks(m, 2)
    grid[0][0][0, 0] = -99.0
    assert m[0, 0] == 0.0


def test_remainder_is_ignored():
    m = np.arange(49, dtype=float).reshape(7, 7)
    grid = to_blocks(m, 3)
    assert len(grid) == 2
    assert np.array_equal(from_blocks(grid), m[:6, :6])


def test_to_blocks_rejects_bad_input():
    with pytest.raises(ValueError):
        to_blocks(np.zeros((4, 4)), 0)
    with pytest.raises(ValueError):
        to_blocks(np.zeros((4, 3)), 2)


def test_from_blocks_empty():
    assert from_blocks([]).shape == (0, 0)


def test_write_read_round_trip(tmp_path):
    m = init_matrix(9, 2)
    path = tmp_path / "matrix-9"
    write_matrix(m, path)
    assert path.stat().st_size == 9 * 9 * 8
    assert np.array_equal(read_matrix(path, 9), m)


def test_read_short_file_raises(tmp_path):
    path = tmp_path / "short"
    write_matrix(np.ones((2, 2)), path)
    with pytest.raises(ValueError):
        read_matrix(path, 3)


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_matrix(tmp_path / "absent", 2)


def test_read_or_generate_creates_then_reads(tmp_path):
    path = tmp_path / "matrix-6"
    first = read_or_generate(path, 6)
    assert path.is_file()
    assert np.array_equal(first, first.T)
    again = read_or_generate(path, 6)
    assert np.array_equal(first, again)


def test_read_or_generate_prefers_existing(tmp_path):
    path = tmp_path / "matrix-3"
    stored = np.arange(9, dtype=float).reshape(3, 3)
    write_matrix(stored, path)
    assert np.array_equal(read_or_generate(path, 3), stored)


def test_write_if_missing(tmp_path):
    path = tmp_path / "out"
    first = np.eye(3)
    assert write_if_missing(first, path) is True
    assert write_if_missing(np.zeros((3, 3)), path) is False
    assert np.array_equal(read_matrix(path, 3), first)