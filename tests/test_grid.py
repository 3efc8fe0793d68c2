import numpy as np
import pytest

from blockfall.game import GameGrid, PieceGenerator, TetrominoType


def _piece(kind, x, y):
    piece = PieceGenerator(columns=10).create(kind)
    piece.x, piece.y = x, y
    return piece


def test_rejects_non_positive_dimensions():
    with pytest.raises(ValueError):
        GameGrid(0, 20)


def test_side_walls_and_floor_collide():
    grid = GameGrid(10, 20)
    assert not grid.collides(_piece(TetrominoType.I, 0, 0))
    assert grid.collides(_piece(TetrominoType.I, -1, 0))
    assert not grid.collides(_piece(TetrominoType.I, 6, 0))
    assert grid.collides(_piece(TetrominoType.I, 7, 0))
    assert not grid.collides(_piece(TetrominoType.O, 4, 18))
    assert grid.collides(_piece(TetrominoType.O, 4, 19))


def test_occupied_cell_collides():
    grid = GameGrid(10, 20)
    grid.grid[10, 5] = 1
    assert grid.collides(_piece(TetrominoType.O, 4, 9))
    assert not grid.collides(_piece(TetrominoType.O, 6, 9))


def test_cells_above_board_ignore_occupancy():
    grid = GameGrid(10, 20)
    grid.grid[19, :] = 2
    # Row -1 must not be read as the bottom row.
    assert not grid.collides(_piece(TetrominoType.I, 3, -1))
    assert grid.collides(_piece(TetrominoType.I, -1, -1))


def test_merge_writes_visible_cells_only():
    grid = GameGrid(10, 20)
    piece = _piece(TetrominoType.T, 3, -1)
    grid.merge(piece)
    assert grid.grid[0].tolist() == [0, 0, 0, 3, 3, 3, 0, 0, 0, 0]
    assert int(np.count_nonzero(grid.grid)) == 3
    assert not grid.grid[19].any()


def test_clear_full_rows_keeps_height_and_order():
    grid = GameGrid(4, 5)
    grid.grid[:] = [
        [0, 0, 0, 0],
        [1, 0, 0, 0],
        [2, 2, 2, 2],
        [0, 3, 0, 0],
        [4, 4, 4, 4],
    ]
    rows = grid.clear_full_rows()
    assert rows == [4, 2]
    assert grid.grid.shape == (5, 4)
    assert grid.grid.tolist() == [
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [1, 0, 0, 0],
        [0, 3, 0, 0],
    ]


def test_adjacent_full_rows_all_clear():
    grid = GameGrid(10, 20)
    grid.grid[16:20, :] = 5
    grid.grid[15, 0] = 1
    assert len(grid.clear_full_rows()) == 4
    assert grid.grid[19, 0] == 1
    assert int(np.count_nonzero(grid.grid)) == 1


def test_no_full_rows_is_noop():
    grid = GameGrid(10, 20)
    grid.grid[19, :9] = 1
    before = grid.clone_state()
    assert grid.clear_full_rows() == []
    assert np.array_equal(grid.grid, before)
    assert not grid.is_full_row(19)


def test_board_features():
    grid = GameGrid(4, 4)
    grid.grid[:] = [
        [0, 0, 0, 0],
        [0, 1, 0, 0],
        [0, 0, 0, 0],
        [1, 1, 0, 1],
    ]
    assert grid.get_max_height() == 3
    assert grid.count_holes() == 1
    assert grid.column_heights() == [1, 3, 0, 1]
    assert grid.get_bumpiness() == 2 + 3 + 1
