from __future__ import annotations

from typing import List

import numpy as np

from .pieces import Piece


class GameGrid:
    """Fixed ROWS x COLS playfield.

    Empty cells hold 0; occupied cells hold a positive value.
    A filled cell holds the tetromino id of the piece that locked there,
    which doubles as its colour code (see ``pieces.COLORS``).
    Row 0 is the top of the visible board.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def collides(self, piece: Piece) -> bool:
        """True if any filled cell of ``piece`` is out of bounds or overlaps the stack.

        Cells above the board (y < 0) are only checked against the side walls,
        so a piece may hang partly off the top without colliding.
        """
        for x, y in piece.cells():
            if x < 0 or x >= self.width:
                return True
            if y >= self.height:
                return True
            if y >= 0 and self.grid[y, x] != 0:
                return True
        return False

    def merge(self, piece: Piece) -> None:
        """Write ``piece`` into the grid; cells above row 0 are dropped."""
        value = int(piece.kind)
        for x, y in piece.cells():
            if y >= 0:
                self.grid[y, x] = value

    def is_full_row(self, row: int) -> bool:
        return bool(np.all(self.grid[row] != 0))

    def clear_full_rows(self) -> List[int]:
        """Remove every full row and add as many empty rows at the top.

        Returns the indices (pre-clear) of the removed rows, bottom first.
        """
        full_rows = np.where(np.all(self.grid != 0, axis=1))[0]
        if full_rows.size == 0:
            return []
        num = int(full_rows.size)
        remaining = np.delete(self.grid, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, remaining))
        return [int(r) for r in full_rows[::-1]]

    def column_heights(self) -> List[int]:
        heights: List[int] = []
        for x in range(self.width):
            filled = np.flatnonzero(self.grid[:, x])
            heights.append(0 if filled.size == 0 else self.height - int(filled[0]))
        return heights

    def get_max_height(self) -> int:
        return max(self.column_heights(), default=0)

    def get_bumpiness(self) -> int:
        heights = self.column_heights()
        return sum(abs(a - b) for a, b in zip(heights, heights[1:]))

    def count_holes(self) -> int:
        """Empty cells with a filled cell somewhere above them in the same column."""
        filled = int(np.count_nonzero(self.grid))
        return sum(self.column_heights()) - filled

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
