from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


def _template(rows: List[List[int]]) -> Shape:
    shape = np.array(rows, dtype=np.int8)
    shape.flags.writeable = False
    return shape


BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _template([[1, 1, 1, 1]]),
    TetrominoType.O: _template([[1, 1], [1, 1]]),
    TetrominoType.T: _template([[0, 1, 0], [1, 1, 1]]),
    TetrominoType.S: _template([[0, 1, 1], [1, 1, 0]]),
    TetrominoType.Z: _template([[1, 1, 0], [0, 1, 1]]),
    TetrominoType.J: _template([[1, 0, 0], [1, 1, 1]]),
    TetrominoType.L: _template([[0, 0, 1], [1, 1, 1]]),
}

COLORS: Dict[TetrominoType, str] = {
    TetrominoType.I: "#00f0f0",
    TetrominoType.O: "#f0f000",
    TetrominoType.T: "#a000f0",
    TetrominoType.S: "#00f000",
    TetrominoType.Z: "#f00000",
    TetrominoType.J: "#0000f0",
    TetrominoType.L: "#f0a000",
}


def rotate_matrix(shape: Shape) -> Shape:
    """Return a clockwise quarter turn of ``shape`` as a new array.

    Cell ``(r, c)`` of the result is cell ``(rows - 1 - c, r)`` of the input.
    """
    return np.rot90(shape, 1, axes=(1, 0)).copy()


@dataclass
class Piece:
    """A falling piece: its own copy of a template plus a board offset.

    ``y`` may be negative while the piece sits partly above the board.
    """

    kind: TetrominoType
    blocks: Shape
    x: int = 0
    y: int = 0

    @property
    def color(self) -> str:
        return COLORS[self.kind]

    @property
    def width(self) -> int:
        return int(self.blocks.shape[1])

    @property
    def height(self) -> int:
        return int(self.blocks.shape[0])

    def cells(self) -> List[Tuple[int, int]]:
        """Absolute (x, y) board coordinates of every filled cell."""
        return self.cells_at(self.x, self.y)

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        h, w = self.blocks.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if self.blocks[dy, dx]:
                    cells.append((origin_x + dx, origin_y + dy))
        return cells

    def rotated_blocks(self) -> Shape:
        return rotate_matrix(self.blocks)


class PieceGenerator:
    """Uniform, independent draws over the seven tetrominoes.

    No bag: every call samples afresh, so droughts of one shape can happen.
    """

    def __init__(self, columns: int, spawn_y: int = 0, seed: Optional[int] = None) -> None:
        self.columns = int(columns)
        self.spawn_y = int(spawn_y)
        self.rng = random.Random(seed)

    def seed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)

    def create(self, kind: TetrominoType) -> Piece:
        blocks = np.array(BASE_SHAPES[kind], dtype=np.int8, copy=True)
        x = (self.columns - blocks.shape[1]) // 2
        return Piece(kind=kind, blocks=blocks, x=x, y=self.spawn_y)

    def next_piece(self) -> Piece:
        kind = self.rng.choice(list(TetrominoType))
        return self.create(kind)


def color_rgb(kind: int) -> Tuple[int, int, int]:
    """RGB triple for a tetromino id (negative overlay ids are accepted)."""
    code = COLORS[TetrominoType(abs(int(kind)))].lstrip("#")
    return int(code[0:2], 16), int(code[2:4], 16), int(code[4:6], 16)
