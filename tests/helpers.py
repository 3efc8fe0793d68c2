from __future__ import annotations

from typing import Iterable

from blockfall.game import BlockFallGame, Piece, TetrominoType


def fill_row(game: BlockFallGame, row: int, skip: Iterable[int] = (), value: int = int(TetrominoType.O)) -> None:
    """Occupy every cell of ``row`` except the columns in ``skip``."""
    skipped = set(skip)
    for x in range(game.grid.width):
        if x not in skipped:
            game.grid.grid[row, x] = value


def force_piece(game: BlockFallGame, kind: TetrominoType, x: int | None = None, y: int | None = None) -> Piece:
    """Replace the active piece with a fresh ``kind`` piece, starting the game if needed."""
    if game.current_piece is None:
        game.start()
    piece = game.generator.create(kind)
    if x is not None:
        piece.x = x
    if y is not None:
        piece.y = y
    game.current_piece = piece
    return piece
