from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from blockfall.game import GameSnapshot, color_rgb

BACKGROUND = (10, 10, 14)
EMPTY_CELL = (20, 20, 26)
TEXT = (230, 230, 230)


class Renderer:
    """Draws a ``GameSnapshot``: board, ghost, active piece, preview and stats."""

    def __init__(self, cell_size: int = 28, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, rows: int, cols: int) -> Tuple[int, int]:
        width = self.margin * 3 + (cols + self.panel_cells) * self.cell_size
        height = self.margin * 2 + rows * self.cell_size
        return width, height

    def _font_obj(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        return self._font

    def _cell_rect(self, x: int, y: int, origin: Tuple[int, int]) -> pygame.Rect:
        ox, oy = origin
        return pygame.Rect(
            ox + x * self.cell_size,
            oy + y * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _draw_blocks(self, screen: pygame.Surface, blocks: np.ndarray, x: int, y: int,
                     color: Tuple[int, int, int], origin: Tuple[int, int], width: int = 0) -> None:
        h, w = blocks.shape
        for dy in range(h):
            for dx in range(w):
                if blocks[dy, dx] and y + dy >= 0:
                    pygame.draw.rect(screen, color, self._cell_rect(x + dx, y + dy, origin), width)

    def draw(self, screen: pygame.Surface, snap: GameSnapshot) -> None:
        screen.fill(BACKGROUND)
        origin = (self.margin, self.margin)
        rows, cols = snap.board.shape
        for y in range(rows):
            for x in range(cols):
                v = int(snap.board[y, x])
                color = color_rgb(v) if v else EMPTY_CELL
                pygame.draw.rect(screen, color, self._cell_rect(x, y, origin))

        if snap.piece_blocks is not None and snap.piece_kind is not None and not snap.game_over:
            color = color_rgb(snap.piece_kind)
            self._draw_blocks(screen, snap.piece_blocks, snap.piece_x, snap.ghost_y, color, origin, width=2)
            self._draw_blocks(screen, snap.piece_blocks, snap.piece_x, snap.piece_y, color, origin)

        panel = (self.margin * 2 + cols * self.cell_size, self.margin)
        font = self._font_obj()
        screen.blit(font.render("Next", True, TEXT), panel)
        if snap.next_blocks is not None and snap.next_kind is not None:
            preview = (panel[0], panel[1] + 24)
            self._draw_blocks(screen, snap.next_blocks, 0, 0, color_rgb(snap.next_kind), preview)

        info_lines = [
            f"Score: {snap.score}",
            f"Level: {snap.level}",
            f"Lines: {snap.lines}",
        ]
        if snap.paused:
            info_lines.append("PAUSED")
        if snap.game_over:
            info_lines.append("GAME OVER")
        y_text = panel[1] + 24 + 3 * self.cell_size
        for i, txt in enumerate(info_lines):
            screen.blit(font.render(txt, True, TEXT), (panel[0], y_text + i * 22))
        pygame.display.flip()
