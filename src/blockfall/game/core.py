from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .events import (
    EVENT_GAME_OVER,
    EVENT_GAME_RESET,
    EVENT_GAME_STARTED,
    EVENT_LEVEL_CHANGED,
    EVENT_LINES_CLEARED,
    EVENT_PAUSE_TOGGLED,
    EVENT_PIECE_LOCKED,
    EVENT_PIECE_SPAWNED,
    EVENT_SCORE_CHANGED,
    EventBus,
)
from .grid import GameGrid
from .pieces import Piece, PieceGenerator, TetrominoType
from .rules import ScoringRules

logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5


class GameStatus(Enum):
    IDLE = "idle"
    FALLING = "falling"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_y: int = 0


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a session for renderers and stats displays."""

    board: np.ndarray
    piece_kind: Optional[TetrominoType]
    piece_blocks: Optional[np.ndarray]
    piece_x: int
    piece_y: int
    piece_color: Optional[str]
    ghost_y: int
    next_kind: Optional[TetrominoType]
    next_blocks: Optional[np.ndarray]
    next_color: Optional[str]
    score: int
    lines: int
    level: int
    drop_interval: int
    game_over: bool
    paused: bool


class BlockFallGame:
    """Falling-block engine: one board, one active piece, one session.

    All mutators are synchronous. Player actions return True when the
    transition was accepted and False when it was rejected or not allowed
    (no piece, paused, game over).
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.bus = bus or EventBus()
        self.generator = PieceGenerator(self.config.width, self.config.spawn_y, self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.current_piece: Optional[Piece] = None
        self.next_piece: Piece = self.generator.next_piece()
        self._pending_events: List[Tuple[str, Dict[str, Any]]] = []
        self._init_session()

    def _init_session(self) -> None:
        self.score = 0
        self.lines = 0
        self.level = 1
        self.drop_interval = self.rules.drop_interval_for_level(1)
        self.drop_counter = 0.0
        self.game_over = False
        self.paused = False

    # Lifecycle ---------------------------------------------------------

    def start(self) -> None:
        """Spawn a piece if none is falling and enable automatic descent."""
        if self.game_over:
            return
        self.paused = False
        self.drop_counter = 0.0
        self._queue(EVENT_GAME_STARTED)
        if self.current_piece is None:
            self._spawn_piece()
        self._flush_events()

    def pause(self) -> None:
        """Toggle the paused flag. Ignored when idle or after game over."""
        if self.current_piece is None or self.game_over:
            return
        self.paused = not self.paused
        self._queue(EVENT_PAUSE_TOGGLED, paused=self.paused)
        self._flush_events()

    def resume(self) -> None:
        if self.paused:
            self.pause()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.generator.seed(seed)
        self.grid.reset()
        self._init_session()
        self.current_piece = None
        self.next_piece = self.generator.next_piece()
        self._queue(EVENT_GAME_RESET)
        self._flush_events()

    @property
    def status(self) -> GameStatus:
        if self.game_over:
            return GameStatus.GAME_OVER
        if self.current_piece is None:
            return GameStatus.IDLE
        if self.paused:
            return GameStatus.PAUSED
        return GameStatus.FALLING

    # Player actions ----------------------------------------------------

    def _can_act(self) -> bool:
        return self.current_piece is not None and not self.game_over and not self.paused

    def _try_shift(self, dx: int, dy: int) -> bool:
        piece = self.current_piece
        assert piece is not None
        piece.x += dx
        piece.y += dy
        if self.grid.collides(piece):
            piece.x -= dx
            piece.y -= dy
            return False
        return True

    def move_left(self) -> bool:
        if not self._can_act():
            return False
        return self._try_shift(-1, 0)

    def move_right(self) -> bool:
        if not self._can_act():
            return False
        return self._try_shift(1, 0)

    def soft_drop(self) -> bool:
        """Move down one row, or lock in place if the row below is blocked."""
        if not self._can_act():
            return False
        if not self._try_shift(0, 1):
            self._lock_piece()
            self._flush_events()
        return True

    def hard_drop(self) -> bool:
        if not self._can_act():
            return False
        piece = self.current_piece
        assert piece is not None
        while not self.grid.collides(piece):
            piece.y += 1
        piece.y -= 1
        self._lock_piece()
        self._flush_events()
        return True

    def rotate(self) -> bool:
        if not self._can_act():
            return False
        piece = self.current_piece
        assert piece is not None
        original = piece.blocks
        piece.blocks = piece.rotated_blocks()
        if self.grid.collides(piece):
            piece.blocks = original
            return False
        return True

    def ghost_y(self) -> int:
        """Lowest legal row for the active piece; the piece itself is not moved."""
        piece = self.current_piece
        if piece is None:
            return 0
        original_y = piece.y
        ghost = original_y
        try:
            while True:
                piece.y += 1
                if self.grid.collides(piece):
                    return ghost
                ghost = piece.y
        finally:
            piece.y = original_y

    # Clock -------------------------------------------------------------

    def update(self, delta_ms: float) -> bool:
        """Advance the drop clock; returns True if an automatic drop happened."""
        if self.game_over or self.paused or self.current_piece is None:
            return False
        self.drop_counter += delta_ms
        if self.drop_counter > self.drop_interval:
            self.drop_counter = 0.0
            self.soft_drop()
            return True
        return False

    # Internals ---------------------------------------------------------

    def _queue(self, name: str, **payload: Any) -> None:
        self._pending_events.append((name, payload))

    def _flush_events(self) -> None:
        """Deliver queued events now that the transition has finished.

        Every queued event is delivered even if a subscriber raises; the first
        error is re-raised once the queue is empty.
        """
        pending, self._pending_events = self._pending_events, []
        error: Optional[Exception] = None
        for name, payload in pending:
            try:
                self.bus.emit(name, sender=self, **payload)
            except Exception as exc:
                logger.exception("subscriber for %s failed", name)
                if error is None:
                    error = exc
        if error is not None:
            raise error

    def _spawn_piece(self) -> None:
        self.current_piece = self.next_piece
        self.next_piece = self.generator.next_piece()
        logger.debug("spawned %s at (%d, %d)", self.current_piece.kind.name, self.current_piece.x, self.current_piece.y)
        self._queue(EVENT_PIECE_SPAWNED, kind=self.current_piece.kind)
        # A fresh piece that already overlaps the stack ends the session.
        if self.grid.collides(self.current_piece):
            self._end_game()

    def _end_game(self) -> None:
        self.game_over = True
        logger.debug("game over: score=%d lines=%d level=%d", self.score, self.lines, self.level)
        self._queue(EVENT_GAME_OVER, score=self.score, lines=self.lines, level=self.level)

    def _lock_piece(self) -> int:
        piece = self.current_piece
        assert piece is not None
        self.grid.merge(piece)
        logger.debug("locked %s at (%d, %d)", piece.kind.name, piece.x, piece.y)
        self._queue(EVENT_PIECE_LOCKED, kind=piece.kind, x=piece.x, y=piece.y)
        rows = self.grid.clear_full_rows()
        cleared = len(rows)
        if cleared:
            self._apply_clear(cleared, rows)
        self._spawn_piece()
        return cleared

    def _apply_clear(self, cleared: int, rows) -> None:
        delta = self.rules.score_for_lines(cleared, self.level)
        self.score += delta
        self.lines += cleared
        logger.debug("cleared %d line(s) for %d points", cleared, delta)
        self._queue(EVENT_LINES_CLEARED, count=cleared, rows=rows)
        self._queue(EVENT_SCORE_CHANGED, score=self.score, delta=delta)
        new_level = self.rules.level_for_lines(self.lines)
        if new_level != self.level:
            self.level = new_level
            self.drop_interval = self.rules.drop_interval_for_level(new_level)
            self._queue(EVENT_LEVEL_CHANGED, level=self.level, drop_interval=self.drop_interval)

    # Views -------------------------------------------------------------

    def step(self, action: Action) -> Tuple[np.ndarray, int, bool, dict]:
        if self.game_over:
            return self.get_state(), 0, True, {}

        score_before = self.score
        if action == Action.LEFT:
            self.move_left()
        elif action == Action.RIGHT:
            self.move_right()
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.SOFT_DROP:
            self.soft_drop()
        elif action == Action.HARD_DROP:
            self.hard_drop()
        elif action == Action.NONE:
            pass

        info = {
            "score": self.score,
            "lines": self.lines,
            "level": self.level,
        }
        return self.get_state(), self.score - score_before, self.game_over, info

    def get_state(self) -> np.ndarray:
        """Board copy with the falling piece stamped in as ``-kind``."""
        state = self.grid.clone_state()
        piece = self.current_piece
        if piece is None or self.game_over:
            return state
        for x, y in piece.cells():
            if y >= 0:
                state[y, x] = -int(piece.kind)
        return state

    def snapshot(self) -> GameSnapshot:
        piece = self.current_piece
        nxt = self.next_piece
        return GameSnapshot(
            board=self.grid.clone_state(),
            piece_kind=piece.kind if piece else None,
            piece_blocks=piece.blocks.copy() if piece else None,
            piece_x=piece.x if piece else 0,
            piece_y=piece.y if piece else 0,
            piece_color=piece.color if piece else None,
            ghost_y=self.ghost_y(),
            next_kind=nxt.kind if nxt else None,
            next_blocks=nxt.blocks.copy() if nxt else None,
            next_color=nxt.color if nxt else None,
            score=self.score,
            lines=self.lines,
            level=self.level,
            drop_interval=self.drop_interval,
            game_over=self.game_over,
            paused=self.paused,
        )
