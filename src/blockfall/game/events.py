from __future__ import annotations

from typing import Dict

from blinker import Signal


class EventBus:
    """Named blinker signals; handlers are called as ``fn(sender, **payload)``."""

    def __init__(self) -> None:
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn) -> None:
        sig = self._signals.setdefault(name, Signal(name))
        # Strong reference so bound methods of short-lived owners still fire.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn) -> None:
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, sender=None, **payload) -> None:
        sig = self._signals.get(name)
        if sig:
            sig.send(sender if sender is not None else self, **payload)


# Lifecycle
EVENT_GAME_STARTED = "game_started"        # payload: none
EVENT_GAME_RESET = "game_reset"            # payload: none
EVENT_PAUSE_TOGGLED = "pause_toggled"      # payload: paused=bool
EVENT_GAME_OVER = "game_over"              # payload: score=int, lines=int, level=int

# Pieces
EVENT_PIECE_SPAWNED = "piece_spawned"      # payload: kind=TetrominoType
EVENT_PIECE_LOCKED = "piece_locked"        # payload: kind=TetrominoType, x=int, y=int

# Scoring
EVENT_LINES_CLEARED = "lines_cleared"      # payload: count=int, rows=list[int]
EVENT_SCORE_CHANGED = "score_changed"      # payload: score=int, delta=int
EVENT_LEVEL_CHANGED = "level_changed"      # payload: level=int, drop_interval=int
