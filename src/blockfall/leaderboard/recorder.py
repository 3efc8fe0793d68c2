from __future__ import annotations

import logging

from blockfall.game.events import EVENT_GAME_OVER, EventBus

from .store import InvalidScoreEntry, Leaderboard

logger = logging.getLogger(__name__)


class GameOverRecorder:
    """Submits the final score of every finished session to a leaderboard."""

    def __init__(self, bus: EventBus, leaderboard: Leaderboard, name: str) -> None:
        self.leaderboard = leaderboard
        self.name = name
        self.last_entry = None
        bus.subscribe(EVENT_GAME_OVER, self._on_game_over)

    def _on_game_over(self, sender, **payload) -> None:
        # Persistence problems must never reach the engine.
        try:
            self.last_entry = self.leaderboard.submit(self.name, payload.get("score", 0))
        except (InvalidScoreEntry, OSError) as exc:
            logger.warning("could not record score for %r: %s", self.name, exc)
