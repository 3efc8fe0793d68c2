"""Local leaderboard that finished sessions can report to."""

from .store import InvalidScoreEntry, Leaderboard, ScoreEntry
from .recorder import GameOverRecorder

__all__ = ["InvalidScoreEntry", "Leaderboard", "ScoreEntry", "GameOverRecorder"]
