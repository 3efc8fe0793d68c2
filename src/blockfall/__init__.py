"""BlockFall: a deterministic falling-block puzzle engine."""

from .game import Action, BlockFallGame, GameConfig, GameSnapshot, GameStatus

__all__ = ["Action", "BlockFallGame", "GameConfig", "GameSnapshot", "GameStatus"]
