"""Game module for BlockFall.

Exports the core game engine and supporting classes:
- GameGrid: Board occupancy, collision, merge and line clearing
- Piece / PieceGenerator: Tetromino instances and random spawning
- TetrominoType: Enum of available piece types
- ScoringRules: Line-clear scoring and level/speed progression
- EventBus: Observer hub the engine reports state changes through
- BlockFallGame: Main game loop and state management
"""

from .grid import GameGrid
from .pieces import BASE_SHAPES, COLORS, Piece, PieceGenerator, TetrominoType, color_rgb, rotate_matrix
from .rules import ScoringRules
from .events import EventBus
from .core import Action, BlockFallGame, GameConfig, GameSnapshot, GameStatus

__all__ = [
    "GameGrid",
    "BASE_SHAPES",
    "COLORS",
    "Piece",
    "PieceGenerator",
    "TetrominoType",
    "color_rgb",
    "rotate_matrix",
    "ScoringRules",
    "EventBus",
    "Action",
    "BlockFallGame",
    "GameConfig",
    "GameSnapshot",
    "GameStatus",
]
