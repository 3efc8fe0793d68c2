import sys, os

import pytest

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from blockfall.game import BlockFallGame, GameConfig
from tests.helpers import fill_row, force_piece


@pytest.fixture
def game():
    return BlockFallGame(GameConfig(random_seed=1234))


__all__ = ["fill_row", "force_piece"]
