"""Game module for Bombtris.

Exports the core game engine and supporting classes:
- GameGrid: Grid representation, gravity, row clears and bomb timers
- Piece: Tetromino piece with pure quarter-turn rotation
- TetrominoType / SpecialBlock: Block ids stored in the grid
- SpecialSpawner: Bomb, laser and extruder decoration policy
- ScoringRules: Row-sweep scoring
- BombtrisGame: Session state, input commands and drop clock
"""

from .exceptions import BombtrisError, InvalidConfigError
from .grid import GameGrid
from .pieces import EMPTY, Piece, SpecialBlock, TetrominoType, rotate_matrix
from .rules import ScoringRules
from .specials import SpecialConfig, SpecialSpawner
from .bombs import BOMB_TIMER, tick_bombs
from .resolution import MergeResult, merge_piece
from .core import Action, BombtrisGame, GameConfig, LockResult, RenderSnapshot, SpawnResult

__all__ = [
    "BombtrisError",
    "InvalidConfigError",
    "GameGrid",
    "EMPTY",
    "Piece",
    "SpecialBlock",
    "TetrominoType",
    "rotate_matrix",
    "ScoringRules",
    "SpecialConfig",
    "SpecialSpawner",
    "BOMB_TIMER",
    "tick_bombs",
    "MergeResult",
    "merge_piece",
    "Action",
    "BombtrisGame",
    "GameConfig",
    "LockResult",
    "RenderSnapshot",
    "SpawnResult",
]
