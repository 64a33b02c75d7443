from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, List, Optional, Tuple

import numpy as np

from .bombs import BOMB_TIMER, tick_bombs
from .exceptions import InvalidConfigError
from .grid import Coordinate, GameGrid
from .pieces import Piece, SpecialBlock, TetrominoType
from .resolution import MergeResult, merge_piece
from .rules import ScoringRules
from .specials import SpecialConfig, SpecialSpawner


logger = logging.getLogger(__name__)


class Action(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_y: int = 0
    drop_interval: float = 1000.0
    bomb_timer: int = BOMB_TIMER

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidConfigError(f"grid must be at least 1x1, got {self.width}x{self.height}")
        if self.drop_interval <= 0:
            raise InvalidConfigError(f"drop_interval must be positive, got {self.drop_interval!r}")
        if self.bomb_timer <= 0:
            raise InvalidConfigError(f"bomb_timer must be positive, got {self.bomb_timer!r}")


@dataclass
class SpawnResult:
    kind: TetrominoType
    special: Optional[SpecialBlock] = None
    detonated: List[Coordinate] = field(default_factory=list)
    topped_out: bool = False


@dataclass
class LockResult:
    merge: MergeResult
    rows_cleared: List[int]
    score_gained: int
    spawn: SpawnResult

    @property
    def lines_cleared(self) -> int:
        return len(self.rows_cleared)

    @property
    def topped_out(self) -> bool:
        return self.spawn.topped_out


@dataclass
class RenderSnapshot:
    """Read-only copy of everything a renderer needs for one frame."""

    cells: np.ndarray
    timers: np.ndarray
    piece: np.ndarray
    piece_x: int
    piece_y: int
    score: int

    def live_bombs(self) -> List[Tuple[int, int, int]]:
        ys, xs = np.nonzero((self.cells == int(SpecialBlock.BOMB)) & (self.timers > 0))
        return [(int(x), int(y), int(self.timers[y, x])) for y, x in zip(ys, xs)]


class BombtrisGame:
    """One game session: grid, active piece, score and drop clock.

    `rng` may be any object offering `random()`, `choice(seq)` and
    `randint(a, b)`; by default a `random.Random` seeded from the config.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 specials: Optional[SpecialConfig] = None, rng: Any = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.spawner = SpecialSpawner(specials)
        self.score = 0
        self.lines_cleared_total = 0
        self.top_outs = 0
        self.last_lock: Optional[LockResult] = None
        self.current_piece: Optional[Piece] = None
        self.current_x = 0
        self.current_y = 0
        self.drop_counter = 0.0
        self.last_time = 0.0
        self._resolving = False
        self.reset()

    def reset(self, now: float = 0.0) -> None:
        """Start a fresh session; `now` seeds the frame clock for `update`."""
        self.grid.reset()
        self.spawner.reset()
        self.score = 0
        self.lines_cleared_total = 0
        self.last_lock = None
        self.drop_counter = 0.0
        self.last_time = float(now)
        self.spawn()

    # Active piece

    def _collides(self, piece: Piece, x: int, y: int) -> bool:
        return self.grid.collide(piece.matrix, x, y)

    def spawn(self) -> SpawnResult:
        """Bring in the next piece. Bomb fuses advance once per spawn."""
        detonated = tick_bombs(self.grid)

        kind = self.rng.choice(list(TetrominoType))
        piece = Piece.spawn(kind)
        special = self.spawner.decorate(piece, self.rng)

        self.current_piece = piece
        self.current_x = self.grid.width // 2 - piece.width // 2
        self.current_y = self.config.spawn_y

        result = SpawnResult(kind=kind, special=special, detonated=detonated)
        if self._collides(piece, self.current_x, self.current_y):
            # Top-out: wipe the field and score, keep playing with this piece.
            self.grid.reset()
            self.score = 0
            self.top_outs += 1
            result.topped_out = True
            logger.debug("top-out #%d, field cleared", self.top_outs)
        return result

    def move(self, direction: int) -> bool:
        if self.current_piece is None:
            return False
        new_x = self.current_x + direction
        if self._collides(self.current_piece, new_x, self.current_y):
            return False
        self.current_x = new_x
        return True

    def rotate(self, direction: int) -> bool:
        """Rotate with a simple alternating wall-kick search.

        The kick offsets accumulate (+1, -2, +3, ...), visiting x+1, x-1,
        x+2, ... until the next offset would exceed the piece width, at which
        point the rotation is abandoned and nothing changes.
        """
        if self.current_piece is None:
            return False
        rotated = self.current_piece.rotated(direction)
        x = self.current_x
        offset = 1
        while self._collides(rotated, x, self.current_y):
            x += offset
            offset = -(offset + (1 if offset > 0 else -1))
            if offset > rotated.width:
                return False
        self.current_piece = rotated
        self.current_x = x
        return True

    def soft_drop(self) -> Optional[LockResult]:
        self.drop_counter = 0.0
        if self.current_piece is None:
            return None
        next_y = self.current_y + 1
        if not self._collides(self.current_piece, self.current_x, next_y):
            self.current_y = next_y
            return None
        return self._lock_piece()

    def hard_drop(self) -> Optional[LockResult]:
        self.drop_counter = 0.0
        if self.current_piece is None:
            return None
        # Drop until collision
        while not self._collides(self.current_piece, self.current_x, self.current_y + 1):
            self.current_y += 1
        return self._lock_piece()

    def _lock_piece(self) -> LockResult:
        assert self.current_piece is not None
        self._resolving = True
        try:
            merged = merge_piece(self.grid, self.current_piece, self.current_x, self.current_y,
                                 self.rng, self.config.bomb_timer)
            rows = self.grid.sweep_full_rows()
            gained = self.rules.score_for_lines(len(rows))
            self.score += gained
            self.lines_cleared_total += len(rows)
            spawned = self.spawn()
        finally:
            self._resolving = False
        self.last_lock = LockResult(merge=merged, rows_cleared=rows, score_gained=gained, spawn=spawned)
        return self.last_lock

    # Commands and clock

    def step(self, action: Any) -> bool:
        """Apply one input command. Returns False if it was ignored."""
        if self._resolving:
            logger.debug("command %r arrived mid-lock, ignored", action)
            return False
        # bool is an int subclass, but True/False are not commands
        if isinstance(action, (bool, np.bool_)):
            logger.debug("unknown command %r ignored", action)
            return False
        try:
            action = Action(action)
        except (ValueError, TypeError):
            logger.debug("unknown command %r ignored", action)
            return False

        if action == Action.MOVE_LEFT:
            self.move(-1)
        elif action == Action.MOVE_RIGHT:
            self.move(1)
        elif action == Action.ROTATE_CW:
            self.rotate(1)
        elif action == Action.ROTATE_CCW:
            self.rotate(-1)
        elif action == Action.SOFT_DROP:
            self.soft_drop()
        elif action == Action.HARD_DROP:
            self.hard_drop()
        return True

    def advance(self, delta: float) -> bool:
        """Accumulate frame time; auto-drop once the interval is exceeded."""
        if self._resolving:
            return False
        self.drop_counter += delta
        if self.drop_counter > self.config.drop_interval:
            self.soft_drop()
            return True
        return False

    def update(self, now: float) -> bool:
        delta = now - self.last_time
        self.last_time = now
        return self.advance(delta)

    # Render sink

    def snapshot(self) -> RenderSnapshot:
        piece = self.current_piece.matrix.copy() if self.current_piece is not None else np.zeros((0, 0), dtype=np.int8)
        return RenderSnapshot(
            cells=self.grid.clone_state(),
            timers=self.grid.clone_timers(),
            piece=piece,
            piece_x=self.current_x,
            piece_y=self.current_y,
            score=self.score,
        )

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if self.current_piece is not None:
            for dx, dy, value in self.current_piece.cells():
                x, y = self.current_x + dx, self.current_y + dy
                if 0 <= y < self.grid.height and 0 <= x < self.grid.width:
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -value
        return state
