from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .bombs import BOMB_TIMER, arm_bomb
from .grid import Coordinate, GameGrid
from .pieces import Piece, SpecialBlock, TetrominoType, is_special


@dataclass
class MergeResult:
    bombs_armed: List[Coordinate] = field(default_factory=list)
    laser_rows: List[int] = field(default_factory=list)
    extruder_centers: List[Coordinate] = field(default_factory=list)

    @property
    def needs_gravity(self) -> bool:
        return bool(self.laser_rows or self.extruder_centers)


def extrude(grid: GameGrid, x: int, y: int, rng) -> None:
    """Refill the 3x3 block around (x, y) with random normal blocks."""
    for nx, ny in grid.neighborhood(x, y):
        grid.set_cell(nx, ny, rng.randint(int(TetrominoType.T), int(TetrominoType.Z)))


def merge_piece(grid: GameGrid, piece: Piece, origin_x: int, origin_y: int, rng,
                bomb_timer: int = BOMB_TIMER) -> MergeResult:
    """Commit `piece` into `grid`, firing special blocks as they are written.

    Cells are handled in row-major order, so a later cell may overwrite what
    an earlier laser or extruder did. Cells above the grid are dropped.
    """
    result = MergeResult()
    for dx, dy, value in piece.cells():
        x, y = origin_x + dx, origin_y + dy
        if not grid.is_inside(x, y):
            continue
        if not is_special(value):
            grid.set_cell(x, y, value)
        elif value == SpecialBlock.BOMB:
            arm_bomb(grid, x, y, bomb_timer)
            result.bombs_armed.append((x, y))
        elif value == SpecialBlock.LASER:
            grid.blank_row(y)
            result.laser_rows.append(y)
        elif value == SpecialBlock.EXTRUDER:
            extrude(grid, x, y, rng)
            result.extruder_centers.append((x, y))

    # Bomb blasts handle their own gravity when they go off.
    if result.needs_gravity:
        grid.apply_gravity()
    return result
