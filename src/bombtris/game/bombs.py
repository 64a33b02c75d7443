from __future__ import annotations

import logging
from typing import List

from .grid import Coordinate, GameGrid
from .pieces import SpecialBlock


logger = logging.getLogger(__name__)

BOMB_TIMER = 3


def arm_bomb(grid: GameGrid, x: int, y: int, fuse: int = BOMB_TIMER) -> None:
    grid.set_cell(x, y, SpecialBlock.BOMB, timer=fuse)


def tick_bombs(grid: GameGrid) -> List[Coordinate]:
    """Advance every bomb fuse by one and detonate the expired ones.

    Which bombs go off is decided before any blast is applied, so a bomb
    caught in a neighbour's blast is simply removed. Gravity runs once after
    all blasts. Returns the positions of the bombs that detonated.
    """
    bombs = grid.bomb_positions()
    if not bombs:
        return []

    expired: List[Coordinate] = []
    for x, y in bombs:
        grid.timers[y, x] -= 1
        if grid.timers[y, x] <= 0:
            expired.append((x, y))

    if not expired:
        return []

    for x, y in expired:
        grid.clear_cells(grid.neighborhood(x, y))
    grid.apply_gravity()
    logger.debug("detonated %d bomb(s) at %s", len(expired), expired)
    return expired
