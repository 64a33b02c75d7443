from __future__ import annotations

from typing import Iterable, List, Tuple

import numpy as np

from .pieces import EMPTY, SpecialBlock


Coordinate = Tuple[int, int]


class GameGrid:
    """Discrete 2D play field with a parallel bomb-timer layer.

    `cells[y, x]` holds 0 for empty and a block id otherwise; `y = 0` is the
    top row. `timers[y, x]` is only meaningful where the cell is a bomb and is
    kept at 0 everywhere else. Every operation that moves cells moves the
    matching timers with them.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.cells = np.zeros((self.height, self.width), dtype=np.int8)
        self.timers = np.zeros((self.height, self.width), dtype=np.int16)

    def reset(self) -> None:
        self.cells.fill(EMPTY)
        self.timers.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def collide(self, matrix: np.ndarray, x: int, y: int) -> bool:
        """True if any filled cell of `matrix` placed at (x, y) is blocked.

        Sides and bottom are walls. Rows above the top are open air.
        """
        h, w = matrix.shape
        for dy in range(h):
            for dx in range(w):
                if matrix[dy, dx] == EMPTY:
                    continue
                gx, gy = x + dx, y + dy
                if gx < 0 or gx >= self.width or gy >= self.height:
                    return True
                if gy < 0:
                    continue
                if self.cells[gy, gx] != EMPTY:
                    return True
        return False

    def set_cell(self, x: int, y: int, value: int, timer: int = 0) -> None:
        self.cells[y, x] = value
        self.timers[y, x] = timer if value == SpecialBlock.BOMB else 0

    def clear_cells(self, coords: Iterable[Coordinate]) -> None:
        for x, y in coords:
            if self.is_inside(x, y):
                self.cells[y, x] = EMPTY
                self.timers[y, x] = 0

    def neighborhood(self, x: int, y: int) -> List[Coordinate]:
        """In-bounds cells of the 3x3 block centred on (x, y)."""
        coords: List[Coordinate] = []
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if self.is_inside(x + dx, y + dy):
                    coords.append((x + dx, y + dy))
        return coords

    def blank_row(self, y: int) -> None:
        """Empty row `y` in place, leaving the rows above where they are."""
        self.cells[y, :] = EMPTY
        self.timers[y, :] = 0

    def apply_gravity(self) -> None:
        """Drop every filled cell to the bottom of its column, keeping order."""
        for x in range(self.width):
            column = self.cells[:, x]
            filled = np.flatnonzero(column != EMPTY)
            if filled.size == 0 or filled[0] == self.height - filled.size:
                continue
            values = column[filled].copy()
            timers = self.timers[filled, x].copy()
            self.cells[:, x] = EMPTY
            self.timers[:, x] = 0
            self.cells[self.height - filled.size :, x] = values
            self.timers[self.height - filled.size :, x] = timers

    def clear_row(self, y: int) -> None:
        """Remove row `y` and push a fresh empty row in at the top."""
        self.cells = np.vstack(
            (np.zeros((1, self.width), dtype=self.cells.dtype), np.delete(self.cells, y, axis=0))
        )
        self.timers = np.vstack(
            (np.zeros((1, self.width), dtype=self.timers.dtype), np.delete(self.timers, y, axis=0))
        )

    def is_row_full(self, y: int) -> bool:
        return bool(np.all(self.cells[y, :] != EMPTY))

    def sweep_full_rows(self) -> List[int]:
        """Clear full rows bottom-up and return their indices in clear order.

        Row 0 is never examined. After a clear the same index is tested again,
        since the row above has just moved into it.
        """
        cleared: List[int] = []
        y = self.height - 1
        while y > 0:
            if self.is_row_full(y):
                self.clear_row(y)
                cleared.append(y)
                continue
            y -= 1
        return cleared

    def bomb_positions(self) -> List[Coordinate]:
        ys, xs = np.nonzero(self.cells == int(SpecialBlock.BOMB))
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    def count_filled(self) -> int:
        return int(np.count_nonzero(self.cells))

    def clone_state(self) -> np.ndarray:
        return self.cells.copy()

    def clone_timers(self) -> np.ndarray:
        return self.timers.copy()
