from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple

import numpy as np


EMPTY = 0


class TetrominoType(IntEnum):
    T = 1
    O = 2
    L = 3
    J = 4
    I = 5
    S = 6
    Z = 7


class SpecialBlock(IntEnum):
    BOMB = 8
    LASER = 9
    EXTRUDER = 10


Shape = np.ndarray


# Every bounding box is square so that transpose-and-flip is a true quarter turn.
BASE_SHAPES = {
    TetrominoType.T: np.array([[0, 0, 0], [1, 1, 1], [0, 1, 0]], dtype=np.int8),
    TetrominoType.O: np.array([[2, 2], [2, 2]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 3, 0], [0, 3, 0], [0, 3, 3]], dtype=np.int8),
    TetrominoType.J: np.array([[0, 4, 0], [0, 4, 0], [4, 4, 0]], dtype=np.int8),
    TetrominoType.I: np.array(
        [[0, 5, 0, 0], [0, 5, 0, 0], [0, 5, 0, 0], [0, 5, 0, 0]], dtype=np.int8
    ),
    TetrominoType.S: np.array([[0, 6, 6], [6, 6, 0], [0, 0, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[7, 7, 0], [0, 7, 7], [0, 0, 0]], dtype=np.int8),
}


def is_special(value: int) -> bool:
    return int(SpecialBlock.BOMB) <= value <= int(SpecialBlock.EXTRUDER)


def base_shape(kind: TetrominoType) -> Shape:
    """Return a fresh copy of the catalog matrix for `kind`."""
    return BASE_SHAPES[kind].copy()


def rotate_matrix(matrix: Shape, direction: int) -> Shape:
    """Quarter-turn `matrix` without touching the input.

    The matrix is transposed, then each row is reversed for a clockwise turn
    (direction > 0) or the row order is reversed for a counter-clockwise one.
    """
    transposed = np.asarray(matrix).T
    if direction > 0:
        return np.ascontiguousarray(transposed[:, ::-1])
    return np.ascontiguousarray(transposed[::-1, :])


@dataclass
class Piece:
    kind: TetrominoType
    matrix: Shape

    @classmethod
    def spawn(cls, kind: TetrominoType) -> "Piece":
        return cls(kind=kind, matrix=base_shape(kind))

    @property
    def width(self) -> int:
        return int(self.matrix.shape[1])

    def rotated(self, direction: int) -> "Piece":
        return Piece(self.kind, rotate_matrix(self.matrix, direction))

    def cells(self) -> List[Tuple[int, int, int]]:
        """Non-empty cells as (dx, dy, value), in row-major order."""
        h, w = self.matrix.shape
        cells: List[Tuple[int, int, int]] = []
        for dy in range(h):
            for dx in range(w):
                value = int(self.matrix[dy, dx])
                if value != EMPTY:
                    cells.append((dx, dy, value))
        return cells
