from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional

from .exceptions import InvalidConfigError
from .pieces import Piece, SpecialBlock


@dataclass
class SpecialConfig:
    bomb_probability: float = 0.25
    laser_probability: float = 0.25
    extruder_probability: float = 0.25

    def __post_init__(self) -> None:
        for name, p in self.probabilities().items():
            if not 0.0 <= p <= 1.0:
                raise InvalidConfigError(f"{name.name.lower()} probability must be in [0, 1], got {p!r}")

    def probabilities(self) -> Dict[SpecialBlock, float]:
        # Insertion order is the priority order.
        return {
            SpecialBlock.BOMB: float(self.bomb_probability),
            SpecialBlock.LASER: float(self.laser_probability),
            SpecialBlock.EXTRUDER: float(self.extruder_probability),
        }


def guaranteed_interval(probability: float) -> Optional[int]:
    """Pieces after which a special is forced, or None if it is disabled."""
    if probability <= 0.0:
        return None
    return math.ceil(1.0 / probability)


class SpecialSpawner:
    """Decides which special block, if any, a freshly spawned piece carries.

    Each type rolls independently and also fires once it has gone
    `ceil(1 / p)` pieces without appearing. Bomb beats laser beats extruder,
    so a piece never carries more than one special.
    """

    def __init__(self, config: Optional[SpecialConfig] = None) -> None:
        self.config = config or SpecialConfig()
        self.pieces_since: Dict[SpecialBlock, int] = {}
        self.reset()

    def reset(self) -> None:
        self.pieces_since = {kind: 0 for kind in SpecialBlock}

    @property
    def pieces_since_bomb(self) -> int:
        return self.pieces_since[SpecialBlock.BOMB]

    @property
    def pieces_since_laser(self) -> int:
        return self.pieces_since[SpecialBlock.LASER]

    @property
    def pieces_since_extruder(self) -> int:
        return self.pieces_since[SpecialBlock.EXTRUDER]

    def choose(self, rng) -> Optional[SpecialBlock]:
        for kind in self.pieces_since:
            self.pieces_since[kind] += 1

        # All three rolls are drawn every spawn so the random stream advances
        # by the same amount whatever gets picked.
        triggered = []
        for kind, p in self.config.probabilities().items():
            interval = guaranteed_interval(p)
            roll = rng.random()
            forced = interval is not None and self.pieces_since[kind] >= interval
            if roll < p or forced:
                triggered.append(kind)

        if not triggered:
            return None
        chosen = triggered[0]
        self.pieces_since[chosen] = 0
        return chosen

    def decorate(self, piece: Piece, rng) -> Optional[SpecialBlock]:
        """Stamp the chosen special onto one random filled cell of `piece`."""
        chosen = self.choose(rng)
        if chosen is None:
            return None
        cells = piece.cells()
        if not cells:
            return None
        dx, dy, _ = rng.choice(cells)
        piece.matrix[dy, dx] = int(chosen)
        return chosen
