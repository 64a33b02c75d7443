from __future__ import annotations

from dataclasses import dataclass

from .exceptions import InvalidConfigError


@dataclass
class ScoringRules:
    base_row_score: int = 10
    combo_multiplier: int = 2

    def __post_init__(self) -> None:
        if self.base_row_score < 0 or self.combo_multiplier < 1:
            raise InvalidConfigError("row score must be >= 0 and combo multiplier >= 1")

    def score_for_row(self, index: int) -> int:
        """Points for the `index`-th row (0-based) cleared in one sweep."""
        return self.base_row_score * self.combo_multiplier ** index

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        return sum(self.score_for_row(k) for k in range(lines))
