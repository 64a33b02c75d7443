from __future__ import annotations

from typing import Dict, Tuple

Color = Tuple[int, int, int]


def _hex(code: str) -> Color:
    return (int(code[1:3], 16), int(code[3:5], 16), int(code[5:7], 16))


PALETTE: Dict[int, Color] = {
    0: (0, 0, 0),
    1: _hex("#FF0D72"),   # T
    2: _hex("#0DC2FF"),   # O
    3: _hex("#0DFF72"),   # L
    4: _hex("#F538FF"),   # J
    5: _hex("#FF8E0D"),   # I
    6: _hex("#FFE138"),   # S
    7: _hex("#3877FF"),   # Z
    8: _hex("#FF0000"),   # bomb
    9: _hex("#FFFFFF"),   # laser
    10: _hex("#00FFFF"),  # extruder
}


def color_for_value(v: int) -> Color:
    # Negative ids mark the falling piece in observations
    return PALETTE.get(abs(int(v)), (200, 200, 200))
