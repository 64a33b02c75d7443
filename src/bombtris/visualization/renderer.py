from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from bombtris.game import RenderSnapshot
from .palette import PALETTE, color_for_value


class Renderer:
    def __init__(self, cell_size: int = 20, margin: int = 20, panel_height: int = 40) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_height = panel_height
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return (
            width * self.cell_size + self.margin * 2,
            height * self.cell_size + self.margin * 2 + self.panel_height,
        )

    def _font_for_cells(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, int(self.cell_size * 0.9))
        return self._font

    def _draw_matrix(self, surf: pygame.Surface, matrix: np.ndarray, ox: int, oy: int) -> None:
        h, w = matrix.shape
        for y in range(h):
            for x in range(w):
                v = int(matrix[y, x])
                if v == 0:
                    continue
                rect = pygame.Rect(
                    (x + ox) * self.cell_size,
                    (y + oy) * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color_for_value(v), rect)

    def _grid_surface(self, snap: RenderSnapshot) -> pygame.Surface:
        h, w = snap.cells.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(PALETTE[0])
        self._draw_matrix(surf, snap.cells, 0, 0)

        # Countdown digit on every armed bomb
        font = self._font_for_cells()
        for x, y, timer in snap.live_bombs():
            text = font.render(str(timer), True, (0, 0, 0))
            center = ((x + 0.5) * self.cell_size, (y + 0.5) * self.cell_size)
            surf.blit(text, text.get_rect(center=center))

        self._draw_matrix(surf, snap.piece, snap.piece_x, snap.piece_y)
        return surf

    def draw(self, screen: pygame.Surface, snap: RenderSnapshot) -> None:
        grid_surf = self._grid_surface(snap)
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin + self.panel_height))
        font = pygame.font.SysFont(None, 28)
        label = f"Score: {snap.score}"
        screen.blit(font.render(label, True, (255, 255, 255)), (self.margin, self.margin // 2))
        pygame.display.flip()
