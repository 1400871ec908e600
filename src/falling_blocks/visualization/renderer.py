from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np
import pygame


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (0, 240, 240),  # I
        2: (0, 0, 240),    # J
        3: (240, 160, 0),  # L
        4: (240, 240, 0),  # O
        5: (0, 240, 0),    # S
        6: (160, 0, 240),  # T
        7: (240, 0, 0),    # Z
    }
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 25, margin: int = 20, panel_width: int = 200) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self.font = None

    def window_size(self, board_shape: Tuple[int, int]) -> Tuple[int, int]:
        h, w = board_shape
        return (w * self.cell_size + self.margin * 3 + self.panel_width,
                h * self.cell_size + self.margin * 2)

    def _grid_surface(self, state: np.ndarray, pending_rows: Iterable[int]) -> pygame.Surface:
        h, w = state.shape
        pending = set(pending_rows)
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                color = (235, 235, 235) if y in pending and v else _color_for_value(v)
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color, rect)
        return surf

    def _draw_panel(self, screen: pygame.Surface, x0: int, stats: dict, high_score: int) -> None:
        if self.font is None:
            self.font = pygame.font.SysFont(None, 28)
        lines = [
            f"Score: {stats['score']}",
            f"High Score: {max(high_score, stats['score'])}",
            f"Level: {stats['level']}",
            f"Lines: {stats['lines_cleared']}",
            f"Drop: {stats['drop_interval_ms']:.0f} ms",
        ]
        if stats["phase"] == "paused":
            lines.append("PAUSED")
        elif stats["phase"] == "game_over":
            lines += ["GAME OVER", "R to restart"]
        for i, text in enumerate(lines):
            surf = self.font.render(text, True, (230, 230, 230))
            screen.blit(surf, (x0, self.margin + i * 30))

    def draw(self, screen: pygame.Surface, state: np.ndarray, stats: dict, high_score: int = 0) -> None:
        grid_surf = self._grid_surface(state, stats.get("pending_clear_rows", ()))
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))
        panel_x = self.margin * 2 + state.shape[1] * self.cell_size
        self._draw_panel(screen, panel_x, stats, high_score)
        pygame.display.flip()
