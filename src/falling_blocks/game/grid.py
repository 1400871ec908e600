from __future__ import annotations

from typing import Iterable, List

import numpy as np

from .pieces import Piece, Shape


class GameGrid:
    """Fixed-size playfield.

    The grid uses 0 for empty cells and positive integers for filled cells.
    Integer values are the colour ids of the pieces that filled them. Row 0 is
    the top of the board.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def collides(self, x: int, y: int, shape: Shape) -> bool:
        """True if `shape` anchored at (x, y) hits a wall, the floor or a block.

        Cells above the top edge never collide, so pieces may spawn and rotate
        partially off-board.
        """
        for dy, dx in np.argwhere(shape):
            col = x + int(dx)
            row = y + int(dy)
            if col < 0 or col >= self.width or row >= self.height:
                return True
            if row >= 0 and self.grid[row, col] != 0:
                return True
        return False

    def merged(self, piece: Piece) -> "GameGrid":
        """Return a copy with the piece written in; off-board cells are dropped."""
        new_grid = self.copy()
        for x, y in piece.cells_at():
            if self.is_inside(x, y):
                new_grid.grid[y, x] = piece.color_id
        return new_grid

    def full_rows(self) -> List[int]:
        return [int(r) for r in np.where(np.all(self.grid != 0, axis=1))[0]]

    def without_rows(self, rows: Iterable[int]) -> "GameGrid":
        """Remove `rows` and add empty rows at the top so the height is kept."""
        rows = sorted(set(int(r) for r in rows))
        new_grid = GameGrid(self.width, self.height)
        if not rows:
            new_grid.grid = self.grid.copy()
            return new_grid
        kept = np.delete(self.grid, rows, axis=0)
        new_rows = np.zeros((self.height - kept.shape[0], self.width), dtype=np.int8)
        new_grid.grid = np.vstack((new_rows, kept))
        return new_grid

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != 0, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        top_index = int(non_empty_rows[0])
        return self.height - top_index

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            column = self.grid[:, x]
            seen_block = False
            for cell in column:
                if cell != 0:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()

    def copy(self) -> "GameGrid":
        new_grid = GameGrid(self.width, self.height)
        new_grid.grid = self.grid.copy()
        return new_grid
