from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, Optional, Tuple

import numpy as np


class TetrominoType(IntEnum):
    """Piece kinds. The integer value doubles as the board colour id."""

    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Shape = np.ndarray


def _frozen(rows) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


BASE_SHAPES = {
    TetrominoType.I: _frozen([[1, 1, 1, 1]]),
    TetrominoType.J: _frozen([[1, 0, 0], [1, 1, 1]]),
    TetrominoType.L: _frozen([[0, 0, 1], [1, 1, 1]]),
    TetrominoType.O: _frozen([[1, 1], [1, 1]]),
    TetrominoType.S: _frozen([[0, 1, 1], [1, 1, 0]]),
    TetrominoType.T: _frozen([[0, 1, 0], [1, 1, 1]]),
    TetrominoType.Z: _frozen([[1, 1, 0], [0, 1, 1]]),
}


def rotate_cw(shape: Shape) -> Shape:
    """Rotate 90 degrees clockwise: transpose, then reverse each row."""
    return _frozen(shape.T[:, ::-1])


@dataclass(frozen=True, eq=False)
class Piece:
    kind: TetrominoType
    shape: Shape
    x: int
    y: int

    @classmethod
    def spawn(cls, kind: TetrominoType, board_width: int) -> "Piece":
        return cls(kind, BASE_SHAPES[kind], board_width // 2 - 1, 0)

    @property
    def color_id(self) -> int:
        return int(self.kind)

    def moved(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def with_shape(self, shape: Shape, x: int, y: int) -> "Piece":
        return replace(self, shape=shape, x=x, y=y)

    def cells_at(self, origin_x: Optional[int] = None, origin_y: Optional[int] = None) -> List[Tuple[int, int]]:
        ox = self.x if origin_x is None else origin_x
        oy = self.y if origin_y is None else origin_y
        h, w = self.shape.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if self.shape[dy, dx]:
                    cells.append((ox + dx, oy + dy))
        return cells


class PieceSpawner:
    """Uniform random piece source. Every draw is independent of the last."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def next_kind(self) -> TetrominoType:
        return self.rng.choice(list(TetrominoType))

    def spawn(self, board_width: int) -> Piece:
        return Piece.spawn(self.next_kind(), board_width)
