from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    L = 4
    J = 5
    Z = 6
    S = 7


Shape = np.ndarray


def _frozen(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8).reshape(len(rows), -1 if rows else 0)
    arr.flags.writeable = False
    return arr


# Index 0 is an empty placeholder so shape indices line up with PALETTE.
SHAPES: Tuple[Shape, ...] = (
    _frozen([]),
    _frozen([[1, 1, 1, 1]]),
    _frozen([[1, 1], [1, 1]]),
    _frozen([[1, 1, 1], [0, 1, 0]]),
    _frozen([[1, 1, 1], [1, 0, 0]]),
    _frozen([[1, 1, 1], [0, 0, 1]]),
    _frozen([[1, 1, 0], [0, 1, 1]]),
    _frozen([[0, 1, 1], [1, 1, 0]]),
)

PALETTE: Tuple[str, ...] = (
    "#000000",
    "#FF0000",
    "#00FF00",
    "#0000FF",
    "#FFFF00",
    "#00FFFF",
    "#FF00FF",
    "#FFA500",
)


def rotate_cw(shape: Shape) -> Shape:
    """Rotate a shape matrix 90 degrees clockwise.

    ``new[r][c] == old[rows - 1 - c][r]``; the result has its dimensions swapped.
    """
    rotated = np.rot90(shape, 1, axes=(1, 0)).copy()
    rotated.flags.writeable = False
    return rotated


@dataclass(frozen=True, eq=False)
class ActivePiece:
    kind: TetrominoType
    shape: Shape
    x: int
    y: int
    color: int

    @classmethod
    def spawn(cls, kind: TetrominoType, color: int, x: int, y: int) -> "ActivePiece":
        return cls(kind=kind, shape=SHAPES[int(kind)], x=x, y=y, color=color)

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def with_shape(self, shape: Shape, x: int) -> "ActivePiece":
        return replace(self, shape=shape, x=x)

    def cells(self) -> List[Tuple[int, int]]:
        """Grid coordinates ``(x, y)`` of every filled cell at the current position."""
        h, w = self.shape.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if self.shape[dy, dx]:
                    cells.append((self.x + dx, self.y + dy))
        return cells
