from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from .pieces import ActivePiece


Coordinate = Tuple[int, int]

ROWS = 20
COLS = 10


class GameGrid:
    """Fixed-size playfield of locked cells.

    The grid uses 0 for empty cells and 1..7 for palette colors of locked
    pieces. Row 0 is the top. Dimensions are fixed at construction; only cell
    contents change.
    """

    def __init__(self, width: int = COLS, height: int = ROWS) -> None:
        self.width = int(width)
        self.height = int(height)
        self.cells = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.cells.fill(0)

    def collides(self, cells: Iterable[Coordinate]) -> bool:
        """True if any cell leaves the side walls, passes the floor or hits a locked cell.

        Rows above the top (negative ``y``) only check the side walls.
        """
        for x, y in cells:
            if x < 0 or x >= self.width or y >= self.height:
                return True
            if y >= 0 and self.cells[y, x] != 0:
                return True
        return False

    def merge(self, piece: ActivePiece) -> None:
        """Lock ``piece`` into the grid by writing its color into the cells it covers."""
        cells = piece.cells()
        if self.collides(cells):
            raise ValueError(f"cannot merge colliding piece at ({piece.x}, {piece.y})")
        for x, y in cells:
            if y >= 0:
                self.cells[y, x] = piece.color

    def is_row_full(self, y: int) -> bool:
        return bool(np.all(self.cells[y] != 0))

    def clear_full_lines(self) -> int:
        """Remove full rows, shifting everything above down, and return how many were removed."""
        cleared = 0
        y = self.height - 1
        while y >= 0:
            if self.is_row_full(y):
                # Shift rows 0..y-1 down by one; the same index is examined again.
                self.cells[1 : y + 1] = self.cells[0:y].copy()
                self.cells[0] = 0
                cleared += 1
            else:
                y -= 1
        return cleared

    def get_max_height(self) -> int:
        non_empty_rows = np.where(np.any(self.cells != 0, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.height - int(non_empty_rows[0])

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            seen_block = False
            for cell in self.cells[:, x]:
                if cell != 0:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def copy(self) -> "GameGrid":
        new_grid = GameGrid(self.width, self.height)
        new_grid.cells = self.cells.copy()
        return new_grid

    def clone_state(self) -> np.ndarray:
        return self.cells.copy()
