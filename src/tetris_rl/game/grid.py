from __future__ import annotations

from typing import Iterable, List

import numpy as np

from .errors import InvariantViolation


class GameGrid:
    """Discrete 2D playfield, row 0 at the top.

    The grid uses 0 for empty cells and the piece kind value for filled cells,
    so a cell's color can be looked up from the piece catalog. Rows above row 0
    form a hidden buffer: a falling piece may reach into it, but nothing is
    ever stored there.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def collides(self, matrix: np.ndarray, x: int, y: int) -> bool:
        """True if ``matrix`` placed with its top-left at ``(x, y)`` is illegal."""
        ys, xs = np.nonzero(matrix)
        for dy, dx in zip(ys, xs):
            bx = x + int(dx)
            by = y + int(dy)
            if bx < 0 or bx >= self.width or by >= self.height:
                return True
            if by >= 0 and self.grid[by, bx] != 0:
                return True
        return False

    def merge(self, matrix: np.ndarray, x: int, y: int, value: int) -> int:
        """Write the occupied cells of ``matrix`` permanently; returns cells written."""
        if value <= 0:
            raise InvariantViolation(f"merge token must be positive, got {value}")
        ys, xs = np.nonzero(matrix)
        cells = [(x + int(dx), y + int(dy)) for dy, dx in zip(ys, xs)]
        for bx, by in cells:
            if not self.is_inside(bx, by):
                raise InvariantViolation(f"merge outside the grid at ({bx}, {by})")
            if self.grid[by, bx] != 0:
                raise InvariantViolation(f"merge over an occupied cell at ({bx}, {by})")
        for bx, by in cells:
            self.grid[by, bx] = value
        return len(cells)

    def full_rows(self) -> List[int]:
        """Indices of completely filled rows, bottom to top."""
        full = np.where(np.all(self.grid != 0, axis=1))[0]
        return [int(r) for r in full[::-1]]

    def clear_rows(self, rows: Iterable[int]) -> int:
        """Remove ``rows`` and push the same number of empty rows in at the top."""
        rows = sorted(int(r) for r in rows)
        if not rows:
            return 0
        if len(set(rows)) != len(rows):
            raise InvariantViolation(f"duplicate rows in clear: {rows}")
        if rows[0] < 0 or rows[-1] >= self.height:
            raise InvariantViolation(f"row index out of range in clear: {rows}")
        num = len(rows)
        # np.delete removes all listed rows at once, so indices never shift
        remaining = np.delete(self.grid, rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, remaining))
        if self.grid.shape != (self.height, self.width):
            raise InvariantViolation(f"grid shape drifted to {self.grid.shape}")
        return num

    def get_max_height(self) -> int:
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
