from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import numpy as np


Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class RowRun:
    """Consecutive full rows, `start` being the lowest one."""

    start: int
    length: int

    @property
    def rows(self) -> Tuple[int, ...]:
        return tuple(range(self.start, self.start + self.length))


class Board:
    """Fixed-size occupancy grid.

    Cells are stored as a boolean array indexed ``[y, x]`` where row 0 is the
    floor and row ``height - 1`` is the topmost playable row. A cell is True
    only when a locked piece occupies it.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.cells = np.zeros((self.height, self.width), dtype=np.bool_)

    def reset(self) -> None:
        self.cells.fill(False)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        # Rows above the top are open sky
        if y >= self.height:
            return False
        return bool(self.cells[y, x])

    def fill(self, cells: Iterable[Coordinate]) -> int:
        """Mark `cells` occupied and return how many were newly set."""
        placed = 0
        for x, y in cells:
            if not self.cells[y, x]:
                placed += 1
            self.cells[y, x] = True
        return placed

    def is_row_full(self, y: int) -> bool:
        return bool(np.all(self.cells[y]))

    def find_completed_run(self) -> Optional[RowRun]:
        start = None
        for y in range(self.height):
            if self.is_row_full(y):
                start = y
                break
        if start is None:
            return None
        end = start
        while end + 1 < self.height and self.is_row_full(end + 1):
            end += 1
        return RowRun(start=start, length=end - start + 1)

    def clear_run(self, run: RowRun) -> None:
        """Remove the rows of `run` and drop everything above it."""
        n = run.length
        top = self.height - n
        self.cells[run.start:top] = self.cells[run.start + n:]
        self.cells[top:] = False

    def get_max_height(self) -> int:
        occupied_rows = np.where(np.any(self.cells, axis=1))[0]
        if occupied_rows.size == 0:
            return 0
        return int(occupied_rows[-1]) + 1

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            column = self.cells[:, x]
            seen_block = False
            # Walk top-down so empties under a block count
            for cell in column[::-1]:
                if cell:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def clone_state(self) -> np.ndarray:
        return self.cells.copy()
