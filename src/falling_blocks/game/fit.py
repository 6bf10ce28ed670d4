from __future__ import annotations

from .board import Board
from .pieces import cells_at


def fits(board: Board, x: int, y: int, piece: int, rotation: int) -> bool:
    """Whether `piece` in `rotation` anchored at (x, y) can occupy the board.

    Every cell must lie within the horizontal bounds, not below the floor,
    and on a free cell. Rows above the top are not bounded.
    """
    for cx, cy in cells_at(piece, rotation, x, y):
        if cx < 0 or cx >= board.width or cy < 0:
            return False
        if board.is_occupied(cx, cy):
            return False
    return True
