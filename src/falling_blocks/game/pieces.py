from __future__ import annotations

from enum import IntEnum
from typing import Dict, List, Tuple


Offset = Tuple[int, int]


class PieceId(IntEnum):
    SINGLE = 0
    SQUARE = 1
    SMALL_L = 2
    T = 3
    Z = 4
    S = 5
    L = 6
    J = 7
    BAR = 8


class Rotation(IntEnum):
    NO_ROTATION = 0
    RIGHT_90 = 1
    UPSIDE_DOWN = 2
    LEFT_90 = 3

    def next(self) -> "Rotation":
        """Clockwise successor."""
        return Rotation((self + 1) % 4)


NUM_PIECES = len(PieceId)


def _same_in_all(cells: Tuple[Offset, ...]) -> Tuple[Tuple[Offset, ...], ...]:
    return (cells, cells, cells, cells)


def _two_states(flat: Tuple[Offset, ...], upright: Tuple[Offset, ...]) -> Tuple[Tuple[Offset, ...], ...]:
    return (flat, upright, flat, upright)


# (dx, dy) offsets from the anchor, y pointing up. The anchor sits on the
# piece's top row and is always occupied, so dy <= 0 everywhere.
PIECE_OFFSETS: Dict[PieceId, Tuple[Tuple[Offset, ...], ...]] = {
    PieceId.SINGLE: _same_in_all(((0, 0),)),
    PieceId.SQUARE: _same_in_all(((0, 0), (1, 0), (0, -1), (1, -1))),
    PieceId.SMALL_L: (
        ((0, 0), (0, -1), (1, -1)),
        ((0, 0), (1, 0), (0, -1)),
        ((0, 0), (1, 0), (1, -1)),
        ((0, 0), (-1, -1), (0, -1)),
    ),
    PieceId.T: (
        ((-1, 0), (0, 0), (1, 0), (0, -1)),
        ((0, 0), (-1, -1), (0, -1), (0, -2)),
        ((0, 0), (-1, -1), (0, -1), (1, -1)),
        ((0, 0), (0, -1), (1, -1), (0, -2)),
    ),
    PieceId.Z: _two_states(
        ((-1, 0), (0, 0), (0, -1), (1, -1)),
        ((0, 0), (-1, -1), (0, -1), (-1, -2)),
    ),
    PieceId.S: _two_states(
        ((0, 0), (1, 0), (-1, -1), (0, -1)),
        ((0, 0), (0, -1), (1, -1), (1, -2)),
    ),
    PieceId.L: (
        ((0, 0), (0, -1), (0, -2), (1, -2)),
        ((-1, 0), (0, 0), (1, 0), (-1, -1)),
        ((-1, 0), (0, 0), (0, -1), (0, -2)),
        ((0, 0), (-2, -1), (-1, -1), (0, -1)),
    ),
    PieceId.J: (
        ((0, 0), (0, -1), (-1, -2), (0, -2)),
        ((0, 0), (0, -1), (1, -1), (2, -1)),
        ((0, 0), (1, 0), (0, -1), (0, -2)),
        ((-1, 0), (0, 0), (1, 0), (1, -1)),
    ),
    PieceId.BAR: _two_states(
        ((-1, 0), (0, 0), (1, 0), (2, 0)),
        ((0, 0), (0, -1), (0, -2), (0, -3)),
    ),
}


def occupied_cells(piece: int, rotation: int) -> Tuple[Offset, ...]:
    """Offsets occupied by `piece` in `rotation`, relative to its anchor."""
    return PIECE_OFFSETS[PieceId(piece)][Rotation(rotation)]


def cells_at(piece: int, rotation: int, x: int, y: int) -> List[Tuple[int, int]]:
    return [(x + dx, y + dy) for dx, dy in occupied_cells(piece, rotation)]
