"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- Board: Occupancy grid, completed-run detection and row shifting
- PieceId / Rotation: The nine shapes and their four rotation states
- occupied_cells: Static per-shape, per-rotation offset table
- fits: Collision and bounds check for a candidate placement
- ScoringRules: Line-clear score table
- FallingBlockGame: Tick-driven engine with episode and high score tracking
"""

from .board import Board, RowRun
from .pieces import PieceId, Rotation, NUM_PIECES, occupied_cells, cells_at
from .fit import fits
from .rules import ScoringRules
from .core import (
    ActivePiece,
    EpisodeResult,
    FallingBlockGame,
    GameConfig,
    Intents,
    TickResult,
)

__all__ = [
    "Board",
    "RowRun",
    "PieceId",
    "Rotation",
    "NUM_PIECES",
    "occupied_cells",
    "cells_at",
    "fits",
    "ScoringRules",
    "ActivePiece",
    "EpisodeResult",
    "FallingBlockGame",
    "GameConfig",
    "Intents",
    "TickResult",
]
