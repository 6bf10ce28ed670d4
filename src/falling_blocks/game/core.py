from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np

from .board import Board
from .fit import fits
from .pieces import NUM_PIECES, PieceId, Rotation, cells_at
from .rules import ScoringRules


logger = logging.getLogger(__name__)

PieceSource = Callable[[], int]


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    speed: int = 1
    max_speed: int = 10
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"board dimensions must be positive, got {self.width}x{self.height}")
        if not 1 <= self.speed <= self.max_speed:
            raise ValueError(f"speed must be in [1, {self.max_speed}], got {self.speed}")

    def drop_interval_for(self, speed: int) -> int:
        return self.max_speed + 1 - speed

    @property
    def drop_interval(self) -> int:
        return self.drop_interval_for(self.speed)


@dataclass(frozen=True)
class Intents:
    move_left: bool = False
    move_right: bool = False
    soft_drop: bool = False
    rotate: bool = False


@dataclass(frozen=True)
class ActivePiece:
    piece: PieceId
    x: int
    y: int
    rotation: Rotation = Rotation.NO_ROTATION

    def cells(self) -> List[Tuple[int, int]]:
        return cells_at(self.piece, self.rotation, self.x, self.y)


@dataclass(frozen=True)
class TickResult:
    board: np.ndarray
    active: Optional[ActivePiece]
    next_piece: PieceId
    score: int
    game_over: bool
    lines_cleared: int = 0
    locked: bool = False
    cleared_rows: Tuple[int, ...] = ()


@dataclass(frozen=True)
class EpisodeResult:
    final_score: int
    new_high_score: bool


class FallingBlockGame:
    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 piece_source: Optional[PieceSource] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self._piece_source = piece_source
        self.board = Board(self.config.width, self.config.height)
        self.score = 0
        self.high_score = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.game_over = False
        self.active: Optional[ActivePiece] = None
        self.next_piece = PieceId.SINGLE
        self.speed = self.config.speed
        self.ticks_till_fall = self._drop_interval
        self.begin_episode()

    @property
    def _drop_interval(self) -> int:
        return self.config.drop_interval_for(self.speed)

    @property
    def spawn_position(self) -> Tuple[int, int]:
        return self.board.width // 2, self.board.height - 1

    def _draw_piece(self) -> PieceId:
        if self._piece_source is not None:
            return PieceId(self._piece_source())
        return PieceId(self.rng.randrange(NUM_PIECES))

    def begin_episode(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.board.reset()
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.game_over = False
        self.active = None
        self.next_piece = self._draw_piece()
        self.speed = self.config.speed
        self.ticks_till_fall = self._drop_interval

    def end_episode(self) -> EpisodeResult:
        new_high = self.score > self.high_score
        if new_high:
            self.high_score = self.score
            logger.info("new high score %d", self.score)
        return EpisodeResult(final_score=self.score, new_high_score=new_high)

    def _spawn(self) -> bool:
        x, y = self.spawn_position
        if not fits(self.board, x, y, self.next_piece, Rotation.NO_ROTATION):
            return False
        self.active = ActivePiece(self.next_piece, x, y, Rotation.NO_ROTATION)
        self.next_piece = self._draw_piece()
        return True

    def _lock(self, piece: ActivePiece) -> None:
        self.board.fill(piece.cells())
        self.active = None
        self.pieces_locked += 1
        logger.debug("locked %s at (%d, %d) %s", piece.piece.name, piece.x, piece.y, piece.rotation.name)

    def _clear_lines(self) -> Tuple[int, Tuple[int, ...]]:
        run = self.board.find_completed_run()
        if run is None:
            return 0, ()
        self.board.clear_run(run)
        gained = self.rules.score_for_lines(run.length)
        self.score += gained
        self.lines_cleared_total += run.length
        logger.debug("cleared %d row(s) from row %d, +%d", run.length, run.start, gained)
        return run.length, run.rows

    def tick(self, intents: Optional[Intents] = None) -> TickResult:
        intents = intents or Intents()
        if self.game_over:
            return self.snapshot()

        # Tentative targets; nothing below commits without a fit check
        piece = self.active
        if piece is not None:
            target_x, target_y, target_rot = piece.x, piece.y, piece.rotation
            if intents.soft_drop:
                target_y -= 1
            if intents.move_left:
                target_x -= 1
            if intents.move_right:
                target_x += 1
            if intents.rotate:
                target_rot = target_rot.next()
        else:
            if not self._spawn():
                self.game_over = True
                logger.info("game over with score %d", self.score)
                return self.snapshot()
            piece = self.active
            assert piece is not None
            # Intents from the spawning tick have no piece to act on
            target_x, target_y, target_rot = piece.x, piece.y, piece.rotation

        self.ticks_till_fall -= 1
        if self.ticks_till_fall <= 0:
            self.ticks_till_fall = self._drop_interval
            if target_y == piece.y:
                target_y = piece.y - 1

        x, y, rotation = piece.x, piece.y, piece.rotation
        if target_x != x and fits(self.board, target_x, y, piece.piece, rotation):
            x = target_x
        if target_rot != rotation and fits(self.board, x, y, piece.piece, target_rot):
            rotation = target_rot

        lines, cleared_rows, locked = 0, (), False
        piece = ActivePiece(piece.piece, x, y, rotation)
        if target_y < y:
            if fits(self.board, x, target_y, piece.piece, rotation):
                piece = ActivePiece(piece.piece, x, target_y, rotation)
            else:
                self._lock(piece)
                locked = True
                lines, cleared_rows = self._clear_lines()
        if not locked:
            self.active = piece

        return self.snapshot(lines_cleared=lines, locked=locked, cleared_rows=cleared_rows)

    def snapshot(self, lines_cleared: int = 0, locked: bool = False,
                 cleared_rows: Tuple[int, ...] = ()) -> TickResult:
        return TickResult(
            board=self.board.clone_state(),
            active=self.active,
            next_piece=self.next_piece,
            score=self.score,
            game_over=self.game_over,
            lines_cleared=lines_cleared,
            locked=locked,
            cleared_rows=cleared_rows,
        )

    def get_state(self) -> np.ndarray:
        """Board as int8 with locked cells = 1 and the falling piece = 2."""
        state = self.board.clone_state().astype(np.int8)
        if self.active is not None:
            for x, y in self.active.cells():
                if self.board.is_inside(x, y):
                    state[y, x] = 2
        return state
