from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np
import pygame

from falling_blocks.game import ActivePiece, Rotation, TickResult, occupied_cells


DISPLAY_WIDTH = 128
DISPLAY_HEIGHT = 64
BLOCK_SIZE = 3

PIXEL_ON = (230, 230, 230)
PIXEL_OFF = (10, 10, 14)


def clear_column_order(width: int) -> List[int]:
    """Columns from the horizontal centre outward, left of centre first."""
    order: List[int] = []
    left = (width - 1) // 2
    right = width // 2
    while left >= 0 or right < width:
        if left >= 0:
            order.append(left)
        if right < width and right != left:
            order.append(right)
        left -= 1
        right += 1
    return order


def board_before_clear(board: np.ndarray, cleared_rows: Sequence[int]) -> np.ndarray:
    """Rebuild the locked board as it was before `cleared_rows` were removed."""
    if not cleared_rows:
        return board.copy()
    start, n = cleared_rows[0], len(cleared_rows)
    h, w = board.shape
    full = np.ones((n, w), dtype=board.dtype)
    return np.vstack((board[:start], full, board[start:h - n]))


def clear_animation_frames(board: np.ndarray, cleared_rows: Sequence[int]) -> Iterator[np.ndarray]:
    """Yield boards with the cleared rows erased one column at a time."""
    stage = board_before_clear(board, cleared_rows)
    rows = list(cleared_rows)
    for col in clear_column_order(stage.shape[1]):
        stage[rows, col] = False
        yield stage.copy()


class Renderer:
    """Draws the game onto a small monochrome canvas and scales it to a window.

    The canvas mirrors a 128x64 display: the board frame occupies the right
    half and score / next piece the left half. Board row 0 is drawn at the
    bottom.
    """

    def __init__(self, board_width: int = 10, board_height: int = 20, block_size: int = BLOCK_SIZE,
                 scale: int = 6) -> None:
        self.board_width = board_width
        self.board_height = board_height
        self.block_size = block_size
        self.scale = scale
        self.canvas = pygame.Surface((DISPLAY_WIDTH, DISPLAY_HEIGHT))
        self._font: Optional[pygame.font.Font] = None

        self.frame_x1 = DISPLAY_WIDTH // 2
        self.frame_x2 = self.frame_x1 + board_width * block_size + 2
        self.frame_y1 = (DISPLAY_HEIGHT - block_size * board_height - 2) // 2
        self.frame_y2 = self.frame_y1 + board_height * block_size + 2

    @property
    def window_size(self) -> Tuple[int, int]:
        return DISPLAY_WIDTH * self.scale, DISPLAY_HEIGHT * self.scale

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, 11)
        return self._font

    def block_rect(self, col: int, row: int) -> pygame.Rect:
        x = self.frame_x1 + 1 + col * self.block_size
        y = DISPLAY_HEIGHT - (self.block_size - 1) - (self.frame_y1 + 1 + row * self.block_size)
        return pygame.Rect(x, y, self.block_size, self.block_size)

    def draw_frame(self) -> None:
        bottom = DISPLAY_HEIGHT - self.frame_y1
        top = DISPLAY_HEIGHT - self.frame_y2
        pygame.draw.line(self.canvas, PIXEL_ON, (self.frame_x1, bottom), (self.frame_x2, bottom))
        pygame.draw.line(self.canvas, PIXEL_ON, (self.frame_x1, top), (self.frame_x2, top))
        pygame.draw.line(self.canvas, PIXEL_ON, (self.frame_x1, top), (self.frame_x1, bottom))
        pygame.draw.line(self.canvas, PIXEL_ON, (self.frame_x2, top), (self.frame_x2, bottom))

    def draw_blocks(self, board: np.ndarray, active: Optional[ActivePiece] = None) -> None:
        h, w = board.shape
        for row in range(h):
            for col in range(w):
                if board[row, col]:
                    pygame.draw.rect(self.canvas, PIXEL_ON, self.block_rect(col, row))
        if active is not None:
            for col, row in active.cells():
                if 0 <= col < w and 0 <= row < h:
                    pygame.draw.rect(self.canvas, PIXEL_ON, self.block_rect(col, row))

    def draw_hud(self, score: int, high_score: int, next_piece: int) -> None:
        self.canvas.blit(self.font.render(f"SCORE {score}", False, PIXEL_ON), (2, 4))
        self.canvas.blit(self.font.render(f"HIGH {high_score}", False, PIXEL_ON), (2, 14))
        self.canvas.blit(self.font.render("NEXT", False, PIXEL_ON), (2, 28))
        # Preview anchored so offsets with dx in [-2, 2] stay on the left half
        origin_x, origin_y = 30, 40
        for dx, dy in occupied_cells(next_piece, Rotation.NO_ROTATION):
            rect = pygame.Rect(origin_x + dx * self.block_size, origin_y - dy * self.block_size,
                               self.block_size, self.block_size)
            pygame.draw.rect(self.canvas, PIXEL_ON, rect)

    def draw_text_screen(self, lines: Sequence[str]) -> None:
        self.canvas.fill(PIXEL_OFF)
        y = (DISPLAY_HEIGHT - 10 * len(lines)) // 2
        for line in lines:
            self.canvas.blit(self.font.render(line, False, PIXEL_ON), (10, y))
            y += 10

    def draw_game(self, board: np.ndarray, active: Optional[ActivePiece], score: int, high_score: int,
                  next_piece: int) -> None:
        self.canvas.fill(PIXEL_OFF)
        self.draw_frame()
        self.draw_blocks(board, active)
        self.draw_hud(score, high_score, next_piece)

    def draw(self, screen: pygame.Surface, result: TickResult, high_score: int) -> None:
        self.draw_game(result.board, result.active, result.score, high_score, result.next_piece)
        self.present(screen)

    def animate_clear(self, screen: pygame.Surface, result: TickResult, high_score: int,
                      step_ms: int = 25) -> None:
        for stage in clear_animation_frames(result.board, result.cleared_rows):
            self.draw_game(stage, None, result.score, high_score, result.next_piece)
            self.present(screen)
            pygame.time.wait(step_ms)

    def present(self, screen: pygame.Surface) -> None:
        pygame.transform.scale(self.canvas, screen.get_size(), screen)
        pygame.display.flip()
