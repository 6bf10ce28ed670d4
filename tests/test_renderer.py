import os
import unittest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pygame

from falling_blocks.game import ActivePiece, Board, Intents, PieceId, RowRun
from falling_blocks.visualization.human_play import KeyboardIntents
from falling_blocks.visualization.renderer import (
    PIXEL_ON,
    Renderer,
    board_before_clear,
    clear_animation_frames,
    clear_column_order,
)


class TestClearAnimation(unittest.TestCase):
    def test_column_order_from_centre(self):
        self.assertEqual([4, 5, 3, 6, 2, 7, 1, 8, 0, 9], clear_column_order(10))
        self.assertEqual([4, 3, 5, 2, 6, 1, 7, 0, 8], clear_column_order(9))

    def test_board_before_clear_restores_rows(self):
        board = Board(10, 20)
        board.cells[0, 3] = True
        board.cells[1:3] = True
        board.cells[3, 6] = True
        before = board.clone_state()
        board.clear_run(RowRun(start=1, length=2))
        np.testing.assert_array_equal(before, board_before_clear(board.cells, (1, 2)))

    def test_frames_erase_cleared_rows(self):
        board = np.zeros((20, 10), dtype=np.bool_)
        frames = list(clear_animation_frames(board, (0,)))
        self.assertEqual(10, len(frames))
        self.assertEqual(9, int(frames[0][0].sum()))
        self.assertFalse(frames[0][0, 4])
        self.assertFalse(frames[-1][0].any())


class TestRenderer(unittest.TestCase):
    def test_blocks_drawn_bottom_up(self):
        renderer = Renderer()
        board = np.zeros((20, 10), dtype=np.bool_)
        board[0, 0] = True
        renderer.draw_frame()
        renderer.draw_blocks(board, ActivePiece(PieceId.SINGLE, 9, 19))
        bottom_left = renderer.block_rect(0, 0)
        top_right = renderer.block_rect(9, 19)
        self.assertGreater(bottom_left.y, top_right.y)
        self.assertEqual(PIXEL_ON, tuple(renderer.canvas.get_at(bottom_left.topleft))[:3])
        self.assertEqual(PIXEL_ON, tuple(renderer.canvas.get_at(top_right.topleft))[:3])
        # Board sits inside the frame on a 128x64 canvas
        self.assertLess(renderer.frame_y2, 64)
        self.assertLessEqual(renderer.frame_x2, 128)


class TestKeyboardIntents(unittest.TestCase):
    def test_presses_are_one_shot(self):
        keys = KeyboardIntents()
        keys.handle(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_LEFT))
        keys.handle(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_UP))
        keys.handle(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a))
        self.assertEqual(Intents(move_left=True, rotate=True), keys.take())
        self.assertEqual(Intents(), keys.take())


if __name__ == '__main__':
    unittest.main()
