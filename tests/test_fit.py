import unittest

from falling_blocks.game import Board, PieceId, Rotation, cells_at, fits


def _expected(board, piece, rotation, x, y):
    for cx, cy in cells_at(piece, rotation, x, y):
        if not 0 <= cx < board.width or cy < 0:
            return False
        if cy < board.height and board.cells[cy, cx]:
            return False
    return True


class TestFits(unittest.TestCase):
    def test_empty_board_bounds(self):
        board = Board(10, 20)
        for piece in PieceId:
            for rotation in Rotation:
                for x in range(-3, 14):
                    for y in range(-4, 24):
                        self.assertEqual(_expected(board, piece, rotation, x, y),
                                         fits(board, x, y, piece, rotation),
                                         f"{piece.name} {rotation.name} ({x}, {y})")

    def test_occupied_cells_block(self):
        board = Board(10, 20)
        for x, y in [(0, 0), (4, 1), (5, 2), (9, 7), (3, 12), (6, 19)]:
            board.cells[y, x] = True
        for piece in PieceId:
            for rotation in Rotation:
                for x in range(-1, 11):
                    for y in range(-1, 21):
                        self.assertEqual(_expected(board, piece, rotation, x, y),
                                         fits(board, x, y, piece, rotation))

    def test_bar_upright_near_top_fits(self):
        self.assertTrue(fits(Board(10, 20), 5, 19, PieceId.BAR, Rotation.RIGHT_90))

    def test_bar_upright_through_floor_does_not_fit(self):
        self.assertFalse(fits(Board(10, 20), 5, 2, PieceId.BAR, Rotation.RIGHT_90))

    def test_no_upper_bound(self):
        self.assertTrue(fits(Board(10, 20), 5, 25, PieceId.SQUARE, Rotation.NO_ROTATION))

    def test_does_not_mutate(self):
        board = Board(10, 20)
        fits(board, 5, 0, PieceId.T, Rotation.UPSIDE_DOWN)
        self.assertEqual(0, board.filled_count())


if __name__ == '__main__':
    unittest.main()
