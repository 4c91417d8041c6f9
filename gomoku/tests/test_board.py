import unittest
from gomoku.app.engine.board import Board, Cell
from gomoku.app.engine.exceptions import ConfigurationError


def draw_pattern_board() -> Board:
    """5x5 board filled with no five-in-a-row for either side."""
    pattern = ["XXOOX", "OOXXO", "XXOOX", "OOXXO", "XXOOX"]
    board = Board(5, 5, 5)
    for r, line in enumerate(pattern):
        for c, symbol in enumerate(line):
            board.set(r, c, Cell(symbol))
    return board


class TestBoard(unittest.TestCase):
    def setUp(self):
        self.board = Board(15, 15, 5)

    def test_new_board_is_blank(self):
        self.assertEqual(self.board.rows, 15)
        self.assertEqual(self.board.cols, 15)
        self.assertEqual(self.board.win_length, 5)
        self.assertTrue(self.board.is_blank())
        self.assertFalse(self.board.is_full())
        for r in range(15):
            for c in range(15):
                self.assertIs(self.board.get(r, c), Cell.EMPTY)

    def test_dimension_limits(self):
        Board(5, 5)
        Board(25, 25)
        Board(5, 25, 3)
        Board(25, 5, 10)
        for rows, cols in [(4, 15), (15, 4), (26, 15), (15, 26), (0, 0)]:
            with self.assertRaises(ConfigurationError):
                Board(rows, cols)

    def test_win_length_limits(self):
        for win_length in (2, 11, 0):
            with self.assertRaises(ConfigurationError):
                Board(15, 15, win_length)

    def test_set_get_and_counts(self):
        self.board.set(7, 7, Cell.X)
        self.board.set(7, 8, Cell.O)
        self.assertIs(self.board.get(7, 7), Cell.X)
        self.assertIs(self.board.get(7, 8), Cell.O)
        self.assertFalse(self.board.is_empty(7, 7))
        self.assertTrue(self.board.is_empty(8, 8))
        self.assertEqual(self.board.stone_count, 2)
        self.assertEqual(self.board.count(Cell.X), 1)

        # Overwriting a stone keeps the count, emptying decrements it
        self.board.set(7, 7, Cell.O)
        self.assertEqual(self.board.stone_count, 2)
        self.board.set(7, 7, Cell.EMPTY)
        self.assertEqual(self.board.stone_count, 1)

    def test_valid_position(self):
        self.assertTrue(self.board.is_valid_position(0, 0))
        self.assertTrue(self.board.is_valid_position(14, 14))
        self.assertFalse(self.board.is_valid_position(-1, 0))
        self.assertFalse(self.board.is_valid_position(0, -1))
        self.assertFalse(self.board.is_valid_position(15, 0))
        self.assertFalse(self.board.is_valid_position(0, 15))

    def test_out_of_range_access_fails_fast(self):
        """Negative indices must not wrap around to the other edge."""
        with self.assertRaises(IndexError):
            self.board.get(-1, 0)
        with self.assertRaises(IndexError):
            self.board.get(0, 15)
        with self.assertRaises(IndexError):
            self.board.set(15, 0, Cell.X)
        with self.assertRaises(IndexError):
            self.board.is_empty(3, -2)
        self.assertTrue(self.board.is_blank())

    def test_rectangular_board(self):
        board = Board(6, 11)
        board.set(5, 10, Cell.X)
        self.assertIs(board.get(5, 10), Cell.X)
        self.assertFalse(board.is_valid_position(10, 5))

    def test_clear(self):
        self.board.set(0, 0, Cell.X)
        self.board.set(14, 14, Cell.O)
        self.board.clear()
        self.assertTrue(self.board.is_blank())
        self.assertTrue(self.board.is_empty(0, 0))
        self.assertTrue(self.board.is_empty(14, 14))

    def test_full_board(self):
        board = draw_pattern_board()
        self.assertTrue(board.is_full())
        self.assertEqual(board.stone_count, 25)

    def test_copy_is_independent(self):
        self.board.set(3, 3, Cell.X)
        clone = self.board.copy()
        self.assertEqual(clone, self.board)
        clone.set(4, 4, Cell.O)
        self.assertTrue(self.board.is_empty(4, 4))
        self.assertNotEqual(clone, self.board)


class TestBoardEncoding(unittest.TestCase):
    def test_encode_format(self):
        board = Board(5, 6, 4)
        board.set(1, 2, Cell.X)
        board.set(2, 2, Cell.O)
        lines = board.encode().splitlines()
        self.assertEqual(lines[0], "5 6 4")
        self.assertEqual(len(lines), 6)
        self.assertEqual(lines[2], "..X...")
        self.assertEqual(lines[3], "..O...")

    def test_round_trip_blank(self):
        board = Board(9, 13, 4)
        restored = Board.decode(board.encode())
        self.assertEqual(restored, board)
        self.assertEqual((restored.rows, restored.cols, restored.win_length), (9, 13, 4))

    def test_round_trip_full(self):
        board = draw_pattern_board()
        restored = Board.decode(board.encode())
        self.assertEqual(restored, board)
        self.assertTrue(restored.is_full())

    def test_round_trip_partial(self):
        board = Board(15, 15)
        for r, c, side in [(0, 0, Cell.X), (7, 7, Cell.O), (14, 14, Cell.X), (3, 11, Cell.O)]:
            board.set(r, c, side)
        restored = Board.decode(board.encode())
        self.assertEqual(restored, board)
        self.assertEqual(restored.stone_count, 4)
        self.assertIs(restored.get(3, 11), Cell.O)

    def test_decode_rejects_malformed_text(self):
        bad_inputs = [
            "",
            "5 5",
            "a b c\n.....",
            "5 5 5\n.....\n.....",                          # missing rows
            "5 5 5\n.....\n.....\n.....\n.....\n....",      # short row
            "5 5 5\n.....\n..Z..\n.....\n.....\n.....",     # unknown symbol
        ]
        for text in bad_inputs:
            with self.assertRaises(ValueError, msg=repr(text)):
                Board.decode(text)

    def test_decode_rejects_out_of_range_dimensions(self):
        with self.assertRaises(ConfigurationError):
            Board.decode("3 3 3\n...\n...\n...")


if __name__ == '__main__':
    unittest.main()
