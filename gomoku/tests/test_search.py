import unittest
from gomoku.app.engine.board import Board, Cell
from gomoku.app.engine.constants import WIN_SCORE, LOSE_SCORE
from gomoku.app.engine.evaluator import score as evaluate
from gomoku.app.engine.move_generator import candidate_moves
from gomoku.app.engine.rules import check_win
from gomoku.app.engine.search import SearchEngine, placed
from test_board import draw_pattern_board


class PlainMinimax:
    """Unpruned reference search: same move order, same scoring, every node visited."""

    def __init__(self, side: Cell, depth: int):
        self.side = side
        self.opponent = side.opponent()
        self.depth = depth
        self.nodes = 0

    def search(self, board: Board):
        best_score, best_move = None, None
        for row, col in candidate_moves(board):
            with placed(board, row, col, self.side):
                value = self._value(board, self.depth - 1, False, (row, col))
            if best_score is None or value > best_score:
                best_score, best_move = value, (row, col)
        return best_move, best_score

    def _value(self, board, depth, maximizing, last_move):
        self.nodes += 1
        if check_win(board, *last_move):
            return WIN_SCORE if board.get(*last_move) is self.side else LOSE_SCORE
        if board.is_full():
            return 0
        if depth == 0:
            return evaluate(board, self.side)

        side = self.side if maximizing else self.opponent
        values = []
        for row, col in candidate_moves(board):
            with placed(board, row, col, side):
                values.append(self._value(board, depth - 1, not maximizing, (row, col)))
        return max(values) if maximizing else min(values)


def board_with(rows, cols, win_length, stones):
    board = Board(rows, cols, win_length)
    for r, c, side in stones:
        board.set(r, c, side)
    return board


class TestSearchEngine(unittest.TestCase):
    def test_blank_board_plays_centre(self):
        engine = SearchEngine(side=Cell.X)
        for rows, cols, expected in [(15, 15, (7, 7)), (5, 5, (2, 2)), (6, 8, (3, 4)), (25, 10, (12, 5))]:
            result = engine.search(Board(rows, cols))
            self.assertEqual(result.move, expected)
            self.assertEqual(result.nodes_explored, 0)

    def test_full_board_has_no_move(self):
        engine = SearchEngine(side=Cell.O, depth=2)
        result = engine.search(draw_pattern_board())
        self.assertIsNone(result.move)
        self.assertIsNone(engine.select_move(draw_pattern_board()))

    def test_completes_own_line(self):
        """
        Scenario: O holds (4,2)-(4,5) on a 9x9 board.
        Either end wins at once; (4,1) comes first in generator order.
        """
        board = board_with(9, 9, 5, [
            (4, 2, Cell.O), (4, 3, Cell.O), (4, 4, Cell.O), (4, 5, Cell.O),
            (2, 2, Cell.X), (2, 3, Cell.X), (2, 4, Cell.X), (6, 6, Cell.X), (0, 8, Cell.X),
        ])
        result = SearchEngine(side=Cell.O, depth=2).search(board)
        self.assertEqual(result.move, (4, 1))
        self.assertEqual(result.score, WIN_SCORE)

    def test_blocks_closed_four(self):
        """
        Scenario: X holds (4,2)-(4,5) with O already on (4,1).
        (4,6) is the only cell that stops X from winning next turn.
        """
        board = board_with(9, 9, 5, [
            (4, 2, Cell.X), (4, 3, Cell.X), (4, 4, Cell.X), (4, 5, Cell.X),
            (4, 1, Cell.O), (0, 0, Cell.O), (8, 8, Cell.O),
        ])
        result = SearchEngine(side=Cell.O, depth=2).search(board)
        self.assertEqual(result.move, (4, 6))
        self.assertGreater(result.score, LOSE_SCORE)

    def test_existing_line_is_terminal(self):
        """A winner already on the board decides every branch."""
        board = board_with(9, 9, 5, [(0, c, Cell.X) for c in range(5)] + [(8, 8, Cell.O)])
        result = SearchEngine(side=Cell.O, depth=2).search(board)
        self.assertEqual(result.score, LOSE_SCORE)
        self.assertEqual(result.move, candidate_moves(board)[0])

    def test_matches_plain_minimax(self):
        """
        Alpha-beta must return the same move and score as the unpruned
        search, while visiting fewer nodes.
        """
        positions = [
            (5, 5, 5, 3, Cell.O, [(2, 2, Cell.X), (1, 1, Cell.O), (2, 3, Cell.X)]),
            (5, 5, 4, 3, Cell.X, [(2, 2, Cell.X), (2, 1, Cell.O), (1, 2, Cell.X), (3, 3, Cell.O)]),
            (6, 6, 4, 2, Cell.O, [(2, 2, Cell.X), (3, 3, Cell.O), (2, 3, Cell.X), (1, 4, Cell.O), (2, 4, Cell.X)]),
        ]
        for rows, cols, win_length, depth, side, stones in positions:
            with self.subTest(rows=rows, cols=cols, win_length=win_length, depth=depth):
                board = board_with(rows, cols, win_length, stones)
                reference = PlainMinimax(side, depth)
                expected_move, expected_score = reference.search(board)

                engine = SearchEngine(side=side, depth=depth)
                result = engine.search(board)

                self.assertEqual(result.move, expected_move)
                self.assertEqual(result.score, expected_score)
                self.assertLessEqual(result.nodes_explored, reference.nodes)

    def test_pruning_saves_nodes(self):
        board = board_with(7, 7, 5, [(3, 3, Cell.X), (3, 4, Cell.O), (4, 3, Cell.X)])
        reference = PlainMinimax(Cell.O, 3)
        reference.search(board)
        result = SearchEngine(side=Cell.O, depth=3).search(board)
        self.assertLess(result.nodes_explored, reference.nodes)

    def test_board_restored_after_search(self):
        board = board_with(9, 9, 5, [(4, 4, Cell.X), (4, 5, Cell.O), (5, 5, Cell.X)])
        snapshot = board.copy()
        SearchEngine(side=Cell.O, depth=3).search(board)
        self.assertEqual(board, snapshot)
        self.assertEqual(board.stone_count, 3)

    def test_deterministic(self):
        board = board_with(9, 9, 5, [(4, 4, Cell.X), (3, 3, Cell.O), (5, 4, Cell.X)])
        first = SearchEngine(side=Cell.O, depth=2).search(board)
        second = SearchEngine(side=Cell.O, depth=2).search(board)
        self.assertEqual(first, second)

    def test_invalid_configuration(self):
        with self.assertRaises(ValueError):
            SearchEngine(side=Cell.EMPTY)
        with self.assertRaises(ValueError):
            SearchEngine(side=Cell.X, depth=0)


class TestPlaced(unittest.TestCase):
    def test_cell_emptied_on_error(self):
        board = Board(5, 5)
        with self.assertRaises(RuntimeError):
            with placed(board, 1, 1, Cell.X):
                self.assertIs(board.get(1, 1), Cell.X)
                raise RuntimeError("boom")
        self.assertTrue(board.is_empty(1, 1))


if __name__ == '__main__':
    unittest.main()
