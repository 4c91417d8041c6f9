# gomoku/app/engine/search.py
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional, Tuple

from gomoku.app.engine.board import Board, Cell
from gomoku.app.engine.constants import WIN_SCORE, LOSE_SCORE, DRAW_SCORE, SEARCH_DEPTH
from gomoku.app.engine.evaluator import score as evaluate
from gomoku.app.engine.move_generator import candidate_moves
from gomoku.app.engine.rules import check_win, find_winner

logger = logging.getLogger(__name__)

# Wider than any reachable score, used as the open alpha-beta window
SCORE_INF = WIN_SCORE * 10


@dataclass
class SearchResult:
    move: Optional[Tuple[int, int]]
    score: int
    nodes_explored: int


@contextmanager
def placed(board: Board, row: int, col: int, side: Cell):
    """Tentatively puts a stone on (row, col). The cell is emptied on every exit."""
    board.set(row, col, side)
    try:
        yield
    finally:
        board.set(row, col, Cell.EMPTY)


class SearchEngine:
    def __init__(self, side: Cell = Cell.O, depth: int = SEARCH_DEPTH):
        """
        Fixed-depth minimax with alpha-beta pruning.

        The board passed to search() is mutated in place while exploring and
        restored before returning, so callers must not touch it concurrently.
        """
        if side is Cell.EMPTY:
            raise ValueError("Search side must be X or O")
        if depth < 1:
            raise ValueError("Search depth must be at least one ply")
        self.side = side
        self.opponent = side.opponent()
        self.depth = depth
        self.nodes = 0
        self._root_winner: Optional[Cell] = None

    def select_move(self, board: Board) -> Optional[Tuple[int, int]]:
        return self.search(board).move

    def search(self, board: Board) -> SearchResult:
        """Root entry point. Returns the first best candidate in generator order."""
        self.nodes = 0

        # Opening move: centre, no search
        if board.is_blank():
            center = (board.rows // 2, board.cols // 2)
            logger.info("Playing first move at centre %s", center)
            return SearchResult(move=center, score=0, nodes_explored=0)

        moves = candidate_moves(board)
        if not moves:
            logger.warning("No available moves for %s", self.side)
            return SearchResult(move=None, score=DRAW_SCORE, nodes_explored=0)

        # A line already on the board decides every branch below the root
        self._root_winner = find_winner(board)

        logger.debug("Evaluating %d candidate moves at depth %d", len(moves), self.depth)

        best_score = -SCORE_INF
        best_move = moves[0]
        alpha, beta = -SCORE_INF, SCORE_INF

        try:
            for row, col in moves:
                with placed(board, row, col, self.side):
                    value = self.minimax(board, self.depth - 1, alpha, beta, False, last_move=(row, col))

                # Strictly greater: earlier candidates win ties
                if value > best_score:
                    best_score = value
                    best_move = (row, col)
                alpha = max(alpha, value)
        finally:
            self._root_winner = None

        logger.info("%s selected move at %s with score %d (%d nodes)",
                    self.side, best_move, best_score, self.nodes)
        return SearchResult(move=best_move, score=best_score, nodes_explored=self.nodes)

    def minimax(self, board: Board, depth: int, alpha: int, beta: int, maximizing: bool,
                last_move: Optional[Tuple[int, int]] = None) -> int:
        self.nodes += 1

        # 1. Terminal positions, independent of remaining depth
        terminal = self._terminal_score(board, last_move)
        if terminal is not None:
            return terminal

        # 2. Horizon
        if depth == 0:
            return evaluate(board, self.side)

        # 3. Recursive search
        moves = candidate_moves(board)

        if maximizing:
            best = -SCORE_INF
            for row, col in moves:
                with placed(board, row, col, self.side):
                    value = self.minimax(board, depth - 1, alpha, beta, False, last_move=(row, col))
                best = max(best, value)
                alpha = max(alpha, value)
                if beta <= alpha:
                    break  # Beta cutoff
            return best

        best = SCORE_INF
        for row, col in moves:
            with placed(board, row, col, self.opponent):
                value = self.minimax(board, depth - 1, alpha, beta, True, last_move=(row, col))
            best = min(best, value)
            beta = min(beta, value)
            if beta <= alpha:
                break  # Alpha cutoff
        return best

    def _terminal_score(self, board: Board, last_move: Optional[Tuple[int, int]]) -> Optional[int]:
        # Only the last stone can have completed a line, unless the caller
        # gave us no history to go on.
        if self._root_winner is not None:
            winner = self._root_winner
        elif last_move is not None:
            winner = board.get(*last_move) if check_win(board, *last_move) else None
        else:
            winner = find_winner(board)

        if winner is self.side:
            return WIN_SCORE
        if winner is self.opponent:
            return LOSE_SCORE
        if board.is_full():
            return DRAW_SCORE
        return None
