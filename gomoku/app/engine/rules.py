import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import List, Optional, Tuple

from gomoku.app.engine.board import Board, Cell
from gomoku.app.engine.constants import DIRECTIONS
from gomoku.app.engine.exceptions import InvalidMoveError, GameStateError

# Logger setup
logger = logging.getLogger(__name__)


class GameStatus(StrEnum):
    IN_PROGRESS = "IN_PROGRESS"
    WON = "WON"
    DRAW = "DRAW"


@dataclass(frozen=True)
class Move:
    row: int
    col: int
    side: Cell


def count_direction(board: Board, row: int, col: int, dr: int, dc: int, side: Cell) -> int:
    """Consecutive `side` stones starting next to (row, col), walking (dr, dc)."""
    count = 0
    r, c = row + dr, col + dc
    while board.is_valid_position(r, c) and board.get(r, c) is side:
        count += 1
        r += dr
        c += dc
    return count


def check_win(board: Board, row: int, col: int) -> bool:
    """Checks for a line of at least win_length through the stone at (row, col)."""
    side = board.get(row, col)
    if side is Cell.EMPTY:
        return False

    for dr, dc in DIRECTIONS:
        count = 1
        count += count_direction(board, row, col, dr, dc, side)
        count += count_direction(board, row, col, -dr, -dc, side)
        if count >= board.win_length:
            return True
    return False


def find_winner(board: Board) -> Optional[Cell]:
    """Full-board scan. Returns the side owning a winning line, or None."""
    for r in range(board.rows):
        for c in range(board.cols):
            if not board.is_empty(r, c) and check_win(board, r, c):
                return board.get(r, c)
    return None


class RulesEngine:
    def __init__(self, board: Board, starting_side: Cell = Cell.X):
        """
        Owns turn order, termination and undo/redo for one playthrough.
        Every rejected operation raises before touching the board.
        """
        if starting_side is Cell.EMPTY:
            raise ValueError("Starting side must be X or O")

        self.board = board
        self.starting_side = starting_side
        self.current_side = starting_side
        self.status = GameStatus.IN_PROGRESS
        self.winner: Optional[Cell] = None
        self.history: List[Move] = []
        self.redo_stack: List[Move] = []

        logger.info("New game created with %dx%d board (win length %d)",
                    board.rows, board.cols, board.win_length)

    @classmethod
    def from_board(cls, board: Board, starting_side: Cell = Cell.X) -> "RulesEngine":
        """
        Adopts a board restored from storage. History is not stored with a
        board, so undo starts empty. The side to move is derived from the
        stone counts: equal counts means the starting side is to move.
        """
        engine = cls(board, starting_side)
        mover_count = board.count(starting_side)
        other_count = board.count(starting_side.opponent())
        engine.current_side = starting_side if mover_count <= other_count else starting_side.opponent()

        winner = find_winner(board)
        if winner is not None:
            engine.status = GameStatus.WON
            engine.winner = winner
            engine.current_side = winner
        elif board.is_full():
            engine.status = GameStatus.DRAW
        return engine

    # --- Status ---

    @property
    def is_game_over(self) -> bool:
        return self.status is not GameStatus.IN_PROGRESS

    @property
    def can_undo(self) -> bool:
        return bool(self.history) and not self.is_game_over

    @property
    def can_redo(self) -> bool:
        return bool(self.redo_stack) and not self.is_game_over

    @property
    def last_move(self) -> Optional[Move]:
        return self.history[-1] if self.history else None

    # --- Moves ---

    def apply_move(self, row: int, col: int) -> Move:
        if self.is_game_over:
            raise GameStateError("Cannot make move: game is already over")

        if not self.board.is_valid_position(row, col):
            raise InvalidMoveError(f"Invalid position: ({row}, {col}) is out of bounds")

        if not self.board.is_empty(row, col):
            raise InvalidMoveError(f"Position ({row}, {col}) is already occupied")

        move = Move(row, col, self.current_side)
        self.board.set(row, col, move.side)
        self.history.append(move)
        self.redo_stack.clear()  # Redo is only valid right after undo
        logger.info("Player %s placed at (%d, %d)", move.side, row, col)

        self._settle(move)
        return move

    def undo(self) -> bool:
        if self.is_game_over:
            raise GameStateError("Cannot undo: game is already over")

        if not self.history:
            return False

        move = self.history.pop()
        self.board.set(move.row, move.col, Cell.EMPTY)
        self.redo_stack.append(move)
        self.current_side = move.side
        logger.info("Undid move at (%d, %d)", move.row, move.col)
        return True

    def redo(self) -> bool:
        if self.is_game_over:
            raise GameStateError("Cannot redo: game is already over")

        if not self.redo_stack:
            return False

        move = self.redo_stack.pop()
        self.board.set(move.row, move.col, move.side)
        self.history.append(move)
        # The turn passes before settling, so a redone win leaves the loser to move
        self.current_side = move.side.opponent()
        logger.info("Redid move at (%d, %d)", move.row, move.col)

        self._settle(move, pass_turn=False)
        return True

    def reset(self):
        self.board.clear()
        self.current_side = self.starting_side
        self.status = GameStatus.IN_PROGRESS
        self.winner = None
        self.history.clear()
        self.redo_stack.clear()
        logger.info("Game reset")

    def _settle(self, move: Move, pass_turn: bool = True):
        """Win/draw detection after `move` landed. Passes the turn otherwise, if asked."""
        if check_win(self.board, move.row, move.col):
            self.status = GameStatus.WON
            self.winner = move.side
            logger.info("Player %s wins!", move.side)
        elif self.board.is_full():
            self.status = GameStatus.DRAW
            logger.info("Game ended in a draw")
        elif pass_turn:
            self.switch_turn()

    def switch_turn(self):
        self.current_side = self.current_side.opponent()

    def get_move_list(self) -> List[Tuple[int, int, str]]:
        return [(m.row, m.col, str(m.side)) for m in self.history]
