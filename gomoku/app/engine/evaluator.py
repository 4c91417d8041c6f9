"""
Static position evaluation.

Every window of `win_length` consecutive cells along rows, columns and both
diagonals is scored on its own:

    - windows holding stones of both sides are dead and score 0
    - a window holding only one side's stones scores PATTERN_WEIGHTS[missing],
      where `missing` is how many more stones that side needs to fill it
    - the opponent's windows score the same weight, negated

Stones sitting in several overlapping windows are counted once per window,
which is what rewards dense clusters and open lines.
"""

from functools import lru_cache
from typing import List, Tuple

from gomoku.app.engine.board import Board, Cell
from gomoku.app.engine.constants import DIRECTIONS, PATTERN_WEIGHTS


@lru_cache(maxsize=64)
def windows_for(rows: int, cols: int, length: int) -> Tuple[Tuple[int, ...], ...]:
    """All windows as tuples of flat cell indices, for one board geometry."""
    windows: List[Tuple[int, ...]] = []
    for dr, dc in DIRECTIONS:
        for r in range(rows):
            for c in range(cols):
                end_r = r + dr * (length - 1)
                end_c = c + dc * (length - 1)
                if not (0 <= end_r < rows and 0 <= end_c < cols):
                    continue
                windows.append(tuple((r + dr * i) * cols + (c + dc * i) for i in range(length)))
    return tuple(windows)


def window_weight(own: int, length: int) -> int:
    missing = length - own
    if own == 0 or missing >= len(PATTERN_WEIGHTS):
        return 0
    return PATTERN_WEIGHTS[missing]


def score(board: Board, side: Cell) -> int:
    """Heuristic value of `board` for `side`. score(b, X) == -score(b, O)."""
    opponent = side.opponent()
    length = board.win_length
    cells = board.cells()

    total = 0
    for window in windows_for(board.rows, board.cols, length):
        own = 0
        other = 0
        for idx in window:
            value = cells[idx]
            if value is side:
                own += 1
            elif value is opponent:
                other += 1

        if own and other:
            continue
        if own:
            total += window_weight(own, length)
        elif other:
            total -= window_weight(other, length)

    return total
