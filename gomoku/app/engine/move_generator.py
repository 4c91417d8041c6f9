# gomoku/app/engine/move_generator.py
from typing import List, Set, Tuple

from gomoku.app.engine.board import Board, Cell
from gomoku.app.engine.constants import NEIGHBOR_OFFSETS


def candidate_moves(board: Board) -> List[Tuple[int, int]]:
    """
    Empty cells adjacent to at least one stone (the frontier).

    Order is deterministic: occupied cells in row-major order, and for each
    of them the neighbours in NEIGHBOR_OFFSETS order. The search breaks ties
    on this order, so do not sort the result.
    """
    rows, cols = board.rows, board.cols
    cells = board.cells()

    moves: List[Tuple[int, int]] = []
    seen: Set[Tuple[int, int]] = set()

    for idx, value in enumerate(cells):
        if value is Cell.EMPTY:
            continue
        r, c = divmod(idx, cols)
        for dr, dc in NEIGHBOR_OFFSETS:
            nr, nc = r + dr, c + dc
            if 0 <= nr < rows and 0 <= nc < cols and cells[nr * cols + nc] is Cell.EMPTY:
                if (nr, nc) not in seen:
                    seen.add((nr, nc))
                    moves.append((nr, nc))

    # Blank board (or no frontier at all): every empty cell
    if not moves:
        moves = [divmod(idx, cols) for idx, value in enumerate(cells) if value is Cell.EMPTY]

    return moves
