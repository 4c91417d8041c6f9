from enum import StrEnum
from typing import List, Optional

from gomoku.app.engine.constants import (
    MIN_BOARD_SIZE, MAX_BOARD_SIZE, DEFAULT_BOARD_SIZE,
    MIN_WIN_LENGTH, MAX_WIN_LENGTH, DEFAULT_WIN_LENGTH,
)
from gomoku.app.engine.exceptions import ConfigurationError


class Cell(StrEnum):
    EMPTY = "."
    X = "X"  # Moves first
    O = "O"

    def opponent(self) -> "Cell":
        if self is Cell.X:
            return Cell.O
        if self is Cell.O:
            return Cell.X
        raise ValueError("EMPTY has no opponent")


class Board:
    def __init__(self, rows: int = DEFAULT_BOARD_SIZE, cols: int = DEFAULT_BOARD_SIZE,
                 win_length: int = DEFAULT_WIN_LENGTH):
        """
        Board uses (row, col) indexing, row 0 is the TOP.
        Cells are stored row-major in a flat list.
        """
        if not (MIN_BOARD_SIZE <= rows <= MAX_BOARD_SIZE) or not (MIN_BOARD_SIZE <= cols <= MAX_BOARD_SIZE):
            raise ConfigurationError(
                f"Board size must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}, got {rows}x{cols}"
            )
        if not (MIN_WIN_LENGTH <= win_length <= MAX_WIN_LENGTH):
            raise ConfigurationError(
                f"Win length must be between {MIN_WIN_LENGTH} and {MAX_WIN_LENGTH}, got {win_length}"
            )

        self._rows = rows
        self._cols = cols
        self._win_length = win_length
        self._cells: List[Cell] = [Cell.EMPTY] * (rows * cols)
        self._filled = 0

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def win_length(self) -> int:
        return self._win_length

    @property
    def stone_count(self) -> int:
        return self._filled

    def is_valid_position(self, row: int, col: int) -> bool:
        return 0 <= row < self._rows and 0 <= col < self._cols

    def _index(self, row: int, col: int) -> int:
        # Callers must check is_valid_position first. Fail fast otherwise,
        # negative indices would silently wrap around the flat list.
        if not self.is_valid_position(row, col):
            raise IndexError(f"Position ({row}, {col}) is outside a {self._rows}x{self._cols} board")
        return row * self._cols + col

    def get(self, row: int, col: int) -> Cell:
        return self._cells[self._index(row, col)]

    def set(self, row: int, col: int, value: Cell):
        idx = self._index(row, col)
        value = Cell(value)
        previous = self._cells[idx]
        if previous is Cell.EMPTY and value is not Cell.EMPTY:
            self._filled += 1
        elif previous is not Cell.EMPTY and value is Cell.EMPTY:
            self._filled -= 1
        self._cells[idx] = value

    def is_empty(self, row: int, col: int) -> bool:
        return self.get(row, col) is Cell.EMPTY

    def is_full(self) -> bool:
        return self._filled == len(self._cells)

    def is_blank(self) -> bool:
        """True when no stone has been placed."""
        return self._filled == 0

    def count(self, side: Cell) -> int:
        return self._cells.count(side)

    def cells(self) -> tuple:
        """Row-major snapshot of every cell, for bulk scans."""
        return tuple(self._cells)

    def clear(self):
        self._cells = [Cell.EMPTY] * (self._rows * self._cols)
        self._filled = 0

    def copy(self) -> "Board":
        clone = Board(self._rows, self._cols, self._win_length)
        clone._cells = list(self._cells)
        clone._filled = self._filled
        return clone

    # --- Text encoding (persistence) ---

    def encode(self) -> str:
        """
        Header line 'rows cols win_length' followed by one line per row.
        Example (5x5, win 4):
            5 5 4
            .....
            ..X..
            ..O..
            .....
            .....
        """
        lines = [f"{self._rows} {self._cols} {self._win_length}"]
        for r in range(self._rows):
            start = r * self._cols
            lines.append("".join(self._cells[start:start + self._cols]))
        return "\n".join(lines)

    @classmethod
    def decode(cls, text: str) -> "Board":
        lines = [line.strip() for line in text.strip().splitlines()]
        if not lines:
            raise ValueError("Cannot decode an empty board string")

        header = lines[0].split()
        if len(header) != 3:
            raise ValueError(f"Malformed board header: {lines[0]!r}")
        try:
            rows, cols, win_length = (int(v) for v in header)
        except ValueError:
            raise ValueError(f"Malformed board header: {lines[0]!r}")

        board = cls(rows, cols, win_length)

        grid = lines[1:]
        if len(grid) != rows:
            raise ValueError(f"Expected {rows} rows, found {len(grid)}")

        for r, line in enumerate(grid):
            if len(line) != cols:
                raise ValueError(f"Row {r} has {len(line)} cells, expected {cols}")
            for c, symbol in enumerate(line):
                try:
                    value = Cell(symbol)
                except ValueError:
                    raise ValueError(f"Unknown cell symbol {symbol!r} at ({r}, {c})")
                if value is not Cell.EMPTY:
                    board.set(r, c, value)

        return board

    # --- Formatting ---

    def get_visual_board(self, last_move: Optional[tuple] = None) -> str:
        """ASCII grid with column/row headers. The last move is bracketed."""
        header = "   " + "".join(f"{c:3}" for c in range(self._cols))
        rows_str = []
        for r in range(self._rows):
            cells = []
            for c in range(self._cols):
                symbol = self.get(r, c)
                if last_move is not None and (r, c) == tuple(last_move):
                    cells.append(f"[{symbol}]")
                else:
                    cells.append(f" {symbol} ")
            rows_str.append(f"{r:3}" + "".join(cells))
        return header + "\n" + "\n".join(rows_str)

    def to_matrix(self) -> List[List[str]]:
        return [
            [str(self._cells[r * self._cols + c]) for c in range(self._cols)]
            for r in range(self._rows)
        ]

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._rows == other._rows
            and self._cols == other._cols
            and self._win_length == other._win_length
            and self._cells == other._cells
        )

    def __repr__(self):
        return f"Board(rows={self._rows}, cols={self._cols}, win_length={self._win_length}, stones={self._filled})"
