"""Board coordinates.

Row 0 is black's back rank (top of the board), row 7 is white's.
Columns run left to right. Playable (dark) squares have an odd
``row + column``.
"""

from __future__ import annotations

from dataclasses import dataclass

BOARD_SIZE = 8


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Immutable (row, column) coordinate on the 8x8 board."""

    row: int
    column: int

    @property
    def is_on_board(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.column < BOARD_SIZE

    @property
    def is_dark(self) -> bool:
        return (self.row + self.column) % 2 == 1

    @property
    def index(self) -> int:
        """Flat 0-63 cell index (row-major)."""
        return self.row * BOARD_SIZE + self.column

    def offset(self, d_row: int, d_col: int) -> Position:
        return Position(self.row + d_row, self.column + d_col)

    def midpoint(self, other: Position) -> Position:
        return Position((self.row + other.row) // 2, (self.column + other.column) // 2)

    def __str__(self) -> str:
        return f"({self.row},{self.column})"


def is_valid_position(row: int, column: int) -> bool:
    """Check whether a coordinate pair lies on the board."""
    return 0 <= row < BOARD_SIZE and 0 <= column < BOARD_SIZE


def dark_squares() -> tuple[Position, ...]:
    """All 32 playable squares in row-major order."""
    return tuple(
        Position(r, c)
        for r in range(BOARD_SIZE)
        for c in range(BOARD_SIZE)
        if (r + c) % 2 == 1
    )


# ── Square numbering ────────────────────────────────────────────────────────
#
# Dark squares are numbered 1-32 row by row from black's back rank, the
# usual draughts convention: (0,1)=1, (0,3)=2, ..., (7,6)=32.


def square_number(pos: Position) -> int:
    """Draughts square number 1-32 of a dark square."""
    if not pos.is_on_board or not pos.is_dark:
        raise ValueError(f"Not a playable square: {pos}")
    return pos.row * 4 + pos.column // 2 + 1


def position_from_number(number: int) -> Position:
    """Inverse of :func:`square_number`, e.g. 1 -> (0,1), 32 -> (7,6)."""
    if not 1 <= number <= 32:
        raise ValueError(f"Square number out of range: {number}")
    row, col_pair = divmod(number - 1, 4)
    return Position(row, col_pair * 2 + (1 if row % 2 == 0 else 0))
