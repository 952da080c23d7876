"""Text notation: board diagrams and numeric move notation.

Diagram format: eight lines of eight characters, row 0 first. ``.`` is an
empty cell, ``w``/``b`` are men and ``W``/``B`` kings. Whitespace inside a
line is ignored, so ``"w . b"`` and ``"w.b"`` read the same.
"""

from __future__ import annotations

import re

from checkie.core.board import Board
from checkie.core.move import Move
from checkie.core.piece import Piece
from checkie.core.types import BOARD_SIZE, Position, position_from_number

STARTING_DIAGRAM = "\n".join(
    (
        ".b.b.b.b",
        "b.b.b.b.",
        ".b.b.b.b",
        "........",
        "........",
        "w.w.w.w.",
        ".w.w.w.w",
        "w.w.w.w.",
    )
)

_MOVE_RE = re.compile(r"^\s*(\d{1,2})\s*([-x])\s*(\d{1,2})\s*$")


def board_from_diagram(diagram: str) -> Board:
    """Parse a diagram into a :class:`Board`."""
    lines = [
        "".join(line.split())
        for line in diagram.strip().splitlines()
        if line.strip()
    ]
    if len(lines) != BOARD_SIZE:
        raise ValueError(f"Diagram must have {BOARD_SIZE} rows, got {len(lines)}")

    pieces: list[Piece] = []
    for row, line in enumerate(lines):
        if len(line) != BOARD_SIZE:
            raise ValueError(f"Diagram row {row} must have {BOARD_SIZE} cells: {line!r}")
        for col, char in enumerate(line):
            if char == ".":
                continue
            pieces.append(Piece.from_char(char, Position(row, col)))
    return Board.from_pieces(pieces)


def board_to_diagram(board: Board) -> str:
    """Inverse of :func:`board_from_diagram` (compact form)."""
    rows: list[str] = []
    for row in range(BOARD_SIZE):
        cells = []
        for col in range(BOARD_SIZE):
            piece = board[Position(row, col)]
            cells.append(str(piece) if piece else ".")
        rows.append("".join(cells))
    return "\n".join(rows)


def parse_move(text: str) -> Move:
    """Parse numeric notation, e.g. ``"22-18"`` or ``"23x14"``."""
    match = _MOVE_RE.match(text)
    if match is None:
        raise ValueError(f"Invalid move text: {text!r}")
    from_num, sep, to_num = match.groups()
    move = Move(position_from_number(int(from_num)), position_from_number(int(to_num)))

    d_row = abs(move.to_pos.row - move.from_pos.row)
    d_col = abs(move.to_pos.column - move.from_pos.column)
    expected = 2 if sep == "x" else 1
    if d_row != expected or d_col != expected:
        raise ValueError(f"Not a diagonal {'jump' if sep == 'x' else 'step'}: {text!r}")
    return move
