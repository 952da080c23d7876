"""Core domain layer — pure draughts logic with zero external dependencies.

Quick start::

    from checkie.core import Board, MoveGenerator, Player, Rules

    board = Board.initial()
    for move in MoveGenerator(board).generate_moves(Player.WHITE):
        print(move)
    board, was_capture = Rules.apply_move(board, move)
"""

from checkie.core.board import Board
from checkie.core.enums import PieceKind, Player
from checkie.core.move import Move
from checkie.core.move_generator import MoveGenerator, piece_directions
from checkie.core.notation import (
    STARTING_DIAGRAM,
    board_from_diagram,
    board_to_diagram,
    parse_move,
)
from checkie.core.piece import Piece
from checkie.core.rules import Rules, first_capture
from checkie.core.types import (
    BOARD_SIZE,
    Position,
    dark_squares,
    is_valid_position,
    position_from_number,
    square_number,
)

__all__ = [
    # Enums
    "PieceKind",
    "Player",
    # Types / helpers
    "BOARD_SIZE",
    "Position",
    "dark_squares",
    "is_valid_position",
    "position_from_number",
    "square_number",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
    "first_capture",
    "piece_directions",
    # Notation
    "STARTING_DIAGRAM",
    "board_from_diagram",
    "board_to_diagram",
    "parse_move",
]
