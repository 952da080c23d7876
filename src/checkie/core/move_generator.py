"""Legal move generation with the forced-capture rule."""

from __future__ import annotations

from checkie.core.board import Board
from checkie.core.enums import Player
from checkie.core.move import Move
from checkie.core.piece import Piece
from checkie.core.types import Position

KING_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
_MAN_DIRS: dict[Player, tuple[tuple[int, int], ...]] = {
    Player.WHITE: ((-1, -1), (-1, 1)),
    Player.BLACK: ((1, -1), (1, 1)),
}


def piece_directions(piece: Piece) -> tuple[tuple[int, int], ...]:
    """Diagonals *piece* may travel: all four for kings, forward for men."""
    if piece.is_king:
        return KING_DIRS
    return _MAN_DIRS[piece.owner]


class MoveGenerator:
    """Generates legal moves on a :class:`Board`.

    Generation order is deterministic: pieces row-major, then directions
    in the order of :func:`piece_directions`. Callers that need "the first
    available capture" rely on this.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def generate_moves(self, player: Player) -> list[Move]:
        """All legal moves for *player*.

        If any piece can capture, only captures are returned (forced
        capture); otherwise all simple moves. Empty means *player* is
        blocked or has no pieces.
        """
        simple: list[Move] = []
        captures: list[Move] = []
        for piece in self._board.pieces(player):
            self._gen_piece(piece, simple, captures)
        return captures if captures else simple

    def moves_for_piece(self, position: Position) -> list[Move]:
        """Legal moves of the piece on *position*, after the global filter.

        A piece with only simple moves gets nothing while another piece of
        the same side can capture.
        """
        piece = self._board[position]
        if piece is None:
            return []
        return [m for m in self.generate_moves(piece.owner) if m.from_pos == position]

    def capture_moves_from(self, position: Position) -> list[Move]:
        """Captures available to the piece on *position* alone."""
        piece = self._board[position]
        if piece is None:
            return []
        captures: list[Move] = []
        self._gen_piece(piece, [], captures)
        return captures

    def can_continue_capture(self, position: Position) -> bool:
        """Whether the piece on *position* has a further jump."""
        return bool(self.capture_moves_from(position))

    def has_moves(self, player: Player) -> bool:
        return bool(self.generate_moves(player))

    # -- Internal generators ------------------------------------------------

    def _gen_piece(
        self,
        piece: Piece,
        simple: list[Move],
        captures: list[Move],
    ) -> None:
        board = self._board
        origin = piece.position
        for d_row, d_col in piece_directions(piece):
            step = origin.offset(d_row, d_col)
            if not step.is_on_board:
                continue
            occupant = board[step]
            if occupant is None:
                simple.append(Move(origin, step))
                continue
            if occupant.owner == piece.owner:
                continue
            landing = origin.offset(2 * d_row, 2 * d_col)
            if landing.is_on_board and board.is_empty(landing):
                captures.append(Move(origin, landing))
