"""High-level draughts rules: move application, chains, win detection."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from checkie.core.board import Board
from checkie.core.enums import Player
from checkie.core.move import Move
from checkie.core.move_generator import MoveGenerator

ChainPicker = Callable[[Sequence[Move]], Move]


def first_capture(moves: Sequence[Move]) -> Move:
    """Greedy continuation: the first capture in generation order."""
    return moves[0]


class Rules:
    """Static rule functions over immutable :class:`Board` values."""

    # Product policy:
    # - A side with zero pieces has lost.
    # - A side with pieces but no legal move is NOT a loss here; the game
    #   controller decides what a blocked turn means.

    @staticmethod
    def apply_move(board: Board, move: Move) -> tuple[Board, bool]:
        """Apply a single step and return ``(new_board, was_capture)``.

        Caller is responsible for legality. *board* is left untouched.
        """
        piece = board[move.from_pos]
        if piece is None:
            return board, False

        changes = {move.from_pos: None}
        captured = move.captured
        if captured is not None:
            changes[captured] = None

        moved = piece.moved_to(move.to_pos)
        if not moved.is_king and move.to_pos.row == piece.owner.promotion_row:
            moved = moved.promoted()
        changes[move.to_pos] = moved

        return board.replace(changes), move.is_capture

    @staticmethod
    def apply_capture_chain(
        board: Board,
        move: Move,
        pick: ChainPicker = first_capture,
    ) -> tuple[Board, list[Move]]:
        """Apply *move* and, if it captured, every further jump of the piece.

        *pick* chooses among the available continuations at each step.
        Returns the final board and all steps applied, *move* first.
        """
        board, was_capture = Rules.apply_move(board, move)
        steps = [move]
        current = move.to_pos
        while was_capture:
            continuations = MoveGenerator(board).capture_moves_from(current)
            if not continuations:
                break
            step = pick(continuations)
            board, was_capture = Rules.apply_move(board, step)
            steps.append(step)
            current = step.to_pos
        return board, steps

    @staticmethod
    def evaluate_winner(board: Board) -> Player | None:
        """The opponent of a side that has no pieces left, else None."""
        if not board.has_pieces(Player.WHITE):
            return Player.BLACK
        if not board.has_pieces(Player.BLACK):
            return Player.WHITE
        return None

    @staticmethod
    def is_blocked(board: Board, player: Player) -> bool:
        """Whether *player* still has pieces but no legal move."""
        return board.has_pieces(player) and not MoveGenerator(board).has_moves(player)
