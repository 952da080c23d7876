"""Tests for move generation and the forced-capture rule."""

import random

from checkie.core.board import Board
from checkie.core.enums import PieceKind, Player
from checkie.core.move import Move
from checkie.core.move_generator import MoveGenerator
from checkie.core.notation import board_from_diagram
from checkie.core.piece import Piece
from checkie.core.rules import Rules
from checkie.core.types import Position

P = Position


def _board(*pieces: tuple[str, int, int]) -> Board:
    return Board.from_pieces(Piece.from_char(c, P(r, col)) for c, r, col in pieces)


def perft(board: Board, player: Player, depth: int) -> int:
    """Count leaf nodes at *depth*, one step per ply."""
    if depth == 0:
        return 1
    nodes = 0
    for move in MoveGenerator(board).generate_moves(player):
        child, _ = Rules.apply_move(board, move)
        nodes += perft(child, player.opposite, depth - 1)
    return nodes


class TestOpening:
    def test_white_has_seven_simple_moves(self) -> None:
        moves = MoveGenerator(Board.initial()).generate_moves(Player.WHITE)
        assert len(moves) == 7
        assert not any(m.is_capture for m in moves)

    def test_black_has_seven_simple_moves(self) -> None:
        moves = MoveGenerator(Board.initial()).generate_moves(Player.BLACK)
        assert len(moves) == 7
        assert all(m.to_pos.row == 3 for m in moves)

    def test_perft_depth_2(self) -> None:
        assert perft(Board.initial(), Player.WHITE, 2) == 49

    def test_edge_man_has_one_move(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert gen.moves_for_piece(P(5, 0)) == [Move(P(5, 0), P(4, 1))]

    def test_back_row_men_blocked(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert gen.moves_for_piece(P(6, 1)) == []


class TestDirections:
    def test_white_man_moves_up(self) -> None:
        board = _board(("w", 4, 3))
        targets = {m.to_pos for m in MoveGenerator(board).generate_moves(Player.WHITE)}
        assert targets == {P(3, 2), P(3, 4)}

    def test_black_man_moves_down(self) -> None:
        board = _board(("b", 4, 3))
        targets = {m.to_pos for m in MoveGenerator(board).generate_moves(Player.BLACK)}
        assert targets == {P(5, 2), P(5, 4)}

    def test_king_moves_all_four_ways(self) -> None:
        board = _board(("W", 4, 3))
        targets = {m.to_pos for m in MoveGenerator(board).generate_moves(Player.WHITE)}
        assert targets == {P(3, 2), P(3, 4), P(5, 2), P(5, 4)}

    def test_corner_king(self) -> None:
        board = _board(("B", 7, 0))
        moves = MoveGenerator(board).generate_moves(Player.BLACK)
        assert moves == [Move(P(7, 0), P(6, 1))]

    def test_man_cannot_capture_backwards(self) -> None:
        board = _board(("w", 3, 4), ("b", 4, 5))
        moves = MoveGenerator(board).generate_moves(Player.WHITE)
        assert not any(m.is_capture for m in moves)

    def test_king_captures_backwards(self) -> None:
        board = _board(("W", 3, 4), ("b", 4, 5))
        moves = MoveGenerator(board).generate_moves(Player.WHITE)
        assert moves == [Move(P(3, 4), P(5, 6))]


class TestForcedCapture:
    def test_single_forced_capture(self) -> None:
        board = _board(("w", 3, 4), ("b", 2, 3))
        moves = MoveGenerator(board).generate_moves(Player.WHITE)
        assert moves == [Move(P(3, 4), P(1, 2))]

    def test_capture_blocked_by_occupied_landing(self) -> None:
        board = _board(("w", 3, 4), ("b", 2, 3), ("b", 1, 2))
        moves = MoveGenerator(board).generate_moves(Player.WHITE)
        assert moves == [Move(P(3, 4), P(2, 5))]

    def test_no_capture_over_own_piece(self) -> None:
        board = _board(("w", 3, 4), ("w", 2, 3))
        moves = MoveGenerator(board).generate_moves(Player.WHITE)
        assert not any(m.is_capture for m in moves)

    def test_capture_off_board_not_generated(self) -> None:
        board = _board(("w", 1, 0), ("b", 0, 1))
        assert MoveGenerator(board).generate_moves(Player.WHITE) == []

    def test_other_pieces_simple_moves_discarded(self) -> None:
        board = _board(("w", 3, 4), ("b", 2, 3), ("w", 6, 1))
        gen = MoveGenerator(board)
        assert all(m.is_capture for m in gen.generate_moves(Player.WHITE))
        assert gen.moves_for_piece(P(6, 1)) == []
        assert gen.moves_for_piece(P(3, 4)) == [Move(P(3, 4), P(1, 2))]

    def test_all_captures_kept(self) -> None:
        board = _board(("w", 5, 2), ("b", 4, 1), ("b", 4, 3), ("w", 5, 6), ("b", 4, 5))
        moves = MoveGenerator(board).generate_moves(Player.WHITE)
        assert len(moves) == 3
        assert all(m.is_capture for m in moves)


class TestPieceQueries:
    def test_moves_for_empty_cell(self) -> None:
        assert MoveGenerator(Board.initial()).moves_for_piece(P(4, 1)) == []

    def test_can_continue_capture(self) -> None:
        board = _board(("w", 3, 2), ("b", 2, 3))
        gen = MoveGenerator(board)
        assert gen.can_continue_capture(P(3, 2))
        assert gen.capture_moves_from(P(3, 2)) == [Move(P(3, 2), P(1, 4))]

    def test_cannot_continue_without_victim(self) -> None:
        board = _board(("w", 3, 2), ("b", 0, 7))
        assert not MoveGenerator(board).can_continue_capture(P(3, 2))

    def test_has_moves_false_when_blocked(self) -> None:
        board = board_from_diagram(
            """
            ........
            ........
            ........
            ........
            ........
            ..b.....
            .b......
            w.......
            """
        )
        gen = MoveGenerator(board)
        # The corner man is walled in: its only jump lands on an occupied cell.
        assert not gen.has_moves(Player.WHITE)
        assert gen.has_moves(Player.BLACK)


class TestProperties:
    def _random_playout(self, seed: int, plies: int = 60) -> list[tuple[Board, Player]]:
        rng = random.Random(seed)
        board = Board.initial()
        player = Player.WHITE
        seen = [(board, player)]
        for _ in range(plies):
            moves = MoveGenerator(board).generate_moves(player)
            if not moves:
                break
            board, _ = Rules.apply_capture_chain(board, rng.choice(moves))
            player = player.opposite
            seen.append((board, player))
        return seen

    def test_move_shapes_and_ownership(self) -> None:
        for seed in range(5):
            for board, player in self._random_playout(seed):
                moves = MoveGenerator(board).generate_moves(player)
                has_capture = any(m.is_capture for m in moves)
                for m in moves:
                    piece = board[m.from_pos]
                    assert piece is not None and piece.owner == player
                    d_row = abs(m.to_pos.row - m.from_pos.row)
                    d_col = abs(m.to_pos.column - m.from_pos.column)
                    assert (d_row, d_col) in ((1, 1), (2, 2))
                    if has_capture:
                        assert m.is_capture

    def test_moves_start_on_pieces_and_end_on_empty_cells(self) -> None:
        for seed in range(5):
            for board, player in self._random_playout(seed):
                for m in MoveGenerator(board).generate_moves(player):
                    assert not board.is_empty(m.from_pos)
                    assert board.is_empty(m.to_pos)

    def test_kings_appear_only_via_promotion(self) -> None:
        for board, _player in self._random_playout(11, plies=120):
            for piece in board:
                if piece.kind == PieceKind.MAN:
                    assert piece.position.row != piece.owner.promotion_row
