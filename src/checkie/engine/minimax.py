"""Pure-Python draughts search (depth-limited minimax + alpha-beta)."""

from __future__ import annotations

import logging
import random

from checkie.core.board import Board
from checkie.core.enums import PieceKind, Player
from checkie.core.move import Move
from checkie.core.move_generator import MoveGenerator
from checkie.core.rules import Rules
from checkie.core.types import Position
from checkie.engine.search import (
    CancelCheck,
    Difficulty,
    IEngine,
    SearchLimits,
    SearchResult,
)
from checkie.game.state import TurnSnapshot

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = 1_000_000

_PIECE_VALUES: dict[PieceKind, int] = {
    PieceKind.MAN: 1,
    PieceKind.KING: 5,
}


def _never_cancelled() -> bool:
    return False


def evaluate(board: Board, player: Player) -> int:
    """Material balance from *player*'s point of view (man 1, king 5)."""
    score = 0
    for piece in board:
        value = _PIECE_VALUES[piece.kind]
        score += value if piece.owner == player else -value
    return score


def play_turn(board: Board, move: Move) -> Board:
    """Board after *move* and its greedy capture chain.

    One search ply is one whole turn: the mover keeps jumping with the
    first available capture before the opponent gets to move.
    """
    board, _steps = Rules.apply_capture_chain(board, move)
    return board


class MinimaxEngine(IEngine):
    """Depth-limited minimax with a uniformly random pick among best moves.

    Each root move gets an exact value (alpha-beta runs with a full window
    below every root child), so ties at the root are real ties.

    Args:
        rng: Source of the tie-break; pass a seeded ``random.Random`` for
            reproducible games.
    """

    __slots__ = ("_rng", "_nodes", "_stopped", "_cancel_check")

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._nodes = 0
        self._stopped = False
        self._cancel_check: CancelCheck = _never_cancelled

    def best_move(self, board: Board, player: Player, depth: int) -> Move | None:
        """Best move for *player* searched *depth* plies deep, or None."""
        return self.search(board, player, SearchLimits(max_depth=depth)).best_move

    def search(
        self,
        board: Board,
        player: Player,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
        from_position: Position | None = None,
    ) -> SearchResult:
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        self._nodes = 0
        self._cancel_check = is_cancelled or _never_cancelled
        self._stopped = False

        root_moves = self._root_moves(board, player, from_position)
        if not root_moves:
            return SearchResult(None, evaluate(board, player), 0, self._nodes)

        scored: list[tuple[Move, int]] = []
        for move in root_moves:
            if self._should_stop():
                break
            score = self._minimax(
                play_turn(board, move),
                player.opposite,
                limits.max_depth - 1,
                -_INF_SCORE,
                _INF_SCORE,
                player,
            )
            if self._stopped:
                # Cut off mid-search; the partial score is not comparable.
                break
            scored.append((move, score))

        if not scored:
            # Stopped before the first root move finished.
            return SearchResult(root_moves[0], evaluate(board, player), 0, self._nodes)

        best_score = max(score for _move, score in scored)
        candidates = tuple(move for move, score in scored if score == best_score)
        best_move = self._rng.choice(candidates)
        _LOGGER.debug(
            "%s: %d/%d root moves tie at %d after %d nodes",
            player,
            len(candidates),
            len(root_moves),
            best_score,
            self._nodes,
        )
        return SearchResult(
            best_move,
            best_score,
            limits.max_depth,
            self._nodes,
            candidates,
        )

    # ── Internals ────────────────────────────────────────────────────────

    @staticmethod
    def _root_moves(
        board: Board,
        player: Player,
        from_position: Position | None,
    ) -> list[Move]:
        gen = MoveGenerator(board)
        if from_position is None:
            return gen.generate_moves(player)
        piece = board[from_position]
        if piece is None or piece.owner != player:
            return []
        return gen.capture_moves_from(from_position)

    def _minimax(
        self,
        board: Board,
        to_move: Player,
        depth: int,
        alpha: int,
        beta: int,
        root_player: Player,
    ) -> int:
        self._nodes += 1
        if depth <= 0 or self._should_stop():
            return evaluate(board, root_player)
        if Rules.evaluate_winner(board) is not None:
            return evaluate(board, root_player)

        moves = MoveGenerator(board).generate_moves(to_move)
        if not moves:
            return evaluate(board, root_player)

        if to_move == root_player:
            value = -_INF_SCORE
            for move in moves:
                score = self._minimax(
                    play_turn(board, move),
                    to_move.opposite,
                    depth - 1,
                    alpha,
                    beta,
                    root_player,
                )
                value = max(value, score)
                alpha = max(alpha, value)
                if alpha >= beta:
                    break
            return value

        value = _INF_SCORE
        for move in moves:
            score = self._minimax(
                play_turn(board, move),
                to_move.opposite,
                depth - 1,
                alpha,
                beta,
                root_player,
            )
            value = min(value, score)
            beta = min(beta, value)
            if alpha >= beta:
                break
        return value

    def _should_stop(self) -> bool:
        if not self._stopped and self._cancel_check():
            self._stopped = True
        return self._stopped


def request_automated_move(
    snapshot: TurnSnapshot,
    difficulty: Difficulty = Difficulty.MEDIUM,
    engine: IEngine | None = None,
) -> Move | None:
    """Search *snapshot* synchronously and return the move to play.

    The caller hands the result back with
    ``controller.apply_automated_move(move, snapshot.epoch)``.
    """
    engine = engine if engine is not None else MinimaxEngine()
    result = engine.search(
        snapshot.board,
        snapshot.player,
        SearchLimits.for_difficulty(difficulty),
        from_position=snapshot.pending_capture,
    )
    return result.best_move
