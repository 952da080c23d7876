"""Game state — the single live record the controller mutates."""

from __future__ import annotations

from dataclasses import dataclass, field

from checkie.core.board import Board
from checkie.core.enums import Player
from checkie.core.move import Move
from checkie.core.move_generator import MoveGenerator
from checkie.core.types import Position
from checkie.game.interfaces import GamePhase


@dataclass(frozen=True, slots=True)
class TurnSnapshot:
    """Immutable copy of what a search needs, tagged with the game epoch.

    ``epoch`` identifies the game the snapshot was taken from; a result
    computed for an older epoch must not be applied.
    """

    board: Board
    player: Player
    pending_capture: Position | None
    epoch: int


@dataclass
class GameState:
    """Observable game record: board, turn, continuation and selection.

    This is a pure data class — no threading, no UI. Only
    :class:`~checkie.game.controller.GameController` mutates it.
    """

    board: Board = field(default_factory=Board.initial)
    current_player: Player = Player.WHITE
    pending_capture: Position | None = None
    winner: Player | None = None
    phase: GamePhase = GamePhase.NOT_STARTED
    selected: Position | None = None
    legal_destinations: frozenset[Position] = frozenset()
    last_move: Move | None = None
    epoch: int = 0

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, board: Board | None = None, to_move: Player = Player.WHITE) -> None:
        """Initialise (or reset) the game and advance the epoch."""
        self.board = board if board is not None else Board.initial()
        self.current_player = to_move
        self.pending_capture = None
        self.winner = None
        self.phase = GamePhase.AWAITING_SELECTION
        self.selected = None
        self.legal_destinations = frozenset()
        self.last_move = None
        self.epoch += 1

    # ── Selection helpers ────────────────────────────────────────────────

    def select_piece(self, position: Position) -> None:
        self.selected = position
        self.legal_destinations = frozenset(
            m.to_pos for m in self.legal_moves_from(position)
        )

    def clear_selection(self) -> None:
        self.selected = None
        self.legal_destinations = frozenset()

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def is_draw(self) -> bool:
        return self.is_game_over and self.winner is None

    def legal_moves(self) -> list[Move]:
        """Legal moves for the side to act, honouring a pending multi-jump."""
        gen = MoveGenerator(self.board)
        if self.pending_capture is not None:
            return gen.capture_moves_from(self.pending_capture)
        return gen.generate_moves(self.current_player)

    def legal_moves_from(self, position: Position) -> list[Move]:
        piece = self.board[position]
        if piece is None or piece.owner != self.current_player:
            return []
        if self.pending_capture is not None and position != self.pending_capture:
            return []
        return [m for m in self.legal_moves() if m.from_pos == position]

    def snapshot(self) -> TurnSnapshot:
        return TurnSnapshot(
            board=self.board,
            player=self.current_player,
            pending_capture=self.pending_capture,
            epoch=self.epoch,
        )
