"""GameController — the central orchestrator of a draughts game.

Coordinates: Players, GameState, MoveGenerator, Rules.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from checkie.core.board import Board
from checkie.core.enums import Player
from checkie.core.move import Move
from checkie.core.move_generator import MoveGenerator
from checkie.core.rules import Rules, first_capture
from checkie.core.types import Position
from checkie.game.interfaces import (
    BlockedPolicy,
    ChainPolicy,
    GamePhase,
    IGameController,
    IPlayer,
)
from checkie.game.player import HumanPlayer
from checkie.game.state import GameState, TurnSnapshot

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, "GameState"], None]
GameOverCallback = Callable[[Player | None], None]  # winner, None for a draw
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Turn state machine: selection, multi-jump continuation, handoff.

    Thread-safety: every method must be called from a single thread (the
    main/UI thread). Search results computed elsewhere come back through
    :meth:`apply_automated_move`, which checks the snapshot epoch so a
    result computed before a reset is dropped.

    Args:
        chain_policy: How the automated side continues a multi-jump.
        blocked_policy: What a turn with no legal move means.
    """

    __slots__ = (
        "_state",
        "_players",
        "_chain_policy",
        "_blocked_policy",
        "events",
    )

    def __init__(
        self,
        chain_policy: ChainPolicy = ChainPolicy.GREEDY,
        blocked_policy: BlockedPolicy = BlockedPolicy.PASS,
    ) -> None:
        self._state = GameState()
        self._players: dict[Player, IPlayer] = {}
        self._chain_policy = chain_policy
        self._blocked_policy = blocked_policy
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def chain_policy(self) -> ChainPolicy:
        return self._chain_policy

    @property
    def blocked_policy(self) -> BlockedPolicy:
        return self._blocked_policy

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.current_player)

    def player(self, color: Player) -> IPlayer | None:
        return self._players.get(color)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer | None = None,
        black: IPlayer | None = None,
        board: Board | None = None,
        to_move: Player = Player.WHITE,
    ) -> GameState:
        """Start a game; without players, the previous ones are kept."""
        cp = self.current_player
        if cp is not None and not cp.is_human:
            cp.cancel()

        if white is not None:
            self._players[Player.WHITE] = white
        if black is not None:
            self._players[Player.BLACK] = black
        for color in Player:
            self._players.setdefault(color, HumanPlayer(color))

        self._state.setup(board, to_move)
        _LOGGER.debug("New game (epoch %d), %s to move", self._state.epoch, to_move)
        self._begin_turn()
        return self._state

    def legal_destinations(self, position: Position) -> set[Position]:
        if self._state.phase not in (
            GamePhase.AWAITING_SELECTION,
            GamePhase.PIECE_SELECTED,
            GamePhase.AWAITING_CONTINUATION,
        ):
            return set()
        return {m.to_pos for m in self._state.legal_moves_from(position)}

    def select(self, position: Position) -> GameState:
        state = self._state
        phase = state.phase

        if phase == GamePhase.AWAITING_CONTINUATION:
            if position == state.pending_capture:
                state.select_piece(position)
            elif position in state.legal_destinations:
                self._play_human_move(position)
            else:
                _LOGGER.debug("Ignoring %s during multi-jump", position)
            return state

        if phase == GamePhase.PIECE_SELECTED:
            if position == state.selected:
                state.clear_selection()
                self._set_phase(GamePhase.AWAITING_SELECTION)
            elif self._owns(position):
                state.select_piece(position)
            elif position in state.legal_destinations:
                self._play_human_move(position)
            return state

        if phase == GamePhase.AWAITING_SELECTION and self._owns(position):
            state.select_piece(position)
            self._set_phase(GamePhase.PIECE_SELECTED)
        return state

    def move(self, destination: Position) -> GameState:
        state = self._state
        if state.phase not in (
            GamePhase.PIECE_SELECTED,
            GamePhase.AWAITING_CONTINUATION,
        ):
            return state
        if destination not in state.legal_destinations:
            _LOGGER.debug("Rejected destination %s", destination)
            return state
        self._play_human_move(destination)
        return state

    def automated_snapshot(self) -> TurnSnapshot | None:
        """Immutable input for the search, or None if no AI turn is pending."""
        if self._state.phase != GamePhase.AUTOMATED_TURN:
            return None
        return self._state.snapshot()

    def apply_automated_move(self, move: Move | None, epoch: int) -> bool:
        state = self._state
        if epoch != state.epoch:
            _LOGGER.warning(
                "Dropping stale search result for epoch %d (current %d)",
                epoch,
                state.epoch,
            )
            return False
        if state.phase != GamePhase.AUTOMATED_TURN:
            _LOGGER.warning("Search result arrived outside an automated turn")
            return False

        if move is None:
            if state.pending_capture is not None:
                _LOGGER.info("No continuation chosen; finishing jump greedily")
                self._finish_chain_greedily(state.pending_capture)
            else:
                _LOGGER.info("%s has no move; turn passes", state.current_player)
            self._end_turn()
            return True

        if move not in state.legal_moves():
            _LOGGER.warning("Rejected illegal engine move %s", move)
            return False

        was_capture = self._apply_step(move)
        if was_capture and MoveGenerator(state.board).can_continue_capture(move.to_pos):
            if self._chain_policy == ChainPolicy.SEARCH:
                state.pending_capture = move.to_pos
                self._prompt_current_player()
                return True
            self._finish_chain_greedily(move.to_pos)

        self._end_turn()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _owns(self, position: Position) -> bool:
        piece = self._state.board[position]
        return piece is not None and piece.owner == self._state.current_player

    def _apply_step(self, move: Move) -> bool:
        state = self._state
        state.board, was_capture = Rules.apply_move(state.board, move)
        state.last_move = move
        _LOGGER.debug("%s plays %s", state.current_player, move)
        self._emit_move(move)
        return was_capture

    def _play_human_move(self, destination: Position) -> None:
        state = self._state
        origin = state.selected
        if origin is None:
            return
        move = Move(origin, destination)
        was_capture = self._apply_step(move)
        state.clear_selection()

        if was_capture and MoveGenerator(state.board).can_continue_capture(destination):
            state.pending_capture = destination
            state.select_piece(destination)
            self._set_phase(GamePhase.AWAITING_CONTINUATION)
            return

        self._end_turn()

    def _finish_chain_greedily(self, position: Position) -> None:
        current = position
        while True:
            continuations = MoveGenerator(self._state.board).capture_moves_from(current)
            if not continuations:
                return
            step = first_capture(continuations)
            self._apply_step(step)
            current = step.to_pos

    def _end_turn(self) -> None:
        state = self._state
        state.pending_capture = None
        state.clear_selection()

        winner = Rules.evaluate_winner(state.board)
        if winner is not None:
            self._finish(winner)
            return

        mover = state.current_player
        next_player = mover.opposite
        if Rules.is_blocked(state.board, next_player):
            if self._blocked_policy == BlockedPolicy.LOSS:
                _LOGGER.info("%s is blocked and loses", next_player)
                self._finish(mover)
                return
            if Rules.is_blocked(state.board, mover):
                _LOGGER.info("Neither side can move; game drawn")
                self._finish(None)
                return
            blocked = self._players.get(next_player)
            if blocked is None or blocked.is_human:
                _LOGGER.info("%s is blocked; turn passes", next_player)
                next_player = mover

        state.current_player = next_player
        self._begin_turn()

    def _begin_turn(self) -> None:
        cp = self.current_player
        if cp is not None and not cp.is_human:
            self._prompt_current_player()
            return
        self._set_phase(GamePhase.AWAITING_SELECTION)

    def _prompt_current_player(self) -> None:
        """Put the AI side to work on a snapshot of the current turn."""
        self._set_phase(GamePhase.AUTOMATED_TURN)
        cp = self.current_player
        if cp is not None:
            cp.request_move(self._state.snapshot())

    def _finish(self, winner: Player | None) -> None:
        self._state.winner = winner
        _LOGGER.info("Game over: %s", f"{winner} wins" if winner else "draw")
        self._set_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(winner)

    def _set_phase(self, phase: GamePhase) -> None:
        self._state.phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)

    def _emit_move(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, self._state)
