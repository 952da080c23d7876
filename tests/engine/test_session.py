"""Tests for EngineSession request bookkeeping (no worker thread started)."""

from __future__ import annotations

import pytest

from checkie.core.board import Board
from checkie.core.enums import Player
from checkie.core.move import Move
from checkie.core.types import Position
from checkie.engine.search import Difficulty
from checkie.engine.session import EngineSession
from checkie.game.controller import GameController
from checkie.game.interfaces import GamePhase
from checkie.game.player import HumanPlayer

P = Position


@pytest.fixture
def session_and_controller(qapp: object) -> tuple[EngineSession, GameController]:
    del qapp
    ctrl = GameController()
    session = EngineSession(controller=ctrl, difficulty=Difficulty.EASY)
    ctrl.new_game(
        HumanPlayer(Player.WHITE),
        session.create_ai_player(Player.BLACK),
    )
    return session, ctrl


def _hand_to_ai(ctrl: GameController) -> None:
    ctrl.select(P(5, 2))
    ctrl.move(P(4, 3))


def _pending(session: EngineSession, ctrl: GameController, request_id: int = 1) -> None:
    """Pretend a request for the current AI turn is in flight."""
    snapshot = ctrl.automated_snapshot()
    assert snapshot is not None
    session._pending_engine_request = request_id
    session._pending_snapshot = snapshot


class TestEngineSession:
    def test_ai_player_wired(self, session_and_controller) -> None:
        session, ctrl = session_and_controller
        ai = ctrl.player(Player.BLACK)
        assert ai is not None and not ai.is_human
        assert session.difficulty == Difficulty.EASY

    def test_request_ignored_before_setup(self, session_and_controller) -> None:
        session, ctrl = session_and_controller
        _hand_to_ai(ctrl)
        assert ctrl.state.phase == GamePhase.AUTOMATED_TURN
        assert not session.is_thinking

    def test_best_move_applied_after_delay(self, session_and_controller) -> None:
        session, ctrl = session_and_controller
        _hand_to_ai(ctrl)
        _pending(session, ctrl)
        move = Move(P(2, 1), P(3, 2))

        session._on_engine_best_move(1, move, 0, 10)
        assert session.is_thinking
        session._apply_delayed_move()

        assert ctrl.state.last_move == move
        assert ctrl.state.current_player == Player.WHITE
        assert not session.is_thinking

    def test_result_for_old_request_ignored(self, session_and_controller) -> None:
        session, ctrl = session_and_controller
        _hand_to_ai(ctrl)
        _pending(session, ctrl, request_id=4)

        session._on_engine_best_move(3, Move(P(2, 1), P(3, 2)), 0, 10)
        session._apply_delayed_move()

        assert ctrl.state.phase == GamePhase.AUTOMATED_TURN
        assert ctrl.state.last_move == Move(P(5, 2), P(4, 3))

    def test_result_dropped_after_reset(self, session_and_controller) -> None:
        session, ctrl = session_and_controller
        _hand_to_ai(ctrl)
        _pending(session, ctrl)
        session._on_engine_best_move(1, Move(P(2, 1), P(3, 2)), 0, 10)

        # Simulate the reset racing the apply timer.
        pending_move = session._pending_move
        ctrl.new_game()
        session._pending_move = pending_move
        session._apply_delayed_move()

        assert ctrl.state.board == Board.initial()
        assert ctrl.state.current_player == Player.WHITE
        assert ctrl.state.phase == GamePhase.AWAITING_SELECTION

    def test_no_move_passes_turn(self, session_and_controller) -> None:
        session, ctrl = session_and_controller
        _hand_to_ai(ctrl)
        _pending(session, ctrl)

        session._on_engine_no_move(1, 0)

        assert ctrl.state.current_player == Player.WHITE
        assert not session.is_thinking

    def test_cancelled_clears_request(self, session_and_controller) -> None:
        session, ctrl = session_and_controller
        _hand_to_ai(ctrl)
        _pending(session, ctrl)

        session._on_engine_cancelled(1)

        assert not session.is_thinking
        assert ctrl.state.phase == GamePhase.AUTOMATED_TURN

    def test_error_passes_after_retries_exhausted(self, session_and_controller) -> None:
        session, ctrl = session_and_controller
        _hand_to_ai(ctrl)
        _pending(session, ctrl)
        session._remaining_failure_retries = 0

        session._on_engine_error(1, "boom")

        assert ctrl.state.current_player == Player.WHITE

    def test_set_difficulty_before_setup(self, session_and_controller) -> None:
        session, _ctrl = session_and_controller
        session.set_difficulty(Difficulty.HARD)
        assert session.difficulty == Difficulty.HARD
        assert session._engine_worker.limits.max_depth == 5

    def test_set_difficulty_rejects_unknown_level(self, session_and_controller) -> None:
        session, _ctrl = session_and_controller
        with pytest.raises(ValueError):
            session.set_difficulty(2)
        assert session.difficulty == Difficulty.EASY
