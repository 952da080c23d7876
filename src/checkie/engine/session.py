"""Engine search session: worker-thread lifecycle and move handoff."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QThread, QTimer, pyqtSignal

from checkie.core.enums import Player
from checkie.core.move import Move
from checkie.engine.qt_bridge import EngineWorker
from checkie.engine.search import Difficulty, IEngine
from checkie.game.controller import GameController
from checkie.game.interfaces import GamePhase
from checkie.game.player import AIPlayer
from checkie.game.state import TurnSnapshot

_LOGGER = logging.getLogger(__name__)


class _EngineCommandBus(QObject):
    """Signal bridge for issuing worker commands with queued delivery."""

    move_requested = pyqtSignal(object, int)
    set_difficulty_requested = pyqtSignal(int)


class EngineSession:
    """Owns worker-thread search lifecycle and move handoff to controller.

    Results are matched twice before they reach the game: the request id
    must be the one still pending here, and the snapshot epoch must match
    the controller's live game (checked by ``apply_automated_move``).
    """

    _REQUEST_DELAY_MS = 50
    _MOVE_APPLY_DELAY_MS = 200
    _MAX_FAILURE_RETRIES = 1

    __slots__ = (
        "__weakref__",
        "_controller",
        "_difficulty",
        "_command_bus",
        "_dispatch_timer",
        "_move_apply_timer",
        "_pending_move",
        "_pending_move_epoch",
        "_engine_thread",
        "_engine_worker",
        "_engine_request_id",
        "_pending_engine_request",
        "_pending_snapshot",
        "_remaining_failure_retries",
        "_is_shutting_down",
        "_is_started",
    )

    def __init__(
        self,
        *,
        controller: GameController,
        parent: QObject | None = None,
        difficulty: Difficulty = Difficulty.MEDIUM,
        engine: IEngine | None = None,
    ) -> None:
        self._controller = controller
        self._difficulty = difficulty

        self._command_bus = _EngineCommandBus(parent)
        self._dispatch_timer = QTimer(parent)
        self._dispatch_timer.setSingleShot(True)
        self._dispatch_timer.timeout.connect(self._emit_pending_request)

        self._move_apply_timer = QTimer(parent)
        self._move_apply_timer.setSingleShot(True)
        self._move_apply_timer.timeout.connect(self._apply_delayed_move)
        self._pending_move: Move | None = None
        self._pending_move_epoch = 0

        self._engine_thread = QThread(parent)
        self._engine_worker = EngineWorker(difficulty=difficulty, engine=engine)
        self._engine_request_id = 0
        self._pending_engine_request: int | None = None
        self._pending_snapshot: TurnSnapshot | None = None
        self._remaining_failure_retries = 0
        self._is_shutting_down = False
        self._is_started = False

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def is_thinking(self) -> bool:
        return self._pending_engine_request is not None or self._pending_move is not None

    def setup(self) -> None:
        """Start engine worker in a dedicated thread and connect callbacks."""
        if self._is_started:
            return
        self._is_shutting_down = False
        self._engine_worker.moveToThread(self._engine_thread)
        self._command_bus.move_requested.connect(self._engine_worker.request_move)
        self._command_bus.set_difficulty_requested.connect(
            self._engine_worker.set_difficulty
        )
        self._engine_worker.best_move_ready.connect(self._on_engine_best_move)
        self._engine_worker.search_cancelled.connect(self._on_engine_cancelled)
        self._engine_worker.search_no_move.connect(self._on_engine_no_move)
        self._engine_worker.search_error.connect(self._on_engine_error)
        self._engine_thread.start()
        self._is_started = True

    def shutdown(self) -> None:
        """Stop active search and shut down the worker thread."""
        if not self._is_started:
            return
        self._is_shutting_down = True
        self.cancel_ai_search()
        self._dispatch_timer.stop()
        self._engine_thread.quit()
        self._engine_thread.wait(2000)
        self._clear_pending_request()
        self._is_started = False

    def set_difficulty(self, difficulty: Difficulty) -> None:
        """Update search depth for subsequent searches."""
        difficulty = Difficulty(difficulty)
        self._difficulty = difficulty
        if self._is_started:
            self._command_bus.set_difficulty_requested.emit(difficulty.depth)
            return
        self._engine_worker.set_difficulty(difficulty.depth)

    def create_ai_player(self, color: Player) -> AIPlayer:
        """Create an AI player wired to this session."""
        return AIPlayer(
            color,
            f"Checkie AI ({self._difficulty})",
            on_request_move=self.request_ai_move,
            on_cancel=self.cancel_ai_search,
        )

    def request_ai_move(self, snapshot: TurnSnapshot) -> None:
        """Queue a best-move search for *snapshot*."""
        if not self._is_started or self._is_shutting_down:
            return
        self._queue_request(snapshot, reset_retry_budget=True)

    def cancel_ai_search(self) -> None:
        """Cancel any pending/active engine request."""
        self._dispatch_timer.stop()
        self._move_apply_timer.stop()
        self._clear_pending_request()
        self._pending_move = None
        # Thread-safe flag; a queued call would wait for the search to end.
        self._engine_worker.cancel()

    def _on_engine_best_move(
        self,
        request_id: int,
        move_obj: object,
        _score: int,
        _nodes: int,
    ) -> None:
        if self._is_shutting_down:
            return
        if request_id != self._pending_engine_request:
            return
        if not isinstance(move_obj, Move):
            return
        snapshot = self._pending_snapshot
        if snapshot is None:
            return

        self._clear_pending_request()
        self._remaining_failure_retries = 0

        # Delay the handoff so the previous move can finish animating.
        self._pending_move = move_obj
        self._pending_move_epoch = snapshot.epoch
        self._move_apply_timer.start(self._MOVE_APPLY_DELAY_MS)

    def _apply_delayed_move(self) -> None:
        """Apply the pending move after the animation delay."""
        if self._is_shutting_down or self._pending_move is None:
            return
        move = self._pending_move
        self._pending_move = None
        self._controller.apply_automated_move(move, self._pending_move_epoch)

    def _on_engine_no_move(self, request_id: int, _score: int) -> None:
        if self._is_shutting_down:
            return
        if request_id != self._pending_engine_request:
            return
        snapshot = self._pending_snapshot
        self._clear_pending_request()
        if snapshot is not None:
            self._controller.apply_automated_move(None, snapshot.epoch)

    def _on_engine_cancelled(self, request_id: int) -> None:
        if self._is_shutting_down:
            return
        if request_id != self._pending_engine_request:
            return
        self._clear_pending_request()
        self._remaining_failure_retries = 0

    def _on_engine_error(self, request_id: int, message: str) -> None:
        if self._is_shutting_down:
            return
        if request_id != self._pending_engine_request:
            return

        snapshot = self._pending_snapshot
        state = self._controller.state
        if snapshot is None or state.phase != GamePhase.AUTOMATED_TURN:
            self._clear_pending_request()
            return

        if self._remaining_failure_retries > 0:
            self._remaining_failure_retries -= 1
            self._queue_request(snapshot, reset_retry_budget=False)
            return

        self._clear_pending_request()
        _LOGGER.error("Engine failed (%s); %s passes", message, snapshot.player)
        self._controller.apply_automated_move(None, snapshot.epoch)

    def _queue_request(self, snapshot: TurnSnapshot, *, reset_retry_budget: bool) -> None:
        self.cancel_ai_search()
        if self._is_shutting_down:
            return

        self._engine_request_id += 1
        self._pending_engine_request = self._engine_request_id
        self._pending_snapshot = snapshot
        if reset_retry_budget:
            self._remaining_failure_retries = self._MAX_FAILURE_RETRIES
        self._dispatch_timer.start(self._REQUEST_DELAY_MS)

    def _emit_pending_request(self) -> None:
        if self._is_shutting_down:
            return

        request_id = self._pending_engine_request
        snapshot = self._pending_snapshot
        if request_id is None or snapshot is None:
            return
        self._command_bus.move_requested.emit(snapshot, request_id)

    def _clear_pending_request(self) -> None:
        self._pending_engine_request = None
        self._pending_snapshot = None
