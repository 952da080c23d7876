"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from checkie.engine.minimax import MinimaxEngine
from checkie.engine.search import Difficulty, IEngine, SearchLimits
from checkie.game.state import TurnSnapshot

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Every request carries an id that is echoed back in the result signal,
    so the receiver can drop answers to requests it no longer waits for.
    """

    best_move_ready = pyqtSignal(int, object, int, int)  # id, move, score, nodes
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int, int)  # id, score
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_engine", "_limits")

    def __init__(
        self,
        *,
        difficulty: Difficulty = Difficulty.MEDIUM,
        engine: IEngine | None = None,
    ) -> None:
        super().__init__()
        self._engine: IEngine = engine if engine is not None else MinimaxEngine()
        self._limits = SearchLimits.for_difficulty(difficulty)
        self._cancel_event = threading.Event()

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @pyqtSlot(object, int)
    def request_move(self, snapshot_obj: object, request_id: int) -> None:
        """Search for the best move in *snapshot_obj* and emit result."""
        if not isinstance(snapshot_obj, TurnSnapshot):
            self.search_error.emit(request_id, "Engine received invalid snapshot")
            return

        self._cancel_event.clear()
        try:
            result = self._engine.search(
                snapshot_obj.board,
                snapshot_obj.player,
                self._limits,
                is_cancelled=self._cancel_event.is_set,
                from_position=snapshot_obj.pending_capture,
            )
        except Exception as exc:
            _LOGGER.exception("Engine search failed for request %d", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if result.best_move is None:
            self.search_no_move.emit(request_id, result.score)
            return

        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score,
            result.nodes,
        )

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()

    @pyqtSlot(int)
    def set_difficulty(self, difficulty: int) -> None:
        """Switch to another :class:`Difficulty` (takes effect on the next search).

        Raises:
            ValueError: If *difficulty* is not one of the table depths.
        """
        self._limits = SearchLimits.for_difficulty(Difficulty(difficulty))
