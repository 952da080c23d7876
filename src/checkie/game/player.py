"""Concrete player implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from checkie.core.enums import Player
from checkie.game.interfaces import IPlayer

if TYPE_CHECKING:
    from checkie.game.state import TurnSnapshot


class HumanPlayer(IPlayer):
    """A human participant — moves come from cell selections.

    ``request_move`` is a no-op because humans select moves interactively.
    """

    __slots__ = ("_color", "_name")

    def __init__(self, color: Player, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Player:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, snapshot: TurnSnapshot) -> None:
        pass  # Human moves arrive via controller.select()

    def cancel(self) -> None:
        pass


class AIPlayer(IPlayer):
    """An AI participant that delegates computation to a callback.

    The search itself is decoupled — ``AIPlayer`` only stores a *bridge*
    callable invoked on ``request_move``. With Qt this is
    :meth:`EngineSession.request_ai_move`, which runs the search in a
    worker thread; headless callers can search synchronously and hand
    the result to ``GameController.apply_automated_move``.

    Args:
        color: Side the AI plays.
        name: Display name.
        on_request_move: ``(TurnSnapshot) -> None`` — called when the
            game controller asks the AI to start thinking.
        on_cancel: ``() -> None`` — called to abort a running search.
    """

    __slots__ = ("_color", "_name", "_on_request_move", "_on_cancel")

    def __init__(
        self,
        color: Player,
        name: str = "Engine",
        on_request_move: Callable[[TurnSnapshot], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self._color = color
        self._name = name
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel

    @property
    def color(self) -> Player:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    def request_move(self, snapshot: TurnSnapshot) -> None:
        if self._on_request_move is not None:
            self._on_request_move(snapshot)

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()
