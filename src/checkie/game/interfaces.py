"""Abstract interfaces and policies for the game layer.

Follows Dependency Inversion: high-level GameController depends on
these ABCs, not on concrete Player implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from checkie.core.enums import Player

if TYPE_CHECKING:
    from checkie.core.move import Move
    from checkie.core.types import Position
    from checkie.game.state import GameState, TurnSnapshot


# ── Turn FSM states ──────────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a draughts game."""

    NOT_STARTED = auto()
    AWAITING_SELECTION = auto()
    PIECE_SELECTED = auto()
    AWAITING_CONTINUATION = auto()  # multi-jump in progress
    AUTOMATED_TURN = auto()  # AI is computing
    GAME_OVER = auto()


# ── Rule-variant policies ────────────────────────────────────────────────────


class ChainPolicy(IntEnum):
    """How the automated side continues a multi-jump."""

    GREEDY = auto()  # first further capture in generation order
    SEARCH = auto()  # ask the engine again for every further jump


class BlockedPolicy(IntEnum):
    """What happens when the side to act has pieces but no legal move."""

    PASS = auto()  # turn passes back; nobody can move -> drawn game
    LOSS = auto()  # blocked side loses


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or AI)."""

    @property
    @abstractmethod
    def color(self) -> Player: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, snapshot: TurnSnapshot) -> None:
        """Begin the move-selection process.

        For humans this is a no-op (they interact via selection).
        For AI this kicks off a search on the immutable *snapshot*.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Cancel an ongoing move computation (AI only, no-op for human)."""


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(
        self,
        white: IPlayer | None = None,
        black: IPlayer | None = None,
    ) -> GameState:
        """Set up a new game (or reset the current one)."""

    @abstractmethod
    def legal_destinations(self, position: Position) -> set[Position]:
        """Cells the piece on *position* may move to right now."""

    @abstractmethod
    def select(self, position: Position) -> GameState:
        """Handle a cell selection from the human side."""

    @abstractmethod
    def move(self, destination: Position) -> GameState:
        """Move the selected piece to *destination*."""

    @abstractmethod
    def apply_automated_move(self, move: Move | None, epoch: int) -> bool:
        """Apply a search result. Returns True if it was accepted."""
